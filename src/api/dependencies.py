from datetime import timedelta

from fastapi import Depends, Request

from adapter.mongodb.connection import get_mongodb_client
from adapter.mongodb.user_repository import MongoUserRepository
from adapter.security.bcrypt_hasher import BcryptPasswordHasher
from adapter.security.jwt_token_issuer import JwtTokenIssuer
from api.config import Settings
from domain.model.errors import InternalError
from port.password_hasher import PasswordHasher
from port.token_issuer import TokenIssuer
from port.user_repository import UserRepository


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def _get_db(settings: Settings):
    """Get MongoDB database, raising InternalError (500) if unavailable."""
    client = get_mongodb_client(settings.mongo_url)
    if client is None:
        raise InternalError("Database unavailable")
    return client[settings.database_name]


def get_user_repo(settings: Settings = Depends(get_settings)) -> UserRepository:
    return MongoUserRepository(_get_db(settings))


def get_password_hasher(settings: Settings = Depends(get_settings)) -> PasswordHasher:
    return BcryptPasswordHasher(rounds=settings.bcrypt_rounds)


def get_token_issuer(settings: Settings = Depends(get_settings)) -> TokenIssuer:
    return JwtTokenIssuer(
        settings.jwt_secret,
        expiration=timedelta(days=settings.jwt_expiration_days),
    )
