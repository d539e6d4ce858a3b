"""Bearer-token authentication gate for protected routes."""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.dependencies import get_token_issuer, get_user_repo
from domain.model.errors import AuthError
from domain.model.user import User
from port.token_issuer import TokenIssuer
from port.user_repository import UserRepository
from services import auth_service


NO_TOKEN_MESSAGE = "No token, authorization denied"

security = HTTPBearer(auto_error=False)


def get_current_user_required(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    repo: UserRepository = Depends(get_user_repo),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> User:
    """Resolve the request's bearer token to a User. Raises AuthError (401).

    FastAPI caches this dependency per request, so the user is looked up at
    most once per request and never reused across requests.
    """
    if not credentials or not credentials.credentials:
        raise AuthError(NO_TOKEN_MESSAGE)

    return auth_service.verify(repo, tokens, credentials.credentials)
