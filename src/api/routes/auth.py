"""Authentication routes (sign-up, sign-in, token verification)."""

import logging

from fastapi import APIRouter, Depends, status

from api.dependencies import get_password_hasher, get_token_issuer, get_user_repo
from api.models import (
    AuthResponse,
    SignInRequest,
    SignUpRequest,
    UserResponse,
    UserSummary,
    VerifyResponse,
)
from api.security import get_current_user_required
from domain.model.user import User
from port.password_hasher import PasswordHasher
from port.token_issuer import TokenIssuer
from port.user_repository import UserRepository
from services import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    request: SignUpRequest,
    repo: UserRepository = Depends(get_user_repo),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer),
):
    """Register a new user and return a token.

    Raises:
        ValidationError (400): missing field, mismatch, short password
        ConflictError (400): email already registered
    """
    result = auth_service.sign_up(
        repo,
        hasher,
        tokens,
        full_name=request.full_name,
        email=request.email,
        password=request.password,
        confirm_password=request.confirm_password,
    )
    return AuthResponse(
        message="User created successfully",
        token=result.token,
        user=UserSummary.from_domain(result.user),
    )


@router.post("/signin", response_model=AuthResponse)
async def signin(
    request: SignInRequest,
    repo: UserRepository = Depends(get_user_repo),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer),
):
    """Sign in and return a token. Bad credentials give a generic 400."""
    result = auth_service.sign_in(
        repo,
        hasher,
        tokens,
        email=request.email,
        password=request.password,
    )
    return AuthResponse(
        message="Sign in successful",
        token=result.token,
        user=UserSummary.from_domain(result.user),
    )


@router.get("/verify", response_model=VerifyResponse)
async def verify(current_user: User = Depends(get_current_user_required)):
    """Confirm the bearer token is valid and return the user it belongs to."""
    return VerifyResponse(valid=True, user=UserResponse.from_domain(current_user))
