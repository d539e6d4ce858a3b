"""Auth service: sign-up, sign-in and token verification.

Pure business logic with no HTTP dependencies.
Raises domain errors that the API layer maps to HTTP status codes.

Sign-up flow: validate → uniqueness check → hash → persist → issue token
Sign-in flow: lookup → verify password → touch last_login → issue token
"""

import logging

from domain.model.errors import (
    AuthError,
    ConflictError,
    InternalError,
    InvalidCredentialsError,
    ValidationError,
)
from domain.model.session import AuthResult
from domain.model.user import User, normalize_email
from port.password_hasher import PasswordHasher
from port.token_issuer import TokenIssuer
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
# bcrypt only looks at the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _validate_sign_up(full_name: str | None, email: str | None,
                      password: str | None, confirm_password: str | None) -> None:
    # Passwords are taken as typed, so only emptiness counts as missing
    if _is_blank(full_name) or _is_blank(email) or not password or not confirm_password:
        raise ValidationError("Please fill in all fields")
    if password != confirm_password:
        raise ValidationError("Passwords do not match")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if len(password.encode('utf-8')) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")


def sign_up(
    repo: UserRepository,
    hasher: PasswordHasher,
    tokens: TokenIssuer,
    full_name: str | None,
    email: str | None,
    password: str | None,
    confirm_password: str | None,
) -> AuthResult:
    """Register a new user and issue a session token.

    Raises:
        ValidationError: missing field, password mismatch, too short or too long
        ConflictError: email already registered (pre-check or unique index)
        InternalError: store failure
    """
    _validate_sign_up(full_name, email, password, confirm_password)
    email = normalize_email(email)

    try:
        existing = repo.get_by_email(email)
    except InternalError as e:
        raise InternalError("Server error during signup") from e
    if existing:
        logger.info("Sign-up rejected: email already registered", extra={"email": email})
        raise ConflictError("User already exists with this email")

    password_hash = hasher.hash(password)

    # A concurrent sign-up that passed the pre-check is caught by the unique index
    user = repo.create(email=email, password_hash=password_hash, full_name=full_name.strip())
    if not user:
        raise InternalError("Server error during signup")

    token = tokens.issue(user.id)
    logger.info("User registered", extra={"userId": user.id, "email": email})
    return AuthResult(token=token, user=user)


def sign_in(
    repo: UserRepository,
    hasher: PasswordHasher,
    tokens: TokenIssuer,
    email: str | None,
    password: str | None,
) -> AuthResult:
    """Authenticate by email and password and issue a session token.

    Unknown email and wrong password produce the same AuthError so callers
    cannot probe which accounts exist. A store outage is an InternalError,
    not a failed login.
    """
    if _is_blank(email) or not password:
        raise ValidationError("Please provide email and password")
    email = normalize_email(email)

    try:
        user = repo.get_by_email(email)
    except InternalError as e:
        raise InternalError("Server error during signin") from e
    if not user or not hasher.verify(password, user.password_hash):
        logger.info("Sign-in rejected", extra={"email": email})
        raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

    # Sign-in still succeeds if the timestamp write fails
    if not repo.update_last_login(user.id):
        logger.warning("Failed to record last_login", extra={"userId": user.id})

    try:
        user = repo.get_by_id(user.id) or user
    except InternalError:
        logger.warning("Could not reload user after sign-in", extra={"userId": user.id})
    token = tokens.issue(user.id)
    logger.info("User signed in", extra={"userId": user.id})
    return AuthResult(token=token, user=user)


def verify(repo: UserRepository, tokens: TokenIssuer, token: str) -> User:
    """Resolve a bearer token to its user.

    Raises:
        AuthError: bad signature, malformed or expired token, or user gone
        InternalError: the store could not be read
    """
    claims = tokens.verify(token)
    user = repo.get_by_id(claims.user_id)
    if not user:
        logger.info("Token references missing user", extra={"userId": claims.user_id})
        raise AuthError("Token is not valid")
    return user
