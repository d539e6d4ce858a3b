from dataclasses import dataclass
from datetime import datetime

from domain.model.user import User


@dataclass(frozen=True)
class TokenClaims:
    """Decoded payload of a session token. Never persisted server-side."""
    user_id: str
    issued_at: datetime
    expires_at: datetime


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a successful sign-up or sign-in."""
    token: str
    user: User
