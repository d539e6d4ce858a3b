"""JWT implementation of TokenIssuer (python-jose, HS256)."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from jose import JWTError, jwt

from domain.model.errors import AuthError
from domain.model.session import TokenClaims

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
JWT_EXPIRATION_DAYS = 7

INVALID_TOKEN_MESSAGE = "Token is not valid"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JwtTokenIssuer:
    """Issues and verifies stateless bearer tokens.

    The secret is handed in at construction; rotating it invalidates every
    outstanding token. Expiry is checked against the injected clock so a
    token issued at T is accepted strictly before T + expiration.
    """

    def __init__(
        self,
        secret: str,
        expiration: timedelta = timedelta(days=JWT_EXPIRATION_DAYS),
        algorithm: str = JWT_ALGORITHM,
        clock: Callable[[], datetime] = _utcnow,
    ):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self.expiration = expiration
        self.algorithm = algorithm
        self._clock = clock

    def issue(self, user_id: str) -> str:
        """Create a signed token for user_id."""
        issued_at = int(self._clock().timestamp())
        payload = {
            "sub": user_id,
            "iat": issued_at,
            "exp": issued_at + int(self.expiration.total_seconds()),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Check signature and expiry. Raises AuthError on any failure."""
        try:
            # Expiry is enforced below against our own clock.
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JWTError as e:
            logger.debug(f"JWT verification failed: {e}")
            raise AuthError(INVALID_TOKEN_MESSAGE)

        user_id = payload.get("sub")
        issued_at = payload.get("iat")
        expires_at = payload.get("exp")
        if not isinstance(user_id, str) or not isinstance(issued_at, int) or not isinstance(expires_at, int):
            raise AuthError(INVALID_TOKEN_MESSAGE)

        if self._clock().timestamp() >= expires_at:
            logger.debug("JWT expired", extra={"userId": user_id})
            raise AuthError(INVALID_TOKEN_MESSAGE)

        return TokenClaims(
            user_id=user_id,
            issued_at=datetime.fromtimestamp(issued_at, timezone.utc),
            expires_at=datetime.fromtimestamp(expires_at, timezone.utc),
        )
