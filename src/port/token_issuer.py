from typing import Protocol

from domain.model.session import TokenClaims


class TokenIssuer(Protocol):
    def issue(self, user_id: str) -> str:
        """Return a signed, time-limited bearer token for user_id."""
        ...

    def verify(self, token: str) -> TokenClaims:
        """Return the token's claims. Raises AuthError if invalid or expired."""
        ...
