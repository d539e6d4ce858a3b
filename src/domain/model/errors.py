"""Domain-level exceptions.

Services raise these errors to express business rule violations.
The HTTP layer maps them to status codes in one place (api/errors.py).
"""


class DomainError(Exception):
    """Base class for all domain errors."""

    def __init__(self, message: str = "Something went wrong"):
        self.message = message
        super().__init__(message)


class ValidationError(DomainError):
    """Input is missing, malformed or violates a business validation rule."""


class ConflictError(DomainError):
    """Entity with the same unique key already exists."""


class AuthError(DomainError):
    """Bad credentials, or an invalid or expired token."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class InternalError(DomainError):
    """Store failure or another unexpected condition."""


class InvalidCredentialsError(AuthError):
    """Sign-in with an unknown email or a wrong password.

    Deliberately one type for both cases so nothing reveals which was wrong.
    """
