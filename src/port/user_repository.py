from typing import Any, Protocol

from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Emails passed in are already normalized by the caller.
    """
    def create(self, email: str, password_hash: str, full_name: str) -> User | None:
        """Create a new user. Return User or None if the store failed.

        Raises ConflictError if the email is already registered.
        """
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found.

        Raises InternalError if the store cannot be read.
        """
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found.

        Raises InternalError if the store cannot be read.
        """
        ...

    def update_last_login(self, user_id: str) -> bool:
        """Update the last login timestamp for a user. Return True if successful."""
        ...

    def update_profile(self, user_id: str, fields: dict[str, Any]) -> User | None:
        """Overwrite the given profile fields. Return the updated User or None."""
        ...
