"""Profile service: read and partially update the authenticated user's record.

The caller's identity comes from a verified token, so there is no ownership
check beyond looking the user up by that id.
"""

import logging
from datetime import date, datetime
from typing import Any

from domain.model.errors import InternalError, NotFoundError, ValidationError
from domain.model.user import GENDERS, PROFILE_FIELDS, User
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

MAX_AGE = 150

_STRING_FIELDS = (
    'full_name',
    'mother_name',
    'father_name',
    'user_mobile',
    'parent_mobile',
    'description',
)


def get_profile(repo: UserRepository, user_id: str) -> User:
    """Return the user's full record.

    Raises:
        NotFoundError: no record for this identity
        InternalError: the store could not be read
    """
    try:
        user = repo.get_by_id(user_id)
    except InternalError as e:
        raise InternalError("Error fetching profile") from e
    if not user:
        raise NotFoundError("User not found")
    return user


def _clean_field(key: str, value: Any) -> Any:
    """Check one profile value against its type. None clears the field."""
    if key == 'full_name':
        if not isinstance(value, str) or not value.strip():
            raise ValidationError("Full name cannot be empty")
        return value.strip()

    if value is None:
        return [] if key == 'hobbies' else None

    if key in _STRING_FIELDS:
        if not isinstance(value, str):
            raise ValidationError(f"Invalid value for {key}")
        return value

    if key == 'age':
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= MAX_AGE:
            raise ValidationError("Age must be a whole number between 0 and 150")
        return value

    if key == 'date_of_birth':
        if isinstance(value, datetime) or not isinstance(value, date):
            raise ValidationError("Invalid date of birth")
        return value

    if key == 'gender':
        if value not in GENDERS:
            raise ValidationError(f"Gender must be one of: {', '.join(GENDERS)}")
        return value

    if key == 'hobbies':
        if not isinstance(value, (list, tuple, set)) or not all(isinstance(h, str) for h in value):
            raise ValidationError("Hobbies must be a list of strings")
        # Set semantics, first occurrence wins the position; values kept as sent
        return list(dict.fromkeys(value))

    raise ValidationError(f"Unknown profile field: {key}")


def update_profile(repo: UserRepository, user_id: str, fields: dict[str, Any]) -> User:
    """Apply a partial update and return the updated user.

    Only whitelisted profile keys are written; anything else (password,
    password_hash, email, id, timestamps) is dropped. Last write wins.

    Raises:
        ValidationError: a value has the wrong type or full_name is blank
        NotFoundError: no record for this identity
        InternalError: store failure
    """
    ignored = sorted(k for k in fields if k not in PROFILE_FIELDS)
    if ignored:
        logger.info("Ignoring non-profile fields in update", extra={"userId": user_id, "fields": ignored})

    cleaned = {k: _clean_field(k, v) for k, v in fields.items() if k in PROFILE_FIELDS}

    try:
        current = repo.get_by_id(user_id)
    except InternalError as e:
        raise InternalError("Error updating profile") from e
    if not current:
        raise NotFoundError("User not found")

    if not cleaned:
        return current

    user = repo.update_profile(user_id, cleaned)
    if not user:
        raise InternalError("Error updating profile")
    return user
