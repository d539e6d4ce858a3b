from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Literal

Gender = Literal['male', 'female', 'other']

GENDERS: tuple[str, ...] = ('male', 'female', 'other')

# Attributes a user may change through the profile update path.
# password_hash, email, id and the timestamps are deliberately absent.
PROFILE_FIELDS: tuple[str, ...] = (
    'full_name',
    'age',
    'date_of_birth',
    'gender',
    'hobbies',
    'mother_name',
    'father_name',
    'user_mobile',
    'parent_mobile',
    'description',
)


def normalize_email(email: str) -> str:
    """Canonical form used for storage and every lookup (case-insensitive)."""
    return email.strip().lower()


@dataclass
class User:
    """Domain model representing a registered user and their profile."""
    id: str
    full_name: str
    email: str
    created_at: datetime
    updated_at: datetime
    last_login: datetime | None = None
    password_hash: str | None = None
    age: int | None = None
    date_of_birth: date | None = None
    gender: Gender | None = None
    hobbies: list[str] = field(default_factory=list)
    mother_name: str | None = None
    father_name: str | None = None
    user_mobile: str | None = None
    parent_mobile: str | None = None
    description: str | None = None
