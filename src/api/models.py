"""Pydantic models for API request/response.

Wire names are camelCase; Python attributes stay snake_case.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from domain.model.user import Gender, User


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── requests ────────────────────────────────────────────────

class SignUpRequest(ApiModel):
    """Request model for sign-up. Presence is checked by the auth service."""
    full_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    confirm_password: Optional[str] = None


class SignInRequest(ApiModel):
    """Request model for sign-in."""
    email: Optional[str] = None
    password: Optional[str] = None


class ProfileUpdateRequest(ApiModel):
    """Partial profile update. Only keys present in the body are applied.

    Unknown keys (password, passwordHash, email, ...) are ignored.
    """
    full_name: Optional[str] = None
    age: Optional[int] = Field(None, ge=0, le=150)
    date_of_birth: Optional[date] = Field(
        None,
        validation_alias=AliasChoices("dateOfBirth", "dob", "date_of_birth"),
    )
    gender: Optional[Gender] = None
    hobbies: Optional[list[str]] = None
    mother_name: Optional[str] = None
    father_name: Optional[str] = None
    user_mobile: Optional[str] = None
    parent_mobile: Optional[str] = None
    description: Optional[str] = None

    @field_validator("age", "date_of_birth", "gender", mode="before")
    @classmethod
    def empty_string_clears(cls, v):
        """HTML forms send '' for untouched inputs."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def changes(self) -> dict:
        """Fields the client actually sent, keyed by domain attribute name."""
        return self.model_dump(exclude_unset=True)


# ── responses ───────────────────────────────────────────────

class UserSummary(ApiModel):
    """Short user view returned with a fresh token."""
    id: str
    full_name: str
    email: str

    @classmethod
    def from_domain(cls, user: User) -> "UserSummary":
        return cls(id=user.id, full_name=user.full_name, email=user.email)


class UserResponse(ApiModel):
    """Full public view of a user record (never includes the password hash)."""
    id: str
    full_name: str
    email: str
    age: Optional[int] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    hobbies: list[str] = Field(default_factory=list)
    mother_name: Optional[str] = None
    father_name: Optional[str] = None
    user_mobile: Optional[str] = None
    parent_mobile: Optional[str] = None
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    last_login: Optional[datetime] = None

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            full_name=user.full_name,
            email=user.email,
            age=user.age,
            date_of_birth=user.date_of_birth,
            gender=user.gender,
            hobbies=list(user.hobbies or []),
            mother_name=user.mother_name,
            father_name=user.father_name,
            user_mobile=user.user_mobile,
            parent_mobile=user.parent_mobile,
            description=user.description,
            created_at=user.created_at,
            updated_at=user.updated_at,
            last_login=user.last_login,
        )


class AuthResponse(ApiModel):
    """Response model for sign-up and sign-in."""
    message: str
    token: str
    user: UserSummary


class VerifyResponse(ApiModel):
    valid: bool = True
    user: UserResponse


class ProfileUpdateResponse(ApiModel):
    message: str
    user: UserResponse


class MessageResponse(ApiModel):
    """Body of every error response."""
    message: str
