"""Pydantic schemas for user endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.models.user import ValidRole

MAX_PASSWORD_BYTES = 72  # bcrypt input limit


def _check_password_length(value: str | None) -> str | None:
    if value is not None and len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


class UserCreate(BaseModel):
    email: str = Field(min_length=3, max_length=256, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    name: str = Field(min_length=1, max_length=256)
    password: str = Field(min_length=6)
    roles: list[ValidRole] | None = Field(default=None, min_length=1)

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str | None) -> str | None:
        return _check_password_length(v)


class UserUpdate(BaseModel):
    email: str | None = Field(default=None, min_length=3, max_length=256, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    name: str | None = Field(default=None, min_length=1, max_length=256)
    password: str | None = Field(default=None, min_length=6)
    roles: list[ValidRole] | None = Field(default=None, min_length=1)

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str | None) -> str | None:
        return _check_password_length(v)


class UserPublic(BaseModel):
    """User as returned on registration: no password hash, no active flag."""

    id: str
    email: str
    name: str
    roles: list[str]

    model_config = {"from_attributes": True}


class UserResponse(UserPublic):
    is_active: bool
    created_at: datetime
    updated_at: datetime


class PaginatedUsers(BaseModel):
    items: list[UserResponse]
    total: int
    current_page: int
    total_pages: int
