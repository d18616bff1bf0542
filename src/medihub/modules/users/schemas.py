"""Pydantic schemas for user operations."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from medihub.core.constants import (
    MAX_ID_LENGTH,
    MAX_PASSWORD_LENGTH,
    MAX_SPECIALTY_LENGTH,
    MAX_USERNAME_LENGTH,
    MIN_PASSWORD_LENGTH,
)


class UserBase(BaseModel):
    """Base schema for user data."""

    username: str = Field(..., min_length=1, max_length=MAX_USERNAME_LENGTH)
    role_id: str = Field(..., min_length=1, max_length=MAX_ID_LENGTH)
    specialty: str | None = Field(None, max_length=MAX_SPECIALTY_LENGTH)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Username cannot be blank")
        return v

    @field_validator("specialty")
    @classmethod
    def blank_specialty_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class UserCreate(UserBase):
    """Schema for creating a user."""

    password: str = Field(
        ..., min_length=MIN_PASSWORD_LENGTH, max_length=MAX_PASSWORD_LENGTH
    )


class UserUpdate(UserBase):
    """Schema for updating a user.

    The password is only changed when one is given.
    """

    password: str | None = Field(
        None, min_length=MIN_PASSWORD_LENGTH, max_length=MAX_PASSWORD_LENGTH
    )


class UserResponse(BaseModel):
    """Schema for user response data. Never includes the password hash."""

    id: str
    username: str
    role_id: str
    role_name: str | None = None
    specialty: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
