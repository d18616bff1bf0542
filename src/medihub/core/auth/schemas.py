"""Authentication schemas for sessions and login."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from medihub.core.constants import (
    MAX_PASSWORD_LENGTH,
    MAX_USERNAME_LENGTH,
    MIN_PASSWORD_LENGTH,
)


class TokenData(BaseModel):
    """Claims extracted from a signed session token.

    Attributes:
        user_id: The user's identifier
        username: Login name at the time the token was issued
        role_id: Role identifier at the time the token was issued
        role_name: Role display name at the time the token was issued
        exp: Token expiration time
        type: Token type, always "session"
    """

    user_id: str
    username: str
    role_id: str
    role_name: str | None = None
    exp: datetime
    type: str = "session"
    jti: str | None = None


class SessionData(BaseModel):
    """Per-request identity.

    An anonymous session only carries ``is_logged_in=False``.
    """

    model_config = ConfigDict(frozen=True)

    is_logged_in: bool = False
    user_id: str | None = None
    username: str | None = None
    role_id: str | None = None
    role_name: str | None = None


ANONYMOUS_SESSION = SessionData()


class LoginRequest(BaseModel):
    """Schema for username/password login."""

    username: str = Field(..., min_length=1, max_length=MAX_USERNAME_LENGTH)
    password: str = Field(..., min_length=1, max_length=MAX_PASSWORD_LENGTH)


class ChangePasswordRequest(BaseModel):
    """Schema for changing the current user's password."""

    current_password: str = Field(..., min_length=1)
    new_password: str = Field(
        ..., min_length=MIN_PASSWORD_LENGTH, max_length=MAX_PASSWORD_LENGTH
    )


class SessionResponse(BaseModel):
    """The current session plus what it is allowed to do."""

    is_logged_in: bool
    user_id: str | None = None
    username: str | None = None
    role_id: str | None = None
    role_name: str | None = None
    permissions: list[str] = []
