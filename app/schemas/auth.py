"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)
from app.models.user import Role


class CamelModel(BaseModel):
    """Serializes with camelCase keys; accepts camelCase or snake_case input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LoginRequest(BaseModel):
    """Credentials for login. Surrounding whitespace is trimmed from the username only."""

    username: str = Field(
        ..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN, description="Username"
    )
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v


class RegisterRequest(LoginRequest):
    """New account. role is optional; unrecognized values fall back to editor."""

    role: str | None = Field(default=None, max_length=32, description="admin or editor")


class RefreshRequest(CamelModel):
    refresh_token: str | None = Field(default=None, description="Refresh token from login")


class CurrentUser(BaseModel):
    """Authenticated user (id, username, role) for dependency injection."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    role: Role


class LoginResponse(CamelModel):
    """Token pair returned after successful login."""

    access_token: str = Field(..., description="JWT access token (1 hour)")
    refresh_token: str = Field(..., description="JWT refresh token (7 days)")
    user: CurrentUser


class RefreshResponse(CamelModel):
    access_token: str = Field(..., description="New JWT access token")


class MessageResponse(BaseModel):
    message: str


class UsersListResponse(BaseModel):
    """Response for GET /auth/users (admin only)."""

    users: list[CurrentUser]
