"""Pydantic request/response schemas."""

from app.schemas.article import ArticleCreate, ArticleResponse
from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RefreshRequest,
    RefreshResponse,
    RegisterRequest,
    UsersListResponse,
)
from app.schemas.health import HealthResponse

__all__ = [
    "ArticleCreate",
    "ArticleResponse",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "RefreshRequest",
    "RefreshResponse",
    "RegisterRequest",
    "UsersListResponse",
]
