"""Registration, login, token refresh and current-user endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import (
    get_current_user,
    get_signing_keys,
    get_user_store,
    require_admin,
)
from app.api.limiter import throttle_login
from app.core.config import SigningKeys
from app.core.errors import (
    DuplicateUsernameError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
)
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
from app.services import auth as auth_service
from app.services.user_store import UserStore

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/register",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(
    body: RegisterRequest,
    store: Annotated[UserStore, Depends(get_user_store)],
) -> MessageResponse:
    """Create an account. role defaults to editor when omitted or unrecognized."""
    try:
        store.create_user(body.username, body.password, body.role)
    except DuplicateUsernameError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    return MessageResponse(message="User created successfully")


@router.post(
    "/login",
    response_model=LoginResponse,
    dependencies=[Depends(throttle_login)],
)
def login(
    body: LoginRequest,
    store: Annotated[UserStore, Depends(get_user_store)],
    keys: Annotated[SigningKeys, Depends(get_signing_keys)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns an access and a refresh token.
    Send the access token as: Authorization: Bearer <accessToken>.
    Logging in again replaces the previous refresh token.
    """
    try:
        result = auth_service.login(store, keys, body.username, body.password)
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
        ) from e
    return LoginResponse(
        access_token=result.access_token,
        refresh_token=result.refresh_token,
        user=CurrentUser.model_validate(result.user),
    )


@router.post("/refresh", response_model=RefreshResponse)
def refresh(
    store: Annotated[UserStore, Depends(get_user_store)],
    keys: Annotated[SigningKeys, Depends(get_signing_keys)],
    body: RefreshRequest | None = None,
) -> RefreshResponse:
    """
    Exchange the refresh token from the latest login for a new access token.
    401 when no token is sent; 403 when it is invalid, expired or superseded.
    """
    token = body.refresh_token if body is not None else None
    try:
        access_token = auth_service.refresh_access_token(store, keys, token)
    except MissingTokenError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message) from e
    except InvalidTokenError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message) from e
    return RefreshResponse(access_token=access_token)


@router.get("/me", response_model=CurrentUser)
def me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    return current_user


@router.get("/users", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    store: Annotated[UserStore, Depends(get_user_store)],
) -> UsersListResponse:
    """List all users (admin only)."""
    return UsersListResponse(
        users=[CurrentUser.model_validate(u) for u in store.list_users()]
    )
