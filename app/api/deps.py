"""Shared FastAPI dependencies: store access, signing keys, authentication gate, role checks."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import Settings, SigningKeys
from app.core.database import get_db
from app.core.errors import InsufficientRoleError, InvalidTokenError, UnauthenticatedError
from app.models.user import Role
from app.schemas.auth import CurrentUser
from app.services.auth import authenticate_access_token, ensure_role
from app.services.user_store import UserStore

security = HTTPBearer(auto_error=False)

_BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_signing_keys(request: Request) -> SigningKeys:
    return request.app.state.signing_keys


def get_user_store(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> UserStore:
    return UserStore(db, bcrypt_rounds=settings.BCRYPT_ROUNDS)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    store: Annotated[UserStore, Depends(get_user_store)],
    keys: Annotated[SigningKeys, Depends(get_signing_keys)],
) -> CurrentUser:
    """Dependency: require valid Bearer access token and return the current user. Raises 401 otherwise."""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers=_BEARER_CHALLENGE,
        )
    try:
        user = authenticate_access_token(store, keys, credentials.credentials)
    except (InvalidTokenError, UnauthenticatedError) as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers=_BEARER_CHALLENGE,
        ) from e
    return CurrentUser.model_validate(user)


def require_roles(*roles: Role) -> Callable[[CurrentUser], CurrentUser]:
    """Build a dependency that lets through only users holding one of roles. Raises 403 otherwise."""
    allowed = frozenset(roles)

    def _require(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        try:
            ensure_role(current_user.role, allowed)
        except InsufficientRoleError as e:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=e.message,
            ) from e
        return current_user

    return _require


require_admin = require_roles(Role.ADMIN)
require_writer = require_roles(Role.ADMIN, Role.EDITOR)
