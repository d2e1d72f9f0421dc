"""Login, refresh and access-token authentication on top of the credential store."""

import hmac
import logging
from collections.abc import Collection
from dataclasses import dataclass

import jwt

from app.core.config import SigningKeys
from app.core.errors import (
    InsufficientRoleError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    UnauthenticatedError,
)
from app.core.security import (
    create_access_token,
    create_refresh_token,
    decode_access_token,
    decode_refresh_token,
    verify_password,
)
from app.models.user import Role, User
from app.services.user_store import UserStore

logger = logging.getLogger(__name__)


@dataclass
class LoginResult:
    access_token: str
    refresh_token: str
    user: User


def issue_access_token(keys: SigningKeys, user: User) -> str:
    return create_access_token(keys, user.id, user.username, user.role.value)


def login(store: UserStore, keys: SigningKeys, username: str, password: str) -> LoginResult:
    """
    Check credentials and issue an access/refresh token pair.

    The new refresh token replaces the stored one, so any refresh token from an
    earlier login for this user stops working. Always runs bcrypt, against a
    dummy hash when the user is unknown.
    """
    user = store.find_by_username(username)
    if user is None:
        verify_password(password, store.dummy_hash)
        logger.info("Login failed: unknown user")
        raise InvalidCredentialsError()
    if not verify_password(password, user.password_hash):
        logger.info("Login failed: bad password for user_id=%s", user.id)
        raise InvalidCredentialsError()

    access_token = issue_access_token(keys, user)
    refresh_token = create_refresh_token(keys, user.id)
    user.refresh_token = refresh_token
    store.save(user)

    logger.info("Login succeeded for user_id=%s", user.id)
    return LoginResult(access_token=access_token, refresh_token=refresh_token, user=user)


def _user_id_from_claims(payload: dict) -> int | None:
    user_id = payload.get("id")
    # bool is an int subclass; reject it explicitly
    if isinstance(user_id, bool) or not isinstance(user_id, int):
        return None
    return user_id


def refresh_access_token(
    store: UserStore,
    keys: SigningKeys,
    refresh_token: str | None,
) -> str:
    """
    Exchange a refresh token for a new access token.

    The token must verify against the refresh secret, name an existing user and
    be exactly the token stored for that user. The refresh token itself is not
    rotated: it stays valid until it expires or a later login replaces it.
    """
    if not refresh_token:
        raise MissingTokenError()

    try:
        payload = decode_refresh_token(keys, refresh_token)
    except jwt.PyJWTError as e:
        logger.info("Refresh rejected: %s", type(e).__name__)
        raise InvalidTokenError("Invalid refresh token") from e

    user_id = _user_id_from_claims(payload)
    user = store.find_by_id(user_id) if user_id is not None else None
    if user is None:
        logger.info("Refresh rejected: unknown user")
        raise InvalidTokenError("Invalid refresh token")

    stored = user.refresh_token or ""
    if not hmac.compare_digest(stored.encode("utf-8"), refresh_token.encode("utf-8")):
        logger.info("Refresh rejected: superseded token for user_id=%s", user.id)
        raise InvalidTokenError("Invalid refresh token")

    return issue_access_token(keys, user)


def authenticate_access_token(store: UserStore, keys: SigningKeys, token: str) -> User:
    """
    Resolve a bearer access token to the stored user.

    Raises InvalidTokenError when the token does not verify and
    UnauthenticatedError when it names a user that no longer exists.
    """
    try:
        payload = decode_access_token(keys, token)
    except jwt.PyJWTError as e:
        raise InvalidTokenError("Invalid token") from e

    user_id = _user_id_from_claims(payload)
    if user_id is None:
        raise InvalidTokenError("Invalid token")

    user = store.find_by_id(user_id)
    if user is None:
        raise UnauthenticatedError("User not found")
    return user


def ensure_role(role: Role, allowed: Collection[Role]) -> None:
    """Authorization check, applied after authentication. Raises InsufficientRoleError."""
    if role not in allowed:
        raise InsufficientRoleError()
