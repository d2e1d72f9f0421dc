"""Password hashing and JWT creation/verification for authentication."""

import secrets
from datetime import UTC, datetime
from functools import lru_cache
from typing import Any

import bcrypt
import jwt

from app.core.config import SigningKeys

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 1
PASSWORD_MAX_LEN = 128

ACCESS_TOKEN_CLAIMS = ("id", "username", "role", "exp", "iat")
REFRESH_TOKEN_CLAIMS = ("id", "exp", "iat", "jti")


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@lru_cache
def dummy_password_hash(rounds: int = BCRYPT_ROUNDS) -> str:
    """
    Hash of a random password at the given cost, built once per cost.

    Verified against when the username is unknown, so a failed login costs the
    same bcrypt work whether or not the user exists.
    """
    return hash_password(secrets.token_urlsafe(16), rounds=rounds)


def create_access_token(
    keys: SigningKeys,
    user_id: int,
    username: str,
    role: str,
    now: datetime | None = None,
) -> str:
    """Create a JWT access token with id, username, role, exp and iat."""
    now = now or datetime.now(UTC)
    payload: dict[str, Any] = {
        "id": user_id,
        "username": username,
        "role": role,
        "exp": now + keys.access_ttl,
        "iat": now,
    }
    return jwt.encode(
        payload,
        keys.access_secret.get_secret_value(),
        algorithm=keys.algorithm,
    )


def create_refresh_token(
    keys: SigningKeys,
    user_id: int,
    now: datetime | None = None,
) -> str:
    """
    Create a JWT refresh token with id, exp, iat and a random jti.

    Signed with the refresh secret, never the access secret. The jti makes two
    tokens issued in the same second distinct strings.
    """
    now = now or datetime.now(UTC)
    payload: dict[str, Any] = {
        "id": user_id,
        "exp": now + keys.refresh_ttl,
        "iat": now,
        "jti": secrets.token_hex(16),
    }
    return jwt.encode(
        payload,
        keys.refresh_secret.get_secret_value(),
        algorithm=keys.algorithm,
    )


def decode_access_token(keys: SigningKeys, token: str) -> dict[str, Any]:
    """
    Decode and validate an access token; return payload (id, username, role, exp, iat).
    Raises jwt.PyJWTError on invalid, expired or incomplete token.
    """
    return jwt.decode(
        token,
        keys.access_secret.get_secret_value(),
        algorithms=[keys.algorithm],
        options={"require": list(ACCESS_TOKEN_CLAIMS)},
    )


def decode_refresh_token(keys: SigningKeys, token: str) -> dict[str, Any]:
    """
    Decode and validate a refresh token; return payload (id, exp, iat, jti).
    Raises jwt.PyJWTError on invalid, expired or incomplete token.
    """
    return jwt.decode(
        token,
        keys.refresh_secret.get_secret_value(),
        algorithms=[keys.algorithm],
        options={"require": list(REFRESH_TOKEN_CLAIMS)},
    )
