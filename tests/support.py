"""Shared builders for tests: settings, signing keys, database and app client."""

from typing import Any

from fastapi.testclient import TestClient

from app.core.config import Settings, SigningKeys, load_signing_keys
from app.core.database import Database
from app.main import create_app

TEST_ACCESS_SECRET = "test-access-secret-0123456789abcdef0123456789"
TEST_REFRESH_SECRET = "test-refresh-secret-0123456789abcdef012345678"
API = "/api/v1"


def make_settings(**overrides: Any) -> Settings:
    """Settings isolated from the process environment and any .env file."""
    values: dict[str, Any] = {
        "APP_ENV": "dev",
        "DATABASE_URL": "sqlite://",
        "DB_AUTO_CREATE": True,
        "JWT_SECRET": TEST_ACCESS_SECRET,
        "REFRESH_TOKEN_SECRET": TEST_REFRESH_SECRET,
        "BCRYPT_ROUNDS": 4,
        "LOG_LEVEL": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_keys(**overrides: Any) -> SigningKeys:
    return load_signing_keys(make_settings(**overrides))


def make_database() -> Database:
    """Fresh in-memory SQLite database with all tables."""
    database = Database("sqlite://")
    database.create_all()
    return database


def make_client(**overrides: Any) -> TestClient:
    """TestClient over a fresh app and database; enter it to run startup."""
    return TestClient(create_app(make_settings(**overrides)))


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
