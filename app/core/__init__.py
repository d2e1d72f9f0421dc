"""Core app configuration, database handle and security primitives."""

from app.core.config import Settings, SigningKeys, get_settings, load_signing_keys
from app.core.database import Database, get_db

__all__ = ["Database", "Settings", "SigningKeys", "get_db", "get_settings", "load_signing_keys"]
