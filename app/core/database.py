"""Database connection handle and session management."""

import logging
from collections.abc import Generator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.core.errors import StoreUnavailableError
from app.models.base import Base

logger = logging.getLogger(__name__)


class Database:
    """
    Owns the SQLAlchemy engine and session factory for one application instance.

    The engine is created on first use and released by dispose(). One instance
    lives on app.state.database; nothing here is module-global.
    """

    def __init__(self, url: str, connect_timeout: float = 5.0, echo: bool = False) -> None:
        self.url = url
        self.connect_timeout = connect_timeout
        self.echo = echo
        self._engine: Engine | None = None
        self._sessionmaker: sessionmaker[Session] | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.DATABASE_URL,
            connect_timeout=settings.DB_CONNECT_TIMEOUT_SEC,
            echo=settings.DEBUG,
        )

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    def _create_engine(self) -> Engine:
        if self.url.startswith("sqlite"):
            kwargs: dict = {
                "connect_args": {
                    "check_same_thread": False,
                    "timeout": self.connect_timeout,
                },
            }
            # In-memory SQLite: every thread must share the one connection
            if self.url in ("sqlite://", "sqlite:///:memory:"):
                kwargs["poolclass"] = StaticPool
            return create_engine(self.url, echo=self.echo, **kwargs)
        return create_engine(
            self.url,
            pool_pre_ping=True,
            echo=self.echo,
            connect_args={"connect_timeout": max(1, int(self.connect_timeout))},
        )

    def session(self) -> Session:
        """Return a new session bound to this database."""
        if self._sessionmaker is None:
            self._sessionmaker = sessionmaker(
                autocommit=False, autoflush=False, expire_on_commit=False, bind=self.engine
            )
        return self._sessionmaker()

    def verify_connection(self) -> None:
        """Run a trivial query; raise StoreUnavailableError if the database is unreachable."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise StoreUnavailableError("Database is unreachable", cause=e) from e

    def is_connected(self) -> bool:
        try:
            self.verify_connection()
            return True
        except StoreUnavailableError:
            return False

    def create_all(self) -> None:
        """Create all tables known to the ORM metadata (dev and tests; prod uses Alembic)."""
        Base.metadata.create_all(self.engine)

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            logger.info("Database engine disposed")
        self._engine = None
        self._sessionmaker = None


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency that yields a DB session from the app's Database and closes it when done."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
