"""ORM model for application users (auth and RBAC)."""

import enum

from sqlalchemy import Column, DateTime, Enum, Integer, String, Text, func

from app.models.base import Base


class Role(str, enum.Enum):
    """Closed set of roles a user can hold."""

    ADMIN = "admin"
    EDITOR = "editor"


DEFAULT_ROLE = Role.EDITOR


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    password_hash always holds a bcrypt hash. refresh_token is the single
    refresh token currently honored for this user; each login overwrites it.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(
            Role,
            name="user_role",
            native_enum=False,
            length=16,
            values_callable=lambda roles: [r.value for r in roles],
        ),
        nullable=False,
        default=DEFAULT_ROLE,
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    refresh_token = Column(Text, nullable=True)
