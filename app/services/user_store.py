"""Credential store: persistence of users, password hashes and refresh tokens."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import DuplicateUsernameError, StoreUnavailableError
from app.core.security import BCRYPT_ROUNDS, dummy_password_hash, hash_password
from app.models.user import DEFAULT_ROLE, Role, User

logger = logging.getLogger(__name__)


def coerce_role(role: str | Role | None) -> Role:
    """Return the Role for a recognized value; anything else falls back to the default role."""
    if isinstance(role, Role):
        return role
    if role is None or not str(role).strip():
        return DEFAULT_ROLE
    try:
        return Role(str(role).strip().lower())
    except ValueError:
        logger.warning(
            "Unrecognized role %r requested; using default role %s",
            str(role)[:32],
            DEFAULT_ROLE.value,
        )
        return DEFAULT_ROLE


class UserStore:
    """
    Users table access bound to one session.

    Every method either completes or raises; operational database failures are
    rolled back and re-raised as StoreUnavailableError.
    """

    def __init__(self, session: Session, bcrypt_rounds: int = BCRYPT_ROUNDS) -> None:
        self.session = session
        self.bcrypt_rounds = bcrypt_rounds

    @property
    def dummy_hash(self) -> str:
        """Password hash at this store's cost, for checks against unknown usernames."""
        return dummy_password_hash(self.bcrypt_rounds)

    def create_user(
        self,
        username: str,
        password: str,
        role: str | Role | None = None,
    ) -> User:
        """
        Hash the password and insert a new user.

        Raises DuplicateUsernameError if the username is taken (exact match).
        """
        if self.find_by_username(username) is not None:
            raise DuplicateUsernameError(username)

        user = User(
            username=username,
            password_hash=hash_password(password, rounds=self.bcrypt_rounds),
            role=coerce_role(role),
        )
        self.session.add(user)
        try:
            self.session.commit()
            self.session.refresh(user)
        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same name
            self.session.rollback()
            raise DuplicateUsernameError(username) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreUnavailableError("Failed to create user", cause=e) from e
        logger.info("User created: user_id=%s role=%s", user.id, user.role.value)
        return user

    def find_by_username(self, username: str) -> User | None:
        try:
            return self.session.query(User).filter(User.username == username).first()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreUnavailableError("Failed to look up user", cause=e) from e

    def find_by_id(self, user_id: int) -> User | None:
        try:
            return self.session.get(User, user_id)
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreUnavailableError("Failed to look up user", cause=e) from e

    def list_users(self) -> list[User]:
        try:
            return self.session.query(User).order_by(User.id).all()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreUnavailableError("Failed to list users", cause=e) from e

    def save(self, user: User) -> None:
        """Commit pending changes to one user row."""
        self.session.add(user)
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreUnavailableError("Failed to save user", cause=e) from e
