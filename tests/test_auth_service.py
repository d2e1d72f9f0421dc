"""Tests for app.services.auth: login, refresh-token exchange and access-token authentication."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest import mock

from app.core.errors import (
    InsufficientRoleError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    UnauthenticatedError,
)
from app.core.security import create_access_token, create_refresh_token, verify_password
from app.models import Base
from app.models.user import Role
from app.services.auth import (
    authenticate_access_token,
    ensure_role,
    login,
    refresh_access_token,
)
from app.services.user_store import UserStore
from support import make_database, make_keys

OTHER_KEYS = dict(
    JWT_SECRET="forged-access-secret-0123456789abcdef01234",
    REFRESH_TOKEN_SECRET="forged-refresh-secret-0123456789abcdef0123",
)


class AuthServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.database = make_database()
        self.session = self.database.session()
        self.store = UserStore(self.session, bcrypt_rounds=4)
        self.keys = make_keys()
        self.user = self.store.create_user("alice", "pw123")

    def tearDown(self) -> None:
        self.session.close()
        self.database.dispose()


class TestLogin(AuthServiceTestCase):
    """login verifies credentials and stores the new refresh token on the user."""

    def test_success_issues_and_stores_tokens(self) -> None:
        result = login(self.store, self.keys, "alice", "pw123")
        self.assertEqual(result.user.id, self.user.id)
        self.assertEqual(self.store.find_by_id(self.user.id).refresh_token, result.refresh_token)
        self.assertEqual(
            authenticate_access_token(self.store, self.keys, result.access_token).id,
            self.user.id,
        )
        self.assertTrue(refresh_access_token(self.store, self.keys, result.refresh_token))

    def test_wrong_password_and_unknown_user_look_the_same(self) -> None:
        with self.assertRaises(InvalidCredentialsError) as wrong_pw:
            login(self.store, self.keys, "alice", "nope")
        with self.assertRaises(InvalidCredentialsError) as unknown:
            login(self.store, self.keys, "mallory", "pw123")
        self.assertEqual(wrong_pw.exception.message, unknown.exception.message)

    def test_failed_login_keeps_stored_refresh_token(self) -> None:
        result = login(self.store, self.keys, "alice", "pw123")
        with self.assertRaises(InvalidCredentialsError):
            login(self.store, self.keys, "alice", "wrong")
        self.assertEqual(self.store.find_by_id(self.user.id).refresh_token, result.refresh_token)

    def test_unknown_user_checked_against_hash_at_store_cost(self) -> None:
        with mock.patch("app.services.auth.verify_password", wraps=verify_password) as verify:
            with self.assertRaises(InvalidCredentialsError):
                login(self.store, self.keys, "mallory", "pw123")
        checked_hash = verify.call_args.args[1]
        self.assertEqual(checked_hash[:7], self.user.password_hash[:7])
        self.assertTrue(checked_hash.startswith("$2b$04$"))

    def test_logged_in_user_readable_without_database(self) -> None:
        result = login(self.store, self.keys, "alice", "pw123")
        Base.metadata.drop_all(self.database.engine)
        self.assertEqual(result.user.username, "alice")
        self.assertEqual(result.user.refresh_token, result.refresh_token)


class TestRefresh(AuthServiceTestCase):
    """refresh_access_token only honors the refresh token from the latest login."""

    def test_missing_token(self) -> None:
        with self.assertRaises(MissingTokenError):
            refresh_access_token(self.store, self.keys, None)
        with self.assertRaises(MissingTokenError):
            refresh_access_token(self.store, self.keys, "")

    def test_second_login_invalidates_first_refresh_token(self) -> None:
        first = login(self.store, self.keys, "alice", "pw123")
        second = login(self.store, self.keys, "alice", "pw123")
        with self.assertRaises(InvalidTokenError):
            refresh_access_token(self.store, self.keys, first.refresh_token)
        access_token = refresh_access_token(self.store, self.keys, second.refresh_token)
        user = authenticate_access_token(self.store, self.keys, access_token)
        self.assertEqual(user.username, "alice")

    def test_refresh_does_not_rotate(self) -> None:
        result = login(self.store, self.keys, "alice", "pw123")
        refresh_access_token(self.store, self.keys, result.refresh_token)
        refresh_access_token(self.store, self.keys, result.refresh_token)
        self.assertEqual(self.store.find_by_id(self.user.id).refresh_token, result.refresh_token)

    def test_well_signed_but_not_stored_token_rejected(self) -> None:
        login(self.store, self.keys, "alice", "pw123")
        concurrent = create_refresh_token(self.keys, self.user.id)
        with self.assertRaises(InvalidTokenError):
            refresh_access_token(self.store, self.keys, concurrent)

    def test_never_logged_in_user_rejected(self) -> None:
        token = create_refresh_token(self.keys, self.user.id)
        with self.assertRaises(InvalidTokenError):
            refresh_access_token(self.store, self.keys, token)

    def test_wrong_secret_rejected(self) -> None:
        forged = create_refresh_token(make_keys(**OTHER_KEYS), self.user.id)
        self.user.refresh_token = forged
        self.store.save(self.user)
        with self.assertRaises(InvalidTokenError):
            refresh_access_token(self.store, self.keys, forged)

    def test_unknown_user_rejected(self) -> None:
        token = create_refresh_token(self.keys, self.user.id + 99)
        with self.assertRaises(InvalidTokenError):
            refresh_access_token(self.store, self.keys, token)

    def test_expired_refresh_token_rejected(self) -> None:
        stale = create_refresh_token(
            self.keys, self.user.id, now=datetime.now(UTC) - timedelta(days=8)
        )
        self.user.refresh_token = stale
        self.store.save(self.user)
        with self.assertRaises(InvalidTokenError):
            refresh_access_token(self.store, self.keys, stale)

    def test_garbage_token_rejected(self) -> None:
        with self.assertRaises(InvalidTokenError):
            refresh_access_token(self.store, self.keys, "not.a.jwt")


class TestAuthenticateAccessToken(AuthServiceTestCase):
    """authenticate_access_token fails closed on any verification problem."""

    def test_valid_token_resolves_stored_user(self) -> None:
        token = create_access_token(self.keys, self.user.id, "alice", "editor")
        self.assertEqual(authenticate_access_token(self.store, self.keys, token).id, self.user.id)

    def test_expired_token_rejected_for_unchanged_user(self) -> None:
        token = create_access_token(
            self.keys,
            self.user.id,
            "alice",
            "editor",
            now=datetime.now(UTC) - timedelta(minutes=61),
        )
        with self.assertRaises(InvalidTokenError):
            authenticate_access_token(self.store, self.keys, token)

    def test_wrong_secret_rejected(self) -> None:
        token = create_access_token(make_keys(**OTHER_KEYS), self.user.id, "alice", "admin")
        with self.assertRaises(InvalidTokenError):
            authenticate_access_token(self.store, self.keys, token)

    def test_refresh_token_not_accepted_as_access_token(self) -> None:
        result = login(self.store, self.keys, "alice", "pw123")
        with self.assertRaises(InvalidTokenError):
            authenticate_access_token(self.store, self.keys, result.refresh_token)

    def test_deleted_user_rejected(self) -> None:
        token = create_access_token(self.keys, self.user.id, "alice", "editor")
        self.session.delete(self.user)
        self.session.commit()
        with self.assertRaises(UnauthenticatedError):
            authenticate_access_token(self.store, self.keys, token)


class TestEnsureRole(unittest.TestCase):
    def test_allowed_and_denied(self) -> None:
        ensure_role(Role.EDITOR, {Role.ADMIN, Role.EDITOR})
        with self.assertRaises(InsufficientRoleError):
            ensure_role(Role.EDITOR, {Role.ADMIN})


if __name__ == "__main__":
    unittest.main()
