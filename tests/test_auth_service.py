"""Tests for app.services.auth and app.services.users against an in-memory database."""

import unittest

from app.core.result import Err, ErrorKind, Ok
from app.core.security import decode_access_token, hash_password
from app.models import Role, User
from app.services import users
from app.services.auth import login, register_user
from factories import make_session, make_settings


class AuthServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.settings = make_settings()
        self.db = make_session(self.settings)

    def tearDown(self) -> None:
        self.db.close()


class TestRegister(AuthServiceTestCase):
    def test_register_stores_hash_and_default_role(self) -> None:
        result = register_user(self.db, self.settings, "u1", "longpass1")
        self.assertIsInstance(result, Ok)
        user = self.db.query(User).filter(User.username == "u1").one()
        self.assertNotEqual(user.password_hash, "longpass1")
        self.assertEqual(user.role, Role.USER.value)

    def test_register_same_username_twice_is_conflict(self) -> None:
        register_user(self.db, self.settings, "u1", "longpass1")
        result = register_user(self.db, self.settings, "u1", "otherpass2")
        self.assertIsInstance(result, Err)
        self.assertEqual(result.kind, ErrorKind.CONFLICT)
        self.assertIn("u1", result.message)
        self.assertEqual(self.db.query(User).count(), 1)


class TestLogin(AuthServiceTestCase):
    def setUp(self) -> None:
        super().setUp()
        register_user(self.db, self.settings, "u1", "longpass1")

    def test_login_returns_token_for_user(self) -> None:
        result = login(self.db, self.settings, "u1", "longpass1")
        self.assertIsInstance(result, Ok)
        payload = decode_access_token(self.settings, result.value)
        user = self.db.query(User).filter(User.username == "u1").one()
        self.assertEqual(payload["sub"], str(user.id))
        self.assertEqual(payload["username"], "u1")

    def test_wrong_password_is_unauthorized(self) -> None:
        result = login(self.db, self.settings, "u1", "wrongpass")
        self.assertIsInstance(result, Err)
        self.assertEqual(result.kind, ErrorKind.UNAUTHORIZED)

    def test_unknown_username_is_not_found(self) -> None:
        result = login(self.db, self.settings, "nobody", "longpass1")
        self.assertIsInstance(result, Err)
        self.assertEqual(result.kind, ErrorKind.NOT_FOUND)


class TestUserStore(AuthServiceTestCase):
    def test_create_user_with_admin_role(self) -> None:
        result = users.create_user(
            self.db, "root", hash_password("longpass1", rounds=4), role=Role.ADMIN
        )
        self.assertIsInstance(result, Ok)
        self.assertEqual(result.value.role, "admin")

    def test_create_user_requires_username_and_hash(self) -> None:
        result = users.create_user(self.db, "", "hash")
        self.assertEqual(result.kind, ErrorKind.VALIDATION)

    def test_lookups_report_missing_users(self) -> None:
        self.assertEqual(users.get_user_by_id(self.db, 99).kind, ErrorKind.NOT_FOUND)
        self.assertEqual(users.get_user_by_id(self.db, 2**63).kind, ErrorKind.NOT_FOUND)
        self.assertEqual(users.delete_user(self.db, -(2**63)).kind, ErrorKind.NOT_FOUND)
        self.assertEqual(users.get_user_by_username(self.db, "ghost").kind, ErrorKind.NOT_FOUND)

    def test_list_and_delete(self) -> None:
        a_id = users.create_user(self.db, "a", "hash-a").value.id
        users.create_user(self.db, "b", "hash-b")
        self.assertEqual([u.username for u in users.list_users(self.db)], ["a", "b"])

        self.assertIsInstance(users.delete_user(self.db, a_id), Ok)
        self.assertEqual([u.username for u in users.list_users(self.db)], ["b"])
        self.assertEqual(users.delete_user(self.db, a_id).kind, ErrorKind.NOT_FOUND)


if __name__ == "__main__":
    unittest.main()
