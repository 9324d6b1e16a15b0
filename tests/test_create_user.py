"""Tests for the create_user bootstrap script."""

import unittest
from unittest.mock import patch

from app.core.security import verify_password
from app.models import User, UserRole
from app.scripts import create_user
from tests.helpers import make_session_factory, make_settings


class TestCreateUserScript(unittest.TestCase):

    def setUp(self) -> None:
        self.session_factory = make_session_factory()
        patches = [
            patch.object(create_user, "SessionLocal", self.session_factory),
            patch.object(create_user, "get_settings", lambda: make_settings()),
        ]
        for p in patches:
            p.start()
            self.addCleanup(p.stop)

    def test_creates_admin_without_registration_code(self) -> None:
        code = create_user.main(["Site Admin", "Admin@Example.com", "secret1", "admin"])
        self.assertEqual(code, 0)
        with self.session_factory() as db:
            user = db.query(User).one()
            self.assertEqual(user.email, "admin@example.com")
            self.assertEqual(user.role, UserRole.ADMIN)
            self.assertTrue(verify_password("secret1", user.password_hash))

    def test_duplicate_and_invalid_input_fail(self) -> None:
        self.assertEqual(create_user.main(["A", "a@x.com", "secret1"]), 0)
        self.assertEqual(create_user.main(["B", "a@x.com", "secret1"]), 1)
        self.assertEqual(create_user.main(["C", "c@x.com", "123"]), 1)
        with self.session_factory() as db:
            self.assertEqual(db.query(User).count(), 1)


if __name__ == "__main__":
    unittest.main()
