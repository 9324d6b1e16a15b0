"""Unit tests for app.core.security: bcrypt hashing, bearer parsing, token issue and verification."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from app.core.errors import (
    TokenExpiredError,
    TokenMalformedError,
    TokenMissingError,
    TokenSignatureError,
)
from app.core.security import (
    create_access_token,
    extract_bearer_token,
    hash_password,
    verify_access_token,
    verify_password,
)
from app.models import UserRole
from tests.helpers import TEST_SECRET, make_settings


class TestPasswordHashing(unittest.TestCase):
    """Hashes are salted bcrypt and only the exact password verifies."""

    def test_hash_is_not_the_password_and_verifies(self) -> None:
        hashed = hash_password("secret1", rounds=4)
        self.assertNotIn("secret1", hashed)
        self.assertTrue(hashed.startswith("$2"))
        self.assertTrue(verify_password("secret1", hashed))

    def test_same_password_gets_different_salts(self) -> None:
        self.assertNotEqual(hash_password("secret1", 4), hash_password("secret1", 4))

    def test_single_character_mutations_fail(self) -> None:
        password = "s3cret!Pw"
        hashed = hash_password(password, rounds=4)
        for i in range(len(password)):
            mutated = password[:i] + chr(ord(password[i]) ^ 1) + password[i + 1 :]
            self.assertFalse(verify_password(mutated, hashed), mutated)
        self.assertFalse(verify_password(password[:-1], hashed))
        self.assertFalse(verify_password(password + "x", hashed))

    def test_garbage_hash_returns_false(self) -> None:
        self.assertFalse(verify_password("secret1", "not-a-bcrypt-hash"))


class TestExtractBearerToken(unittest.TestCase):
    """Authorization header parsing: missing vs malformed."""

    def test_returns_token(self) -> None:
        self.assertEqual(extract_bearer_token("Bearer abc.def.ghi"), "abc.def.ghi")

    def test_scheme_is_case_insensitive(self) -> None:
        self.assertEqual(extract_bearer_token("bearer abc"), "abc")

    def test_missing_header(self) -> None:
        with self.assertRaises(TokenMissingError):
            extract_bearer_token(None)
        with self.assertRaises(TokenMissingError):
            extract_bearer_token("   ")

    def test_empty_bearer_credential_is_missing(self) -> None:
        with self.assertRaises(TokenMissingError):
            extract_bearer_token("Bearer ")

    def test_other_scheme_is_malformed(self) -> None:
        with self.assertRaises(TokenMalformedError):
            extract_bearer_token("Basic dXNlcjpwYXNz")


class TestAccessToken(unittest.TestCase):
    """create_access_token / verify_access_token."""

    def setUp(self) -> None:
        self.settings = make_settings()

    def test_round_trip(self) -> None:
        token = create_access_token("user-123", UserRole.ADMIN, self.settings)
        claims = verify_access_token(token, self.settings)
        self.assertEqual(claims.subject_id, "user-123")
        self.assertEqual(claims.role, UserRole.ADMIN)
        self.assertEqual(claims.expires_at - claims.issued_at, timedelta(days=1))

    def test_expiry_follows_settings(self) -> None:
        settings = make_settings(JWT_EXPIRE_MINUTES=5)
        now = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)
        token = create_access_token("u", UserRole.USER, settings, now=now)
        claims = verify_access_token(token, settings, now=now + timedelta(minutes=4))
        self.assertEqual(claims.expires_at, now + timedelta(minutes=5))
        with self.assertRaises(TokenExpiredError):
            verify_access_token(token, settings, now=now + timedelta(minutes=5))

    def test_expired_token_rejected(self) -> None:
        issued = datetime.now(UTC) - timedelta(days=2)
        token = create_access_token("u", UserRole.USER, self.settings, now=issued)
        with self.assertRaises(TokenExpiredError):
            verify_access_token(token, self.settings)

    def test_expired_token_reported_as_expired_even_with_bad_signature(self) -> None:
        issued = datetime.now(UTC) - timedelta(days=2)
        other = make_settings(JWT_SECRET="another-secret-0123456789abcdefghijklmn")
        token = create_access_token("u", UserRole.USER, other, now=issued)
        with self.assertRaises(TokenExpiredError):
            verify_access_token(token, self.settings)

    def test_wrong_secret_rejected(self) -> None:
        other = make_settings(JWT_SECRET="another-secret-0123456789abcdefghijklmn")
        token = create_access_token("u", UserRole.USER, other)
        with self.assertRaises(TokenSignatureError):
            verify_access_token(token, self.settings)

    def test_tampered_payload_rejected(self) -> None:
        token = create_access_token("u", UserRole.USER, self.settings)
        header, _, signature = token.split(".")
        forged = jwt.encode(
            {**jwt.decode(token, options={"verify_signature": False}), "role": "admin"},
            "attacker-secret-0123456789abcdefghijklmnop",
            algorithm="HS256",
        )
        forged_payload = forged.split(".")[1]
        with self.assertRaises(TokenSignatureError):
            verify_access_token(f"{header}.{forged_payload}.{signature}", self.settings)
        with self.assertRaises(TokenSignatureError):
            verify_access_token(forged, self.settings)

    def test_garbage_is_malformed(self) -> None:
        for token in ("", "not-a-jwt", "a.b.c"):
            with self.assertRaises(TokenMalformedError, msg=token):
                verify_access_token(token, self.settings)

    def test_missing_role_claim_is_malformed(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"sub": "u", "iat": now, "exp": now + timedelta(hours=1)},
            TEST_SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(TokenMalformedError):
            verify_access_token(token, self.settings)

    def test_unknown_role_is_malformed(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"sub": "u", "role": "superuser", "iat": now, "exp": now + timedelta(hours=1)},
            TEST_SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(TokenMalformedError):
            verify_access_token(token, self.settings)

    def test_missing_exp_is_malformed(self) -> None:
        token = jwt.encode(
            {"sub": "u", "role": "user", "iat": datetime.now(UTC)},
            TEST_SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(TokenMalformedError):
            verify_access_token(token, self.settings)


if __name__ == "__main__":
    unittest.main()
