"""Password hashing, bearer parsing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import bcrypt
import jwt

from app.core.config import Settings
from app.core.errors import (
    TokenExpiredError,
    TokenMalformedError,
    TokenMissingError,
    TokenSignatureError,
)
from app.models.user import UserRole
from app.schemas.auth import TokenClaims

# Input validation limits. bcrypt only reads the first 72 bytes, so longer
# passwords are refused instead of silently truncated.
NAME_MAX_LEN = 255
EMAIL_MAX_LEN = 320
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_BYTES = 72

BEARER_SCHEME = "bearer"
_REQUIRED_CLAIMS = ["sub", "role", "iat", "exp"]


def hash_password(plain_password: str, rounds: int) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    pw_bytes = plain_password.encode("utf-8")
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash (constant-time compare inside bcrypt)."""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@lru_cache(maxsize=4)
def _dummy_hash(rounds: int) -> str:
    return hash_password("not-a-real-password", rounds)


def simulate_password_check(plain_password: str, rounds: int) -> None:
    """Spend the same bcrypt work as a real check; used when the account does not exist."""
    verify_password(plain_password, _dummy_hash(rounds))


def extract_bearer_token(authorization: str | None) -> str:
    """
    Return the token from an 'Authorization: Bearer <token>' header value.

    Raises TokenMissingError when there is no credential and TokenMalformedError
    when another scheme is used.
    """
    if authorization is None or not authorization.strip():
        raise TokenMissingError()
    scheme, _, credentials = authorization.strip().partition(" ")
    if scheme.lower() != BEARER_SCHEME:
        raise TokenMalformedError()
    credentials = credentials.strip()
    if not credentials:
        raise TokenMissingError()
    return credentials


def create_access_token(
    sub: str,
    role: UserRole,
    settings: Settings,
    now: datetime | None = None,
) -> str:
    """Create a JWT access token with sub (user id), role, iat and exp."""
    issued_at = now or datetime.now(UTC)
    expire = issued_at + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": str(sub),
        "role": UserRole(role).value,
        "iat": issued_at,
        "exp": expire,
    }
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def _is_timestamp(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def verify_access_token(
    token: str,
    settings: Settings,
    now: datetime | None = None,
) -> TokenClaims:
    """
    Decode and validate a JWT; return its claims.

    Expiry is checked before the signature, so a stale token is always reported
    as expired. Raises TokenMalformedError, TokenExpiredError or
    TokenSignatureError; never returns partially validated claims.
    """
    current = now or datetime.now(UTC)
    try:
        unverified = jwt.decode(token, options={"verify_signature": False})
    except jwt.InvalidTokenError as e:
        raise TokenMalformedError() from e

    exp = unverified.get("exp")
    if not _is_timestamp(exp):
        raise TokenMalformedError()
    if exp <= current.timestamp():
        raise TokenExpiredError()

    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
            options={
                "verify_exp": False,
                "verify_iat": False,
                "require": _REQUIRED_CLAIMS,
            },
        )
    except (jwt.InvalidSignatureError, jwt.InvalidAlgorithmError) as e:
        raise TokenSignatureError() from e
    except jwt.InvalidTokenError as e:
        raise TokenMalformedError() from e

    sub = payload.get("sub")
    iat = payload.get("iat")
    if not isinstance(sub, str) or not sub or not _is_timestamp(iat):
        raise TokenMalformedError()
    try:
        role = UserRole(payload.get("role"))
    except ValueError as e:
        raise TokenMalformedError() from e

    return TokenClaims(
        subject_id=sub,
        role=role,
        issued_at=datetime.fromtimestamp(iat, UTC),
        expires_at=datetime.fromtimestamp(payload["exp"], UTC),
    )
