"""Credential issuer: registration and login, each ending in a signed session token."""

import hmac
import logging
import re

from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.errors import (
    AccountNotFoundError,
    InvalidCredentialsError,
    ValidationError,
)
from app.core.security import (
    EMAIL_MAX_LEN,
    NAME_MAX_LEN,
    PASSWORD_MAX_BYTES,
    PASSWORD_MIN_LEN,
    create_access_token,
    hash_password,
    simulate_password_check,
    verify_password,
)
from app.models import User, UserRole
from app.schemas.auth import AuthResponse, LoginRequest, PublicUser, RegisterRequest
from app.services import credential_store

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _validate_name(name: str) -> str:
    name = name.strip()
    if not name:
        raise ValidationError("Name is required")
    if len(name) > NAME_MAX_LEN:
        raise ValidationError(f"Name must be at most {NAME_MAX_LEN} characters")
    return name


def _validate_email(email: str) -> str:
    email = credential_store.normalize_email(email)
    if len(email) > EMAIL_MAX_LEN or not EMAIL_PATTERN.match(email):
        raise ValidationError("Valid email required")
    return email


def _validate_password(password: str) -> None:
    if len(password) < PASSWORD_MIN_LEN:
        raise ValidationError(f"Password must be at least {PASSWORD_MIN_LEN} characters")
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValidationError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")


def _validate_admin_code(admin_code: str | None, settings: Settings) -> None:
    expected = settings.ADMIN_REGISTRATION_CODE
    if expected is None:
        raise ValidationError("Admin registration is disabled")
    if not admin_code or not admin_code.strip():
        raise ValidationError("Admin code is required")
    if not hmac.compare_digest(
        admin_code.strip().encode("utf-8"),
        expected.get_secret_value().strip().encode("utf-8"),
    ):
        raise ValidationError("Invalid admin code")


def issue_token(user: User, settings: Settings) -> AuthResponse:
    """Sign a session token for user and pair it with the redacted user view."""
    token = create_access_token(sub=user.id, role=user.role, settings=settings)
    return AuthResponse(token=token, user=PublicUser.model_validate(user))


def create_account(
    db: Session,
    settings: Settings,
    name: str,
    email: str,
    password: str,
    role: UserRole = UserRole.USER,
) -> User:
    """Validate account fields, hash the password and persist the user."""
    name = _validate_name(name)
    email = _validate_email(email)
    _validate_password(password)
    user = credential_store.create_user(
        db,
        name=name,
        email=email,
        password_hash=hash_password(password, settings.BCRYPT_ROUNDS),
        role=role,
    )
    logger.info("User registered", extra={"user_id": user.id, "role": user.role.value})
    return user


def register(db: Session, settings: Settings, body: RegisterRequest) -> AuthResponse:
    """
    Create an account and return a token for it.

    Raises ValidationError for bad input (including a missing or wrong admin
    code when registering as admin) and DuplicateIdentityError when the email
    is taken. Nothing is persisted and no token is issued on failure.
    """
    if body.role == UserRole.ADMIN:
        _validate_admin_code(body.admin_code, settings)
    user = create_account(db, settings, body.name, body.email, body.password, body.role)
    return issue_token(user, settings)


def login(db: Session, settings: Settings, body: LoginRequest) -> AuthResponse:
    """
    Check email and password and return a token.

    Raises AccountNotFoundError or InvalidCredentialsError; both carry the same
    client-facing message.
    """
    user = credential_store.find_by_email(db, body.email)
    if user is None:
        simulate_password_check(body.password, settings.BCRYPT_ROUNDS)
        logger.info("Login failed", extra={"reason": AccountNotFoundError.reason})
        raise AccountNotFoundError()
    if not verify_password(body.password, user.password_hash):
        logger.info(
            "Login failed",
            extra={"reason": InvalidCredentialsError.reason, "user_id": user.id},
        )
        raise InvalidCredentialsError()
    logger.info("User logged in", extra={"user_id": user.id})
    return issue_token(user, settings)
