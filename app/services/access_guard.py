"""
Access guard: turns an Authorization header into an authenticated principal.

Checks run cheapest first and stop at the first failure:

1. token    - bearer parsing and JWT verification, no I/O (401)
2. user     - live lookup by subject id, catches deleted accounts (401)
3. status   - inactive accounts are refused even with a valid token (403)
4. role     - required role, checked only for active users (403)

The user is re-read on every request, so status and role changes apply to
tokens that were issued before the change. Tokens themselves are not tracked;
a leaked token stays usable until it expires or the account is deactivated.
"""

import logging

from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.errors import (
    AppError,
    InactiveAccountError,
    InsufficientRoleError,
    UserNotFoundError,
)
from app.core.security import extract_bearer_token, verify_access_token
from app.models import UserRole, UserStatus
from app.schemas.auth import Principal
from app.services import credential_store

logger = logging.getLogger(__name__)


def _reject(error: AppError, **context: object) -> AppError:
    logger.warning(
        "Access rejected",
        extra={"reason": getattr(error, "reason", "rejected"), **context},
    )
    return error


def authorize(
    db: Session,
    settings: Settings,
    authorization: str | None,
    required_role: UserRole | None = UserRole.USER,
) -> Principal:
    """
    Return the principal for the Authorization header value or raise.

    required_role=UserRole.USER (or None) admits any active user;
    UserRole.ADMIN admits only admins.
    """
    try:
        claims = verify_access_token(extract_bearer_token(authorization), settings)
    except AppError as e:
        _reject(e)
        raise

    user = credential_store.find_by_id(db, claims.subject_id)
    if user is None:
        raise _reject(UserNotFoundError(), user_id=claims.subject_id)

    if user.status != UserStatus.ACTIVE:
        raise _reject(InactiveAccountError(), user_id=user.id)

    if required_role not in (None, UserRole.USER) and user.role != required_role:
        raise _reject(
            InsufficientRoleError(),
            user_id=user.id,
            role=user.role.value,
            required_role=required_role.value,
        )

    return Principal.model_validate(user)
