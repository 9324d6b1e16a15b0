"""Admin-only endpoints: dashboard counts and user role/status management."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.auth import require_admin
from app.core.database import get_db
from app.core.errors import NotFoundError, ValidationError
from app.models import UserRole, UserStatus
from app.schemas.auth import (
    AdminStatsResponse,
    AdminUserView,
    Principal,
    UserUpdateRequest,
    UsersListResponse,
)
from app.services import credential_store

logger = logging.getLogger(__name__)

# Every route in this module requires an active admin.
router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/stats", response_model=AdminStatsResponse)
def get_stats(db: Annotated[Session, Depends(get_db)]) -> AdminStatsResponse:
    """User totals by role and status, and the number of recorded uploads."""
    return AdminStatsResponse(**credential_store.count_users(db))


@router.get("/users", response_model=UsersListResponse)
def list_users(db: Annotated[Session, Depends(get_db)]) -> UsersListResponse:
    """List all users (no password hashes)."""
    users = credential_store.list_users(db)
    return UsersListResponse(users=[AdminUserView.model_validate(u) for u in users])


@router.patch("/users/{user_id}", response_model=AdminUserView)
def update_user(
    user_id: str,
    body: UserUpdateRequest,
    admin: Annotated[Principal, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> AdminUserView:
    """
    Change a user's role and/or status.

    Takes effect on the user's next request; tokens already issued are not
    reissued. Admins cannot demote or deactivate themselves.
    """
    if body.role is None and body.status is None:
        raise ValidationError("Nothing to update: provide role and/or status")
    user = credential_store.find_by_id(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    if user.id == admin.id and (
        body.role == UserRole.USER or body.status == UserStatus.INACTIVE
    ):
        raise ValidationError("Administrators cannot demote or deactivate themselves")

    user = credential_store.update_user(db, user, role=body.role, status=body.status)
    logger.info(
        "User updated by admin",
        extra={
            "admin_id": admin.id,
            "user_id": user.id,
            "role": user.role.value,
            "status": user.status.value,
        },
    )
    return AdminUserView.model_validate(user)
