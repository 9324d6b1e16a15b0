"""Register/login endpoints and the auth dependencies (get_current_user, require_admin)."""

from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, Header, status
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.models import UserRole
from app.schemas.auth import AuthResponse, LoginRequest, Principal, RegisterRequest
from app.services import credentials
from app.services.access_guard import authorize

router = APIRouter()


def require_role(required_role: UserRole) -> Callable[..., Principal]:
    """
    Build a dependency that admits active users holding required_role.

    The dependency returns the Principal; routes receive it as an argument.
    Rejections raise AppError subclasses rendered as 401/403/503.
    """

    def dependency(
        db: Annotated[Session, Depends(get_db)],
        settings: Annotated[Settings, Depends(get_settings)],
        authorization: Annotated[str | None, Header()] = None,
    ) -> Principal:
        return authorize(db, settings, authorization, required_role)

    return dependency


get_current_user = require_role(UserRole.USER)
require_admin = require_role(UserRole.ADMIN)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AuthResponse:
    """
    Create an account and return a JWT plus the public user view.

    Registering as admin requires `adminCode` to match ADMIN_REGISTRATION_CODE.
    """
    return credentials.register(db, settings, body)


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AuthResponse:
    """
    Authenticate with email and password; returns a JWT.
    Include the token in the Authorization header as: Bearer <token>
    """
    return credentials.login(db, settings, body)


@router.get("/me", response_model=Principal)
def me(current_user: Annotated[Principal, Depends(get_current_user)]) -> Principal:
    """Return the authenticated user."""
    return current_user
