"""Request/response schemas for auth and admin endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.models.user import UserRole, UserStatus


class RegisterRequest(BaseModel):
    """Registration form. Shape rules (email syntax, password length) are enforced by the issuer."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Login email (case-insensitive)")
    password: str = Field(..., description="Password (6 chars to 72 bytes)")
    role: UserRole = Field(default=UserRole.USER, description="Requested role")
    admin_code: str | None = Field(
        default=None,
        alias="adminCode",
        description="Required when role is admin",
    )


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., description="Login email")
    password: str = Field(..., description="Password")


class PublicUser(BaseModel):
    """User view returned to clients (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    role: UserRole


class Principal(PublicUser):
    """Authenticated user resolved by the access guard for dependency injection."""


class AuthResponse(BaseModel):
    """Signed session token plus the redacted user it was issued for."""

    token: str = Field(..., description="JWT access token; send as 'Authorization: Bearer <token>'")
    user: PublicUser


class TokenClaims(BaseModel):
    """Fully validated claims decoded from a session token."""

    subject_id: str
    role: UserRole
    issued_at: datetime
    expires_at: datetime


class AdminUserView(PublicUser):
    """User entry for the admin list."""

    status: UserStatus
    created_at: datetime | None = None


class UsersListResponse(BaseModel):
    """Response for GET /admin/users."""

    success: bool = True
    users: list[AdminUserView]


class UserUpdateRequest(BaseModel):
    """Administrative change to a user's role and/or status."""

    role: UserRole | None = None
    status: UserStatus | None = None


class AdminStatsResponse(BaseModel):
    """Counts for the admin dashboard."""

    success: bool = True
    total_users: int = Field(..., ge=0)
    admins: int = Field(..., ge=0)
    active_users: int = Field(..., ge=0)
    inactive_users: int = Field(..., ge=0)
    uploads: int = Field(..., ge=0)
