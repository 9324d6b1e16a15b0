"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AdminStatsResponse,
    AdminUserView,
    AuthResponse,
    LoginRequest,
    Principal,
    PublicUser,
    RegisterRequest,
    TokenClaims,
    UserUpdateRequest,
    UsersListResponse,
)
from app.schemas.health import HealthResponse
from app.schemas.upload import (
    HistoryItem,
    HistoryResponse,
    UploadResponse,
    UploadResult,
)

__all__ = [
    "AdminStatsResponse",
    "AdminUserView",
    "AuthResponse",
    "HealthResponse",
    "HistoryItem",
    "HistoryResponse",
    "LoginRequest",
    "Principal",
    "PublicUser",
    "RegisterRequest",
    "TokenClaims",
    "UploadResponse",
    "UploadResult",
    "UserUpdateRequest",
    "UsersListResponse",
]
