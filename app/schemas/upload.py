"""Request/response schemas for the upload and history endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field


class UploadResult(BaseModel):
    """Parsed rows of a single upload plus its history id."""

    id: int = Field(..., description="History record ID")
    filename: str
    columns: list[str] = Field(default_factory=list, description="Header names, in file order")
    row_count: int = Field(..., ge=0)
    rows: list[dict[str, str]] = Field(
        default_factory=list,
        description="Data rows keyed by header, in file order",
    )


class UploadResponse(BaseModel):
    """Response after successfully parsing and recording an upload."""

    success: bool = True
    data: UploadResult


class HistoryItem(BaseModel):
    """One entry of a user's upload history."""

    id: int
    filename: str
    columns: list[str] = Field(default_factory=list)
    row_count: int = Field(..., ge=0)
    created_at: datetime | None = None


class HistoryResponse(BaseModel):
    """Response for GET /history (newest first)."""

    success: bool = True
    data: list[HistoryItem] = Field(default_factory=list)
