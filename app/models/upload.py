"""ORM model for upload history (metadata only; rows are not persisted)."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.dialects.postgresql import JSONB

from app.models.base import Base


class UploadRecord(Base):
    """One row per spreadsheet a user uploaded."""

    __tablename__ = "uploads"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    original_filename = Column(String(512), nullable=False, default="")
    row_count = Column(Integer, nullable=False, default=0)
    column_names = Column("columns", JSON().with_variant(JSONB, "postgresql"), nullable=False, default=list)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )
