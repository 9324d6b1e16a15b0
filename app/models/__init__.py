"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.upload import UploadRecord
from app.models.user import User, UserRole, UserStatus

__all__ = ["Base", "UploadRecord", "User", "UserRole", "UserStatus"]
