"""ORM model for application users (auth and RBAC)."""

import enum
import uuid

from sqlalchemy import Column, DateTime, Enum, String, func

from app.models.base import Base


class UserRole(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


class UserStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


def _new_user_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    email is stored trimmed and lower-cased; it is the login key and is unique.
    password_hash is a bcrypt hash; the raw password is never stored.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_user_id)
    name = Column(String(255), nullable=False)
    email = Column(String(320), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(UserRole, name="user_role", native_enum=False, values_callable=_enum_values, length=16),
        nullable=False,
        default=UserRole.USER,
    )
    status = Column(
        Enum(UserStatus, name="user_status", native_enum=False, values_callable=_enum_values, length=16),
        nullable=False,
        default=UserStatus.ACTIVE,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
