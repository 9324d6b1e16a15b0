"""
Credential store: persistence of user records.

No password verification happens here; that belongs to the credential issuer.
Database outages and timeouts surface as StoreUnavailableError so callers can
answer 503 instead of hanging or leaking driver messages.
"""

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import run_guarded
from app.core.errors import DuplicateIdentityError
from app.models import UploadRecord, User, UserRole, UserStatus


def normalize_email(email: str) -> str:
    """Emails are case-insensitive identities: trim and lower-case before every read and write."""
    return email.strip().lower()


def find_by_email(db: Session, email: str) -> User | None:
    """Return the user registered under email, or None."""
    key = normalize_email(email)
    return run_guarded(
        db,
        "find_by_email",
        lambda: db.query(User).filter(User.email == key).first(),
    )


def find_by_id(db: Session, user_id: str) -> User | None:
    """Return a live snapshot of the user, or None. Used on every guarded request."""
    return run_guarded(db, "find_by_id", lambda: db.get(User, user_id))


def create_user(
    db: Session,
    name: str,
    email: str,
    password_hash: str,
    role: UserRole = UserRole.USER,
) -> User:
    """
    Insert a new active user and return it.

    Raises DuplicateIdentityError if the email is already registered; the
    existing record is left untouched. The unique index catches concurrent
    registrations that both pass the pre-check.
    """
    key = normalize_email(email)
    if find_by_email(db, key) is not None:
        raise DuplicateIdentityError()

    def _insert() -> User:
        user = User(
            name=name,
            email=key,
            password_hash=password_hash,
            role=role,
            status=UserStatus.ACTIVE,
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            raise DuplicateIdentityError() from e
        db.refresh(user)
        return user

    return run_guarded(db, "create_user", _insert)


def list_users(db: Session) -> list[User]:
    """Return all users ordered by creation time."""
    return run_guarded(
        db,
        "list_users",
        lambda: db.query(User).order_by(User.created_at, User.email).all(),
    )


def update_user(
    db: Session,
    user: User,
    role: UserRole | None = None,
    status: UserStatus | None = None,
) -> User:
    """Apply an administrative role and/or status change and return the refreshed user."""

    def _update() -> User:
        if role is not None:
            user.role = role
        if status is not None:
            user.status = status
        db.commit()
        db.refresh(user)
        return user

    return run_guarded(db, "update_user", _update)


def count_users(db: Session) -> dict[str, int]:
    """Counts for the admin dashboard: totals by role and status, plus uploads."""

    def _count() -> dict[str, int]:
        by_role = dict(db.query(User.role, func.count(User.id)).group_by(User.role).all())
        by_status = dict(db.query(User.status, func.count(User.id)).group_by(User.status).all())
        uploads = db.query(func.count(UploadRecord.id)).scalar() or 0
        return {
            "total_users": sum(by_role.values()),
            "admins": by_role.get(UserRole.ADMIN, 0),
            "active_users": by_status.get(UserStatus.ACTIVE, 0),
            "inactive_users": by_status.get(UserStatus.INACTIVE, 0),
            "uploads": uploads,
        }

    return run_guarded(db, "count_users", _count)
