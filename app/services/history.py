"""Upload history: record and list per-user upload metadata."""

from sqlalchemy.orm import Session

from app.core.database import run_guarded
from app.models import UploadRecord

DEFAULT_HISTORY_LIMIT = 100


def record_upload(
    db: Session,
    user_id: str,
    filename: str,
    columns: list[str],
    row_count: int,
) -> UploadRecord:
    """Persist one history entry and return it with its ID."""

    def _insert() -> UploadRecord:
        record = UploadRecord(
            user_id=user_id,
            original_filename=filename,
            column_names=columns,
            row_count=row_count,
        )
        db.add(record)
        db.commit()
        db.refresh(record)
        return record

    return run_guarded(db, "record_upload", _insert)


def list_uploads(db: Session, user_id: str, limit: int = DEFAULT_HISTORY_LIMIT) -> list[UploadRecord]:
    """Return the user's uploads, newest first."""
    return run_guarded(
        db,
        "list_uploads",
        lambda: db.query(UploadRecord)
        .filter(UploadRecord.user_id == user_id)
        .order_by(UploadRecord.created_at.desc(), UploadRecord.id.desc())
        .limit(limit)
        .all(),
    )
