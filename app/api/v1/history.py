"""Upload history of the authenticated user."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.core.database import get_db
from app.schemas.auth import Principal
from app.schemas.upload import HistoryItem, HistoryResponse
from app.services.history import DEFAULT_HISTORY_LIMIT, list_uploads

router = APIRouter()


@router.get("", response_model=HistoryResponse)
def get_history(
    current_user: Annotated[Principal, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    limit: Annotated[int, Query(ge=1, le=500)] = DEFAULT_HISTORY_LIMIT,
) -> HistoryResponse:
    """Return the caller's uploads, newest first."""
    records = list_uploads(db, current_user.id, limit=limit)
    return HistoryResponse(
        data=[
            HistoryItem(
                id=r.id,
                filename=r.original_filename,
                columns=list(r.column_names or []),
                row_count=r.row_count,
                created_at=r.created_at,
            )
            for r in records
        ]
    )
