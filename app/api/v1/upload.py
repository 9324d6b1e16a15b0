"""Upload endpoint: accept a spreadsheet file, extract its rows, record it in the user's history."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, UploadFile
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.core.errors import (
    PayloadTooLargeError,
    UnsupportedMediaTypeError,
    ValidationError,
)
from app.schemas.auth import Principal
from app.schemas.upload import UploadResponse, UploadResult
from app.services.history import record_upload
from app.services.uploads import SpreadsheetError, has_allowed_extension, parse_upload

logger = logging.getLogger(__name__)
router = APIRouter()


def _is_upload_file(obj: object) -> bool:
    """True if obj is an uploaded file (UploadFile or file-like with filename and read)."""
    if isinstance(obj, UploadFile):
        return True
    return (
        hasattr(obj, "read")
        and callable(getattr(obj, "read", None))
        and hasattr(obj, "filename")
    )


@router.post("", response_model=UploadResponse, status_code=201)
async def upload_spreadsheet(
    request: Request,
    current_user: Annotated[Principal, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> UploadResponse:
    """
    Accept a `.csv` or `.xlsx`/`.xlsm` spreadsheet as `multipart/form-data`.

    The file is read from the `file` field, or from the first file part when the
    client uses another field name (e.g. `excelFile`). Returns the parsed rows and
    the ID of the history record; the rows themselves are not stored.
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type != "multipart/form-data":
        raise UnsupportedMediaTypeError()

    form = await request.form()
    file = form.get("file")
    if file is None or not _is_upload_file(file):
        file = next((v for v in form.values() if _is_upload_file(v)), None)
    if file is None:
        raise ValidationError("Multipart request must include a 'file' field.")

    filename = getattr(file, "filename", None) or ""
    if not has_allowed_extension(filename):
        raise ValidationError("Uploaded file must be a .csv, .xlsx or .xlsm spreadsheet.")

    content = await file.read(settings.MAX_UPLOAD_BYTES + 1)
    if len(content) > settings.MAX_UPLOAD_BYTES:
        raise PayloadTooLargeError(
            f"File size must not exceed {settings.MAX_UPLOAD_BYTES} bytes."
        )

    try:
        sheet = parse_upload(filename, content, max_rows=settings.MAX_UPLOAD_ROWS)
    except SpreadsheetError as e:
        raise ValidationError(e.message) from e

    record = record_upload(
        db,
        user_id=current_user.id,
        filename=filename,
        columns=sheet.columns,
        row_count=len(sheet.rows),
    )
    logger.info(
        "Spreadsheet uploaded",
        extra={"user_id": current_user.id, "upload_id": record.id, "row_count": record.row_count},
    )
    return UploadResponse(
        data=UploadResult(
            id=record.id,
            filename=record.original_filename,
            columns=sheet.columns,
            row_count=record.row_count,
            rows=sheet.rows,
        )
    )
