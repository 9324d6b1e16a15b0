"""Turn an uploaded spreadsheet (CSV or Excel workbook) into an ordered list of row records."""

import csv
import io
import zipfile
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, time

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

CSV_EXTENSIONS = frozenset({".csv"})
# Legacy binary .xls is not an OOXML package; openpyxl cannot open it.
WORKBOOK_EXTENSIONS = frozenset({".xlsx", ".xlsm"})
ALLOWED_EXTENSIONS = CSV_EXTENSIONS | WORKBOOK_EXTENSIONS


class SpreadsheetError(Exception):
    """Raised when an upload cannot be read as a spreadsheet."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


@dataclass
class ParsedSheet:
    """Header names in file order and one dict per non-blank data row."""

    columns: list[str]
    rows: list[dict[str, str]] = field(default_factory=list)


def _extension(filename: str) -> str:
    dot = filename.rfind(".")
    return filename[dot:].lower() if dot != -1 else ""


def has_allowed_extension(filename: str) -> bool:
    return _extension(filename) in ALLOWED_EXTENSIONS


def _unique_headers(raw: Sequence[str]) -> list[str]:
    """Fill blank headers and suffix duplicates so every column keeps its own key."""
    seen: dict[str, int] = {}
    headers: list[str] = []
    for i, name in enumerate(raw):
        name = name.strip() or f"column_{i + 1}"
        count = seen.get(name, 0)
        seen[name] = count + 1
        headers.append(name if count == 0 else f"{name}_{count + 1}")
    return headers


def _build_sheet(records: Iterable[Sequence[str]], max_rows: int) -> ParsedSheet:
    """
    First record is the header. Fully blank records are skipped; short records
    are padded with empty strings and extra cells are dropped.
    """
    it = iter(records)
    header = next(it, None)
    if header is None or not any(cell.strip() for cell in header):
        raise SpreadsheetError("File has no header row.")
    columns = _unique_headers(header)

    rows: list[dict[str, str]] = []
    for cells in it:
        if not any(cell.strip() for cell in cells):
            continue
        if len(rows) >= max_rows:
            raise SpreadsheetError(f"At most {max_rows} rows per upload.")
        padded = list(cells) + [""] * (len(columns) - len(cells))
        rows.append(dict(zip(columns, padded)))
    return ParsedSheet(columns=columns, rows=rows)


def parse_rows(content: bytes, max_rows: int) -> ParsedSheet:
    """Parse CSV bytes (UTF-8, optional BOM) into a ParsedSheet."""
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise SpreadsheetError("File must be UTF-8 encoded text.") from e

    try:
        return _build_sheet(csv.reader(io.StringIO(text)), max_rows)
    except csv.Error as e:
        raise SpreadsheetError(f"Invalid CSV: {e!s}") from e


def _cell_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def parse_workbook(content: bytes, max_rows: int) -> ParsedSheet:
    """
    Parse the first worksheet of an .xlsx/.xlsm workbook into a ParsedSheet.

    Cached formula results are read, not formulas. Cell values are rendered as
    text (dates in ISO format) so rows look the same as CSV rows.
    """
    try:
        workbook = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as e:
        raise SpreadsheetError("File is not a readable Excel workbook.") from e

    try:
        if not workbook.worksheets:
            raise SpreadsheetError("Workbook has no worksheets.")
        sheet = workbook.worksheets[0]
        records = (
            [_cell_text(v) for v in values]
            for values in sheet.iter_rows(values_only=True)
        )
        return _build_sheet(records, max_rows)
    finally:
        workbook.close()


def parse_upload(filename: str, content: bytes, max_rows: int) -> ParsedSheet:
    """Dispatch on the file extension. Raises SpreadsheetError for unsupported or unreadable files."""
    ext = _extension(filename)
    if ext in CSV_EXTENSIONS:
        return parse_rows(content, max_rows)
    if ext in WORKBOOK_EXTENSIONS:
        return parse_workbook(content, max_rows)
    raise SpreadsheetError("Unsupported file type.")
