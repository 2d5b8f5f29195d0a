"""Read .xlsx uploads into row dicts (openpyxl)."""

from __future__ import annotations

import io
import zipfile
from datetime import date, datetime
from typing import Any

from openpyxl import load_workbook

from app.domain.exceptions import ValidationException


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def read_rows(contents: bytes) -> list[dict[str, str]]:
    """Return the first sheet as dicts keyed by the header row.

    Every value is a string; empty cells become "". Fully empty rows are
    dropped and columns without a header are ignored.

    Raises:
        ValidationException: If contents is not a readable workbook or the
            header row is empty.
    """
    try:
        wb = load_workbook(filename=io.BytesIO(contents), read_only=True, data_only=True)
    except (zipfile.BadZipFile, KeyError, ValueError, OSError) as e:
        raise ValidationException("Only Excel .xlsx files are supported", "file") from e

    try:
        ws = wb.worksheets[0] if wb.worksheets else None
        if ws is None:
            raise ValidationException("No sheets found in the workbook", "file")
        rows = ws.iter_rows(values_only=True)
        header_row = next(rows, None)
        headers = [_cell_text(h) for h in (header_row or ())]
        if not any(headers):
            raise ValidationException("Excel header row is empty", "file")

        records: list[dict[str, str]] = []
        for row in rows:
            if not row or all(v is None for v in row):
                continue
            record = {
                header: _cell_text(value)
                for header, value in zip(headers, row)
                if header
            }
            # Short rows: missing trailing cells count as blank.
            for header in headers:
                if header and header not in record:
                    record[header] = ""
            records.append(record)
        return records
    finally:
        wb.close()
