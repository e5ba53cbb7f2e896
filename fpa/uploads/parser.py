"""
XLSX upload parser.

Reads the first worksheet of an uploaded workbook. The first row is a
header and is skipped; each following row holds six columns:

    Type | Account | Department | Year | Month | Amount

Blank rows are ignored. Any unparseable cell aborts the whole parse, so
ingestion never starts on a partially read file.
"""
import logging
from decimal import Decimal, InvalidOperation
from io import BytesIO
from typing import Any, BinaryIO, List, Union

import openpyxl
from pydantic import ValidationError as PydanticValidationError

from fpa.errors import UploadParseError
from fpa.records.schemas import RawRecord

logger = logging.getLogger(__name__)

COLUMNS = ("type", "account", "department", "year", "month", "amount")


def _cell_text(value: Any) -> str:
    """Normalize a cell value to stripped text."""
    if value is None:
        return ""
    if isinstance(value, float) and value == int(value):
        return str(int(value))
    return str(value).strip()


def _parse_int(value: Any, column: str, row_number: int) -> int:
    text = _cell_text(value)
    try:
        return int(text)
    except ValueError:
        raise UploadParseError(f"Row {row_number}: invalid {column} {text!r}")


def _parse_decimal(value: Any, column: str, row_number: int) -> Decimal:
    # bool is an int subclass; Excel TRUE/FALSE cells are not amounts
    if isinstance(value, bool):
        raise UploadParseError(f"Row {row_number}: invalid {column} {value!r}")
    if isinstance(value, (int, float)):
        return Decimal(str(value))
    text = _cell_text(value).replace(",", "")
    try:
        return Decimal(text)
    except InvalidOperation:
        raise UploadParseError(f"Row {row_number}: invalid {column} {text!r}")


def parse_rows(rows: List[tuple]) -> List[RawRecord]:
    """Turn worksheet value tuples (header included) into raw records."""
    records = []
    for row_number, row in enumerate(rows[1:], start=2):
        values = list(row[: len(COLUMNS)]) + [None] * (len(COLUMNS) - len(row))
        if all(_cell_text(v) == "" for v in values):
            continue

        type_, account, department, year, month, amount = values
        try:
            records.append(
                RawRecord(
                    type=_cell_text(type_),
                    account=_cell_text(account),
                    department=_cell_text(department) or None,
                    year=_parse_int(year, "year", row_number),
                    month=_parse_int(month, "month", row_number),
                    amount=_parse_decimal(amount, "amount", row_number),
                )
            )
        except PydanticValidationError as e:
            raise UploadParseError(f"Row {row_number}: {e.errors()[0]['msg']}") from e

    return records


def parse_workbook(source: Union[bytes, BinaryIO]) -> List[RawRecord]:
    """Parse an uploaded .xlsx file into raw records."""
    if isinstance(source, bytes):
        source = BytesIO(source)

    try:
        wb = openpyxl.load_workbook(source, read_only=True, data_only=True)
    except Exception as e:
        raise UploadParseError(f"Could not open workbook: {e}") from e

    try:
        sheet = wb.worksheets[0]
        rows = list(sheet.iter_rows(values_only=True))
    finally:
        wb.close()

    records = parse_rows(rows)
    logger.info(f"Parsed {len(records)} rows from uploaded workbook")
    return records
