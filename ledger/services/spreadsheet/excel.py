"""
Spreadsheet Import / Export

DESIGN DECISION: xlsx files are read and written with openpyxl, one sheet
per workbook. Column names match the transaction shape and are
case-sensitive.

IMPORT IS BEST EFFORT:
- a row whose date cannot be read by any fallback is skipped with a
  diagnostic, and the next row is processed
- missing or non-numeric numbers default (merchantId -> default merchant,
  amount -> 0); missing strings default to fixed fallback values
- an amount too large to hold in cents is skipped with a diagnostic
- type and category must match the chart of accounts, otherwise the row
  is skipped
- the ``id`` column is ignored; the store assigns fresh identifiers
Only a workbook that cannot be opened at all raises.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from io import BytesIO
from pathlib import Path
from typing import Any, BinaryIO, Iterable, Iterator, Optional, Union

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font
from openpyxl.utils.datetime import from_excel

from ledger.config import get_settings
from ledger.logging_setup import get_logger
from ledger.models.accounts import chart_of_accounts_rows
from ledger.models.imports import ImportResult, SkippedRow
from ledger.models.transaction import Transaction, coerce_date
from ledger.validation import TransactionValidator


logger = get_logger(__name__)


# Column layout of the transactions sheet
TRANSACTION_COLUMNS = [
    "id",
    "merchantId",
    "merchantName",
    "type",
    "category",
    "description",
    "date",
    "amount",
]

# Column layout of the chart of accounts reference sheet
CHART_OF_ACCOUNTS_COLUMNS = [
    "Type",
    "Category",
    "Description",
]

SpreadsheetSource = Union[bytes, BinaryIO, str, Path]

CENTS = Decimal("0.01")


class SpreadsheetError(Exception):
    """The workbook could not be read or written."""
    pass


class UploadTooLargeError(SpreadsheetError):
    """The uploaded file exceeds the configured size limit."""
    pass


# =============================================================================
# EXPORT
# =============================================================================

def _transaction_to_row(transaction: Transaction, date_format: str) -> list:
    """Flatten a Transaction into a sheet row (TRANSACTION_COLUMNS order)."""
    return [
        transaction.id,
        transaction.merchant_id,
        transaction.merchant_name,
        transaction.type.value,
        transaction.category,
        transaction.description,
        transaction.date.strftime(date_format),
        transaction.amount,
    ]


def _new_sheet(title: str, headers: list[str]) -> tuple[Workbook, Any]:
    wb = Workbook()
    ws = wb.active
    ws.title = title
    ws.append(headers)
    for cell in ws[1]:
        cell.font = Font(bold=True)
    return wb, ws


def _to_bytes(wb: Workbook) -> bytes:
    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def export_transactions(
    transactions: Iterable[Transaction],
    sheet_name: Optional[str] = None,
) -> bytes:
    """
    Export transactions to an xlsx workbook.

    One header row, then one row per transaction in the given order.
    Dates are written as dd-mm-YYYY text.

    Returns:
        The workbook file contents
    """
    settings = get_settings().spreadsheet
    wb, ws = _new_sheet(
        sheet_name or settings.transactions_sheet_name,
        TRANSACTION_COLUMNS,
    )

    count = 0
    for transaction in transactions:
        ws.append(_transaction_to_row(transaction, settings.export_date_format))
        count += 1

    logger.info("spreadsheet_exported", sheet=ws.title, rows=count)
    return _to_bytes(wb)


def export_chart_of_accounts(sheet_name: Optional[str] = None) -> bytes:
    """
    Export the static chart of accounts reference (type, category, description).

    Independent of any live data.
    """
    settings = get_settings().spreadsheet
    wb, ws = _new_sheet(
        sheet_name or settings.chart_of_accounts_sheet_name,
        CHART_OF_ACCOUNTS_COLUMNS,
    )
    for row in chart_of_accounts_rows():
        ws.append(list(row))
    return _to_bytes(wb)


# =============================================================================
# IMPORT - CELL COERCION
# =============================================================================

def coerce_cell_date(value: Any, formats: Iterable[str]) -> Optional[date]:
    """
    Read a date from a cell value.

    - date/datetime cells are used as-is (truncated to the day)
    - numbers are Excel date serials
    - text is tried against each format in order
    Returns None when nothing works.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        try:
            converted = from_excel(value)
        except (ValueError, OverflowError, TypeError):
            return None
        # serials below 1 are times of day, not dates
        return converted.date() if isinstance(converted, datetime) else None
    return coerce_date(value, tuple(formats))


def _decimal_or_none(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    if not number.is_finite():
        return None
    return number


def coerce_amount(value: Any) -> Decimal:
    """
    Numeric amount rounded to cents; missing or non-numeric gives 0.

    Raises:
        ValueError: If the number is too large to hold in cents
    """
    number = _decimal_or_none(value)
    if number is None:
        return Decimal("0.00")
    try:
        return number.quantize(CENTS)
    except InvalidOperation as e:
        raise ValueError(f"Amount out of range: {value}") from e


def coerce_merchant_id(value: Any, default: int) -> int:
    """Positive whole number, otherwise the default merchant id."""
    number = _decimal_or_none(value)
    if number is None or number < 1 or number != number.to_integral_value():
        return default
    return int(number)


def _text_or(value: Any, default: Optional[str]) -> Optional[str]:
    if value is None:
        return default
    text = str(value).strip()
    return text or default


# =============================================================================
# IMPORT
# =============================================================================

def _open_workbook(source: SpreadsheetSource, max_size_bytes: Optional[int]):
    if isinstance(source, (bytes, bytearray)):
        if max_size_bytes is not None and len(source) > max_size_bytes:
            raise UploadTooLargeError(
                f"File is {len(source)} bytes; the limit is {max_size_bytes} bytes"
            )
        source = BytesIO(source)
    try:
        return load_workbook(source, read_only=True, data_only=True)
    except Exception as e:
        raise SpreadsheetError(f"Could not open spreadsheet: {e}") from e


def _iter_records(ws) -> Iterator[tuple[int, dict[str, Any]]]:
    """
    Yield (row_number, {column: value}) for every non-empty data row.

    Blank cells are left out of the mapping, like absent columns.
    """
    rows = ws.iter_rows(values_only=True)
    header_row = next(rows, None)
    if header_row is None:
        return
    headers = [str(h).strip() if h is not None else None for h in header_row]

    for row_number, row in enumerate(rows, start=2):
        record = {}
        for header, value in zip(headers, row):
            if header is None or value is None:
                continue
            if isinstance(value, str) and not value.strip():
                continue
            record[header] = value
        if record:
            yield row_number, record


def _skip(
    result: ImportResult,
    row_number: int,
    field: Optional[str],
    reason: str,
    raw_value: Any,
) -> None:
    """Record a dropped row and log it."""
    result.skipped.append(SkippedRow(
        row_number=row_number,
        field=field,
        reason=reason,
        raw_value=raw_value,
    ))
    logger.warning(
        "import_row_skipped",
        row=row_number,
        field=field,
        reason=reason,
        raw_value=repr(raw_value),
    )


def import_transactions(
    source: SpreadsheetSource,
    validator: Optional[TransactionValidator] = None,
    max_size_bytes: Optional[int] = None,
) -> ImportResult:
    """
    Parse the first sheet of a workbook into transaction drafts.

    Args:
        source: File contents, a binary file object, or a path
        validator: Validator used for every row (a default one otherwise)
        max_size_bytes: Reject byte uploads larger than this

    Returns:
        ImportResult with accepted drafts in sheet order and a SkippedRow
        for every row that was dropped

    Raises:
        SpreadsheetError: If the workbook itself cannot be opened
    """
    settings = get_settings()
    merchant = settings.merchant
    date_formats = settings.spreadsheet.date_formats_list
    validator = validator or TransactionValidator()

    wb = _open_workbook(source, max_size_bytes)
    result = ImportResult()
    try:
        ws = wb.worksheets[0]
        for row_number, record in _iter_records(ws):
            raw_date = record.get("date")
            parsed_date = coerce_cell_date(raw_date, date_formats)
            if parsed_date is None:
                _skip(result, row_number, "date", "Invalid date format", raw_date)
                continue

            raw_amount = record.get("amount")
            try:
                amount = coerce_amount(raw_amount)
            except ValueError as e:
                _skip(result, row_number, "amount", str(e), raw_amount)
                continue

            fields = {
                "merchant_id": coerce_merchant_id(record.get("merchantId"), merchant.default_id),
                "merchant_name": _text_or(record.get("merchantName"), merchant.default_name),
                "type": _text_or(record.get("type"), None),
                "category": _text_or(record.get("category"), None),
                "description": _text_or(record.get("description"), None),
                "date": parsed_date,
                "amount": amount,
            }
            draft, validation = validator.validate_fields(fields)
            if draft is None:
                issue = validation.first_error
                column = _column_for(issue.field) if issue else None
                _skip(
                    result,
                    row_number,
                    column,
                    issue.message if issue else "Invalid row",
                    record.get(column) if column else None,
                )
                continue

            result.accepted.append(draft)
    finally:
        wb.close()

    logger.info(
        "spreadsheet_imported",
        accepted=result.accepted_count,
        skipped=result.skipped_count,
    )
    return result


_FIELD_TO_COLUMN = {
    "merchant_id": "merchantId",
    "merchant_name": "merchantName",
}


def _column_for(field: str) -> str:
    """Map a model field name back to its sheet column."""
    return _FIELD_TO_COLUMN.get(field, field)
