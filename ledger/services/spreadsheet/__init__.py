"""Spreadsheet (xlsx) import and export."""

from ledger.services.spreadsheet.excel import (
    CHART_OF_ACCOUNTS_COLUMNS,
    TRANSACTION_COLUMNS,
    SpreadsheetError,
    SpreadsheetSource,
    UploadTooLargeError,
    coerce_amount,
    coerce_cell_date,
    coerce_merchant_id,
    export_chart_of_accounts,
    export_transactions,
    import_transactions,
)

__all__ = [
    "CHART_OF_ACCOUNTS_COLUMNS",
    "TRANSACTION_COLUMNS",
    "SpreadsheetError",
    "SpreadsheetSource",
    "UploadTooLargeError",
    "coerce_amount",
    "coerce_cell_date",
    "coerce_merchant_id",
    "export_chart_of_accounts",
    "export_transactions",
    "import_transactions",
]
