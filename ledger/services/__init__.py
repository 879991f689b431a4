"""Services package."""

from ledger.services.spreadsheet import (
    SpreadsheetError,
    UploadTooLargeError,
    export_chart_of_accounts,
    export_transactions,
    import_transactions,
)
from ledger.services.storage import (
    DuplicateError,
    InMemoryTransactionStore,
    NotFoundError,
    StorageError,
    TransactionStoreInterface,
)

__all__ = [
    # Spreadsheet services
    "SpreadsheetError",
    "UploadTooLargeError",
    "export_chart_of_accounts",
    "export_transactions",
    "import_transactions",
    # Storage services
    "DuplicateError",
    "InMemoryTransactionStore",
    "NotFoundError",
    "StorageError",
    "TransactionStoreInterface",
]
