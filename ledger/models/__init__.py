"""
Data Models Package

This package contains the chart of accounts and all Pydantic models used
in Merchant Ledger. All data flowing through the system conforms to these
schemas.
"""

from ledger.models.accounts import (
    ACCOUNT_DESCRIPTIONS,
    CHART_OF_ACCOUNTS,
    ExpenseCategory,
    IncomeCategory,
    TransactionType,
    categories_for,
    chart_of_accounts_rows,
    default_category,
    is_valid_category,
)
from ledger.models.transaction import (
    DATE_LABEL_FORMAT,
    DAY_LABEL_FORMAT,
    TEXT_DATE_FORMATS,
    Transaction,
    TransactionDraft,
    coerce_date,
    parse_text_date,
)
from ledger.models.reports import (
    CategoryColor,
    ChartKind,
    CompositionSlice,
    DashboardSnapshot,
    DateWindow,
    DayBucket,
    WindowSummary,
)
from ledger.models.imports import ImportResult, SkippedRow
from ledger.models.validation import ValidationIssue, ValidationResult

__all__ = [
    # Chart of accounts
    "ACCOUNT_DESCRIPTIONS",
    "CHART_OF_ACCOUNTS",
    "ExpenseCategory",
    "IncomeCategory",
    "TransactionType",
    "categories_for",
    "chart_of_accounts_rows",
    "default_category",
    "is_valid_category",
    # Transactions
    "DATE_LABEL_FORMAT",
    "DAY_LABEL_FORMAT",
    "TEXT_DATE_FORMATS",
    "Transaction",
    "TransactionDraft",
    "coerce_date",
    "parse_text_date",
    # Reports
    "CategoryColor",
    "ChartKind",
    "CompositionSlice",
    "DashboardSnapshot",
    "DateWindow",
    "DayBucket",
    "WindowSummary",
    # Import
    "ImportResult",
    "SkippedRow",
    # Validation
    "ValidationIssue",
    "ValidationResult",
]
