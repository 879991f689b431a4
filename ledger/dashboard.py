"""
Dashboard - Composition Root

This module ties the components together: it owns the Transaction Store
and the three chart window selectors, and it is the only place the
presentation layer goes through.

Flow of every user action:
1. The UI calls add / update / remove / import here
2. The store mutates synchronously
3. The next ``snapshot()`` recomputes every view from the full store

DESIGN DECISION: The dashboard holds state but no derived data. There is
nothing to invalidate after a mutation.
"""

from datetime import datetime
from typing import Optional, Union

from ledger.config import Settings, get_settings
from ledger.logging_setup import configure_logging, get_logger
from ledger.models.accounts import TransactionType
from ledger.models.imports import ImportResult
from ledger.models.reports import ChartKind, DashboardSnapshot, DateWindow
from ledger.models.transaction import Transaction, TransactionDraft
from ledger.reports import build_snapshot
from ledger.services.spreadsheet import (
    SpreadsheetSource,
    export_chart_of_accounts,
    export_transactions,
    import_transactions,
)
from ledger.services.storage import (
    InMemoryTransactionStore,
    TransactionStoreInterface,
    new_entry_draft,
    sample_transactions,
)
from ledger.validation import TransactionValidator


logger = get_logger(__name__)


class Dashboard:
    """
    State container for one dashboard session.

    Holds:
    - the Transaction Store (mutated ONLY via add / update / remove)
    - one DateWindow per bar chart (expense, revenue, net income)
    """

    def __init__(
        self,
        store: Optional[TransactionStoreInterface] = None,
        validator: Optional[TransactionValidator] = None,
        default_window: DateWindow = DateWindow.LAST_MONTH,
        max_upload_size_bytes: Optional[int] = None,
    ):
        self._store = store if store is not None else InMemoryTransactionStore()
        self._validator = validator or TransactionValidator()
        self._max_upload_size_bytes = max_upload_size_bytes
        self._windows: dict[ChartKind, DateWindow] = {
            chart: DateWindow(default_window) for chart in ChartKind
        }

    # -------------------------------------------------------------------------
    # Store access
    # -------------------------------------------------------------------------

    @property
    def store(self) -> TransactionStoreInterface:
        return self._store

    @property
    def validator(self) -> TransactionValidator:
        return self._validator

    def transactions(self) -> list[Transaction]:
        """All transactions, newest date first (table order)."""
        return self._store.sorted_by_date()

    def add_transaction(self, draft: TransactionDraft) -> None:
        self._store.add(draft)

    def add_blank_transaction(self) -> None:
        """The table's "new entry" action: today, Income, zero amount."""
        self._store.add(new_entry_draft())

    def update_transaction(self, transaction: Transaction) -> None:
        self._store.update(transaction)

    def remove_transaction(self, transaction_id: str) -> None:
        self._store.remove(transaction_id)

    def change_type(
        self,
        transaction_id: str,
        transaction_type: Union[TransactionType, str],
    ) -> None:
        """
        Switch a transaction's type, resetting its category to the first
        valid option for the new type. Unknown ids are ignored.
        """
        transaction = self._store.get(transaction_id)
        if transaction is None:
            return
        self._store.update(transaction.with_type(transaction_type))

    # -------------------------------------------------------------------------
    # Windows and derived views
    # -------------------------------------------------------------------------

    def window(self, chart: Union[ChartKind, str]) -> DateWindow:
        return self._windows[ChartKind(chart)]

    def set_window(
        self,
        chart: Union[ChartKind, str],
        window: Union[DateWindow, str],
    ) -> None:
        """Select the window of one chart; the other two are unaffected."""
        self._windows[ChartKind(chart)] = DateWindow(window)

    def snapshot(self, now: Optional[datetime] = None) -> DashboardSnapshot:
        """Recompute every view from the current store contents."""
        return build_snapshot(
            self._store.list_transactions(),
            expense_window=self._windows[ChartKind.EXPENSE],
            revenue_window=self._windows[ChartKind.REVENUE],
            net_income_window=self._windows[ChartKind.NET_INCOME],
            now=now,
        )

    # -------------------------------------------------------------------------
    # Spreadsheets
    # -------------------------------------------------------------------------

    def import_spreadsheet(self, source: SpreadsheetSource) -> ImportResult:
        """
        Import every valid row of a workbook.

        Rows are inserted one by one in sheet order; since each insert
        prepends, the last row of the sheet ends up first in the store.

        Raises:
            SpreadsheetError: If the workbook cannot be opened at all
        """
        result = import_transactions(
            source,
            validator=self._validator,
            max_size_bytes=self._max_upload_size_bytes,
        )
        for draft in result.accepted:
            self._store.add(draft)
        return result

    def export_spreadsheet(self) -> bytes:
        """Current transactions as an xlsx workbook."""
        return export_transactions(self._store.list_transactions())

    def export_chart_of_accounts(self) -> bytes:
        """Static chart of accounts reference workbook."""
        return export_chart_of_accounts()


def create_dashboard(
    seed: Optional[bool] = None,
    settings: Optional[Settings] = None,
) -> Dashboard:
    """
    Factory function to create a ready-to-use dashboard.

    Args:
        seed: Start with the sample transactions. Defaults to
              AppSettings.seed_sample_data.
        settings: Settings to use instead of the cached ones.

    Returns:
        A Dashboard over a fresh in-memory store
    """
    settings = settings or get_settings()
    app_settings = settings.app
    configure_logging()

    if seed is None:
        seed = app_settings.seed_sample_data

    store = InMemoryTransactionStore(initial=sample_transactions() if seed else None)
    dashboard = Dashboard(
        store=store,
        default_window=app_settings.default_window,
        max_upload_size_bytes=app_settings.max_upload_size_bytes,
    )
    logger.info(
        "dashboard_created",
        seeded=seed,
        transactions=len(store),
        environment=app_settings.app_environment,
    )
    return dashboard
