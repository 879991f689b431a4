"""
Aggregation Engine

DESIGN DECISION: Every derived view is a PURE function of
(transactions, window, now). Nothing is cached; the dashboard recomputes
from the full store on every render, and ``now`` is re-read at call time
unless the caller pins it. Results can therefore move across a wall-clock
day boundary without any invalidation; that is expected.

Day buckets are keyed by "dd/mm" WITHOUT the year, so records from
different years that share a day and month land in the same bucket.
Bars are ordered by the synthetic key month * 31 + day.

Records whose date cannot be read are skipped (and logged) by every
date-dependent view. They still count in ALL_TIME scalar totals, which
apply no date filter at all.
"""

import calendar
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Callable, Iterable, Optional

from dateutil.relativedelta import relativedelta

from ledger.logging_setup import get_logger
from ledger.models.accounts import TransactionType
from ledger.models.reports import (
    ChartKind,
    CompositionSlice,
    DashboardSnapshot,
    DateWindow,
    DayBucket,
    WindowSummary,
)
from ledger.models.transaction import (
    DAY_LABEL_FORMAT,
    Transaction,
    coerce_date,
)
from ledger.reports.palette import color_for


logger = get_logger(__name__)

ZERO = Decimal("0")

_WINDOW_DURATIONS = {
    DateWindow.LAST_7_DAYS: relativedelta(days=7),
    DateWindow.LAST_MONTH: relativedelta(months=1),
    DateWindow.LAST_YEAR: relativedelta(years=1),
}


# =============================================================================
# RECORD ACCESSORS
# =============================================================================

def _amount(transaction: Transaction) -> Decimal:
    amount = transaction.amount
    if isinstance(amount, Decimal):
        return amount
    return Decimal(str(amount))


def _signed_amount(transaction: Transaction) -> Decimal:
    amount = _amount(transaction)
    return amount if transaction.type == TransactionType.INCOME else -amount


def _day_of(transaction: Transaction) -> Optional[date]:
    """The record's date at day granularity, or None if unreadable."""
    day = coerce_date(transaction.date)
    if day is None:
        logger.warning(
            "transaction_date_unparseable",
            transaction_id=getattr(transaction, "id", None),
            raw_date=repr(transaction.date),
        )
    return day


def _now(now: Optional[datetime]) -> datetime:
    return now if now is not None else datetime.now()


# =============================================================================
# FILTERING
# =============================================================================

def window_bounds(
    window: DateWindow,
    now: Optional[datetime] = None,
) -> Optional[tuple[datetime, datetime]]:
    """
    Inclusive [start, end] interval of a window.

    Returns None for ALL_TIME (no filtering). Month and year windows use
    calendar arithmetic, clamped to the end of shorter months.
    """
    window = DateWindow(window)
    if window == DateWindow.ALL_TIME:
        return None
    end = _now(now)
    return end - _WINDOW_DURATIONS[window], end


def filter_by_window(
    transactions: Iterable[Transaction],
    window: DateWindow,
    now: Optional[datetime] = None,
) -> list[Transaction]:
    """
    Keep records whose day (at 00:00) lies inside the window.

    ALL_TIME returns every record untouched.
    """
    bounds = window_bounds(window, now)
    if bounds is None:
        return list(transactions)

    start, end = bounds
    kept = []
    for transaction in transactions:
        day = _day_of(transaction)
        if day is None:
            continue
        if start <= datetime.combine(day, time.min) <= end:
            kept.append(transaction)
    return kept


def filter_by_type(
    transactions: Iterable[Transaction],
    transaction_type: TransactionType,
) -> list[Transaction]:
    """Keep records of one type (isolates Income or Expense before summing)."""
    return [t for t in transactions if t.type == transaction_type]


def current_month(
    transactions: Iterable[Transaction],
    now: Optional[datetime] = None,
) -> list[Transaction]:
    """Records dated within the calendar month of ``now``."""
    today = _now(now).date()
    first = today.replace(day=1)
    last = today.replace(day=calendar.monthrange(today.year, today.month)[1])

    kept = []
    for transaction in transactions:
        day = _day_of(transaction)
        if day is not None and first <= day <= last:
            kept.append(transaction)
    return kept


# =============================================================================
# BY-DAY GROUPING
# =============================================================================

def day_label(day: date) -> str:
    """Bucket label for a day: dd/mm, year dropped."""
    return day.strftime(DAY_LABEL_FORMAT)


def group_by_day(
    transactions: Iterable[Transaction],
    value: Callable[[Transaction], Decimal] = _amount,
) -> list[DayBucket]:
    """
    Sum ``value`` per dd/mm bucket, ordered by month * 31 + day.

    Records with an unreadable date are left out.
    """
    sums: dict[str, Decimal] = {}
    for transaction in transactions:
        day = _day_of(transaction)
        if day is None:
            continue
        label = day_label(day)
        sums[label] = sums.get(label, ZERO) + value(transaction)

    buckets = [DayBucket(label=label, value=total) for label, total in sums.items()]
    return sorted(buckets, key=lambda bucket: bucket.sort_key)


def expense_by_day(
    transactions: Iterable[Transaction],
    window: DateWindow = DateWindow.ALL_TIME,
    now: Optional[datetime] = None,
) -> list[DayBucket]:
    """Expense totals per day inside the window."""
    in_window = filter_by_window(transactions, window, now)
    return group_by_day(filter_by_type(in_window, TransactionType.EXPENSE))


def revenue_by_day(
    transactions: Iterable[Transaction],
    window: DateWindow = DateWindow.ALL_TIME,
    now: Optional[datetime] = None,
) -> list[DayBucket]:
    """Income totals per day inside the window."""
    in_window = filter_by_window(transactions, window, now)
    return group_by_day(filter_by_type(in_window, TransactionType.INCOME))


def net_income_by_day(
    transactions: Iterable[Transaction],
    window: DateWindow = DateWindow.ALL_TIME,
    now: Optional[datetime] = None,
) -> list[DayBucket]:
    """Income minus expenses per day inside the window."""
    in_window = filter_by_window(transactions, window, now)
    return group_by_day(in_window, value=_signed_amount)


# =============================================================================
# SCALAR TOTALS
# =============================================================================

def _sum(transactions: Iterable[Transaction], value: Callable[[Transaction], Any]) -> Decimal:
    return sum((value(t) for t in transactions), ZERO)


def expense_total(
    transactions: Iterable[Transaction],
    window: DateWindow = DateWindow.ALL_TIME,
    now: Optional[datetime] = None,
) -> Decimal:
    in_window = filter_by_window(transactions, window, now)
    return _sum(filter_by_type(in_window, TransactionType.EXPENSE), _amount)


def revenue_total(
    transactions: Iterable[Transaction],
    window: DateWindow = DateWindow.ALL_TIME,
    now: Optional[datetime] = None,
) -> Decimal:
    in_window = filter_by_window(transactions, window, now)
    return _sum(filter_by_type(in_window, TransactionType.INCOME), _amount)


def net_income_total(
    transactions: Iterable[Transaction],
    window: DateWindow = DateWindow.ALL_TIME,
    now: Optional[datetime] = None,
) -> Decimal:
    return _sum(filter_by_window(transactions, window, now), _signed_amount)


def current_month_net_income(
    transactions: Iterable[Transaction],
    now: Optional[datetime] = None,
) -> Decimal:
    """Signed sum over the current calendar month ("month balance")."""
    return _sum(current_month(transactions, now), _signed_amount)


# =============================================================================
# COMPOSITION (PIE CHARTS)
# =============================================================================

def _composition(
    transactions: Iterable[Transaction],
    key: Callable[[Transaction], str],
) -> list[CompositionSlice]:
    """Sum amounts per key, keeping first-seen order."""
    sums: dict[str, Decimal] = {}
    for transaction in transactions:
        name = key(transaction)
        sums[name] = sums.get(name, ZERO) + _amount(transaction)

    grand_total = sum(sums.values(), ZERO)
    slices = []
    for name, total in sums.items():
        share = float(total / grand_total) if grand_total > 0 else 0.0
        color = color_for(name)
        slices.append(CompositionSlice(
            name=name,
            value=total,
            share=min(max(share, 0.0), 1.0),
            color=color.color,
            is_fallback_color=color.is_fallback,
        ))
    return slices


def type_composition(transactions: Iterable[Transaction]) -> list[CompositionSlice]:
    """Income vs Expense amounts (two slices at most)."""
    return _composition(transactions, key=lambda t: TransactionType(t.type).value)


def category_composition(transactions: Iterable[Transaction]) -> list[CompositionSlice]:
    """Amounts per category, regardless of type."""
    return _composition(transactions, key=lambda t: str(t.category))


# =============================================================================
# SNAPSHOT
# =============================================================================

def last_update(transactions: Iterable[Transaction]) -> Optional[date]:
    """Latest readable transaction date, or None for an empty store."""
    days = [day for day in (coerce_date(t.date) for t in transactions) if day is not None]
    return max(days) if days else None


def build_snapshot(
    transactions: Iterable[Transaction],
    expense_window: DateWindow = DateWindow.LAST_MONTH,
    revenue_window: DateWindow = DateWindow.LAST_MONTH,
    net_income_window: DateWindow = DateWindow.LAST_MONTH,
    now: Optional[datetime] = None,
) -> DashboardSnapshot:
    """
    Compute every dashboard view from the full transaction list.

    Each of the three charts has its own window; the month balance and the
    two pie charts are always pinned to the current calendar month.
    """
    records = list(transactions)
    now = _now(now)
    month = current_month(records, now)

    return DashboardSnapshot(
        generated_at=now,
        expenses=WindowSummary(
            chart=ChartKind.EXPENSE,
            window=expense_window,
            total=expense_total(records, expense_window, now),
            buckets=expense_by_day(records, expense_window, now),
        ),
        revenue=WindowSummary(
            chart=ChartKind.REVENUE,
            window=revenue_window,
            total=revenue_total(records, revenue_window, now),
            buckets=revenue_by_day(records, revenue_window, now),
        ),
        net_income=WindowSummary(
            chart=ChartKind.NET_INCOME,
            window=net_income_window,
            total=net_income_total(records, net_income_window, now),
            buckets=net_income_by_day(records, net_income_window, now),
        ),
        current_month_net_income=_sum(month, _signed_amount),
        type_composition=type_composition(month),
        category_composition=category_composition(month),
        last_update=last_update(records),
        transaction_count=len(records),
    )
