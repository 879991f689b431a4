"""
Reporting Models

Value objects produced by the aggregation engine and consumed by the
presentation layer. None of these are stored; they are recomputed from
the full transaction list on every render.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class DateWindow(str, Enum):
    """
    Date range applied before aggregation.

    Bounded windows end at "now" and reach back the given duration;
    ALL_TIME applies no filter.
    """
    LAST_7_DAYS = "1W"
    LAST_MONTH = "1M"
    LAST_YEAR = "1Y"
    ALL_TIME = "ALL"

    @property
    def label(self) -> str:
        return _WINDOW_LABELS[self]


_WINDOW_LABELS = {
    DateWindow.LAST_7_DAYS: "Last 7 days",
    DateWindow.LAST_MONTH: "Last month",
    DateWindow.LAST_YEAR: "Last year",
    DateWindow.ALL_TIME: "All time",
}


class ChartKind(str, Enum):
    """The three charts that carry their own window selector."""
    EXPENSE = "expense"
    REVENUE = "revenue"
    NET_INCOME = "net_income"


class DayBucket(BaseModel):
    """One bar of a by-day chart."""

    label: str = Field(
        ...,
        pattern=r"^\d{2}/\d{2}$",
        description="Day of month as dd/mm (no year)"
    )
    value: Decimal = Field(
        ...,
        description="Sum for the day; may be negative for net income"
    )

    @property
    def sort_key(self) -> int:
        """month * 31 + day, the display ordering of the bars."""
        day, month = (int(part) for part in self.label.split("/"))
        return month * 31 + day


class CategoryColor(BaseModel):
    """
    Display color for a slice.

    ``is_fallback`` marks names missing from the fixed palette; their color
    is derived from the name and is stable but carries no meaning.
    """

    name: str
    color: str = Field(..., pattern=r"^#[0-9A-Fa-f]{6}$")
    is_fallback: bool = False


class CompositionSlice(BaseModel):
    """One slice of a pie chart."""

    name: str
    value: Decimal
    share: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Fraction of the sum of all slices in the chart"
    )
    color: str
    is_fallback_color: bool = False


class WindowSummary(BaseModel):
    """Headline figure plus the bars for one chart."""

    chart: ChartKind
    window: DateWindow
    total: Decimal
    buckets: list[DayBucket] = Field(default_factory=list)


class DashboardSnapshot(BaseModel):
    """Every derived view the dashboard shows, computed in one pass."""

    generated_at: datetime
    expenses: WindowSummary
    revenue: WindowSummary
    net_income: WindowSummary

    current_month_net_income: Decimal
    type_composition: list[CompositionSlice] = Field(default_factory=list)
    category_composition: list[CompositionSlice] = Field(default_factory=list)

    last_update: Optional[date] = Field(
        default=None,
        description="Latest transaction date in the store"
    )
    transaction_count: int = Field(default=0, ge=0)
