"""Reporting package: aggregation engine, palette and display formatting."""

from ledger.reports.aggregation import (
    build_snapshot,
    category_composition,
    current_month,
    current_month_net_income,
    day_label,
    expense_by_day,
    expense_total,
    filter_by_type,
    filter_by_window,
    group_by_day,
    last_update,
    net_income_by_day,
    net_income_total,
    revenue_by_day,
    revenue_total,
    type_composition,
    window_bounds,
)
from ledger.reports.formatting import format_currency, format_share
from ledger.reports.palette import (
    CATEGORY_COLORS,
    TYPE_COLORS,
    color_for,
    fallback_color,
)

__all__ = [
    # Aggregation
    "build_snapshot",
    "category_composition",
    "current_month",
    "current_month_net_income",
    "day_label",
    "expense_by_day",
    "expense_total",
    "filter_by_type",
    "filter_by_window",
    "group_by_day",
    "last_update",
    "net_income_by_day",
    "net_income_total",
    "revenue_by_day",
    "revenue_total",
    "type_composition",
    "window_bounds",
    # Formatting
    "format_currency",
    "format_share",
    # Palette
    "CATEGORY_COLORS",
    "TYPE_COLORS",
    "color_for",
    "fallback_color",
]
