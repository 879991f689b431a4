"""
Chart Palette

Fixed display colors for the two transaction types and every category of
the chart of accounts. A name outside the palette (a category typed by hand
during an edit, say) gets a color derived from an md5 of the name, so the
same name always renders the same way within and across sessions. Fallback
colors are flagged and must never be used to identify anything.
"""

import hashlib

from ledger.logging_setup import get_logger
from ledger.models.accounts import ExpenseCategory, IncomeCategory, TransactionType
from ledger.models.reports import CategoryColor


logger = get_logger(__name__)


TYPE_COLORS: dict[str, str] = {
    TransactionType.INCOME.value: "#10B981",
    TransactionType.EXPENSE.value: "#EF4444",
}

CATEGORY_COLORS: dict[str, str] = {
    IncomeCategory.PRODUCT_SALES.value: "#3B82F6",
    IncomeCategory.CUSTOMER_PAID_SHIPPING.value: "#6366F1",
    IncomeCategory.FINANCIAL_INCOME.value: "#8B5CF6",
    IncomeCategory.OTHER_INCOME.value: "#EC4899",
    ExpenseCategory.DIRECT_COSTS.value: "#F59E0B",
    ExpenseCategory.MERCHANDISE_PURCHASES.value: "#D97706",
    ExpenseCategory.PACKAGING_AND_SUPPLIES.value: "#B45309",
    ExpenseCategory.SHIPPING_AND_LOGISTICS.value: "#92400E",
    ExpenseCategory.MARKETPLACE_COMMISSIONS.value: "#059669",
    ExpenseCategory.PAYMENT_FEES.value: "#047857",
    ExpenseCategory.OPERATING_EXPENSES.value: "#DC2626",
    ExpenseCategory.PLATFORMS_AND_TOOLS.value: "#B91C1C",
    ExpenseCategory.MARKETING_AND_ADVERTISING.value: "#991B1B",
    ExpenseCategory.TAXES_AND_FEES.value: "#7F1D1D",
    ExpenseCategory.EQUIPMENT_AND_MAINTENANCE.value: "#4B5563",
}

# Bar fills of the by-day charts
EXPENSE_BAR_COLOR = "#FF0000"
REVENUE_BAR_COLOR = "#0000FF"
NET_POSITIVE_BAR_COLOR = "#000000"
NET_NEGATIVE_BAR_COLOR = "#FF0000"

_PALETTE = {**TYPE_COLORS, **CATEGORY_COLORS}


def fallback_color(name: str) -> str:
    """Deterministic #RRGGBB derived from the name."""
    digest = hashlib.md5(name.encode("utf-8")).hexdigest()
    return f"#{digest[:6].upper()}"


def color_for(name: str) -> CategoryColor:
    """Palette color for a type or category name, with hash fallback."""
    color = _PALETTE.get(name)
    if color is not None:
        return CategoryColor(name=name, color=color)

    logger.debug("category_color_fallback", name=name)
    return CategoryColor(name=name, color=fallback_color(name), is_fallback=True)
