"""Sample data and defaults for new entries."""

from datetime import date
from decimal import Decimal
from typing import Optional

from ledger.config import get_settings
from ledger.models.accounts import (
    ExpenseCategory,
    IncomeCategory,
    TransactionType,
    default_category,
)
from ledger.models.transaction import Transaction, TransactionDraft


def sample_transactions() -> list[Transaction]:
    """The records a fresh dashboard starts with."""
    merchant = get_settings().merchant
    common = {
        "merchant_id": merchant.default_id,
        "merchant_name": merchant.default_name,
        "date": date(2025, 3, 7),
    }
    return [
        Transaction(
            id="1",
            type=TransactionType.INCOME,
            category=IncomeCategory.PRODUCT_SALES.value,
            description="Venda Marketplace",
            amount=Decimal("5000"),
            **common,
        ),
        Transaction(
            id="2",
            type=TransactionType.EXPENSE,
            category=ExpenseCategory.DIRECT_COSTS.value,
            description="Compra de Estoque",
            amount=Decimal("500"),
            **common,
        ),
        Transaction(
            id="3",
            type=TransactionType.EXPENSE,
            category=ExpenseCategory.OPERATING_EXPENSES.value,
            description="Conta de Energia",
            amount=Decimal("200"),
            **common,
        ),
    ]


def new_entry_draft(today: Optional[date] = None) -> TransactionDraft:
    """
    Blank row added by the table's "new entry" action.

    Dated today, Income with the first income category and a zero amount;
    the user edits it in place afterwards.
    """
    merchant = get_settings().merchant
    return TransactionDraft(
        merchant_id=merchant.default_id,
        merchant_name=merchant.default_name,
        type=TransactionType.INCOME,
        category=default_category(TransactionType.INCOME),
        description=None,
        date=today or date.today(),
        amount=Decimal("0"),
    )
