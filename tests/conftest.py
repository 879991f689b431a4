"""Shared fixtures."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from ledger.config import get_settings
from ledger.models import Transaction, TransactionType
from ledger.services.storage import sample_transactions


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached; make every test read the environment anew."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def now():
    """A fixed "now" so window tests do not depend on the wall clock."""
    return datetime(2025, 3, 10, 12, 0)


@pytest.fixture
def sample():
    """The three seed records: 5000 income, 500 + 200 expenses on 07-03-2025."""
    return sample_transactions()


@pytest.fixture
def make_transaction():
    """Factory for transactions with sensible defaults."""
    counter = iter(range(1000, 100000))

    def _make(
        transaction_type=TransactionType.EXPENSE,
        category=None,
        amount="100",
        on=date(2025, 3, 7),
        transaction_id=None,
        description=None,
    ):
        transaction_type = TransactionType(transaction_type)
        if category is None:
            category = (
                "Vendas de Produtos"
                if transaction_type == TransactionType.INCOME
                else "Custos Diretos"
            )
        return Transaction(
            id=transaction_id or str(next(counter)),
            type=transaction_type,
            category=category,
            description=description,
            date=on,
            amount=Decimal(amount),
        )

    return _make
