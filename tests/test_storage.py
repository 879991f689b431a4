"""Tests for the in-memory Transaction Store."""

import pytest
from datetime import date
from decimal import Decimal

from ledger.models import TransactionDraft, TransactionType
from ledger.services.storage import (
    DuplicateError,
    InMemoryTransactionStore,
    NotFoundError,
    new_entry_draft,
    sample_transactions,
)


def _draft(amount="10", on=date(2025, 3, 8)):
    return TransactionDraft(
        type=TransactionType.EXPENSE,
        category="Custos Diretos",
        date=on,
        amount=Decimal(amount),
    )


class TestAdd:
    """Tests for inserting transactions."""

    def test_add_prepends(self, sample):
        """The newest insert is always first in store order."""
        store = InMemoryTransactionStore(initial=sample)
        store.add(_draft("1"))
        store.add(_draft("2"))

        amounts = [t.amount for t in store.list_transactions()]
        assert amounts[:2] == [Decimal("2"), Decimal("1")]
        assert len(store) == 5

    def test_add_assigns_unique_ids(self):
        store = InMemoryTransactionStore()
        for _ in range(20):
            store.add(_draft())

        ids = [t.id for t in store.list_transactions()]
        assert len(set(ids)) == 20

    def test_add_retries_colliding_ids(self, sample):
        """A generated id that is already taken is never reused."""
        ids = iter(["1", "2", "fresh"])
        store = InMemoryTransactionStore(initial=sample, id_factory=lambda: next(ids))
        store.add(_draft())

        assert store.list_transactions()[0].id == "fresh"

    def test_add_allows_duplicate_business_data(self):
        store = InMemoryTransactionStore()
        store.add(_draft())
        store.add(_draft())
        assert len(store) == 2

    def test_duplicate_seed_ids_rejected(self, sample):
        with pytest.raises(DuplicateError):
            InMemoryTransactionStore(initial=sample + sample[:1])


class TestUpdateAndRemove:
    """Tests for in-place mutation."""

    def test_update_replaces_in_place(self, sample):
        store = InMemoryTransactionStore(initial=sample)
        edited = store.get("2").model_copy(update={"amount": Decimal("650")})
        store.update(edited)

        assert store.get("2").amount == Decimal("650")
        assert [t.id for t in store.list_transactions()] == ["1", "2", "3"]

    def test_update_unknown_id_is_noop(self, sample, make_transaction):
        store = InMemoryTransactionStore(initial=sample)
        before = store.list_transactions()
        store.update(make_transaction(transaction_id="missing"))
        assert store.list_transactions() == before

    def test_remove(self, sample):
        store = InMemoryTransactionStore(initial=sample)
        store.remove("2")
        assert store.get("2") is None
        assert [t.id for t in store.list_transactions()] == ["1", "3"]

    def test_remove_unknown_id_is_noop(self, sample):
        store = InMemoryTransactionStore(initial=sample)
        store.remove("missing")
        assert len(store) == 3

    def test_mutation_visible_to_next_read(self):
        store = InMemoryTransactionStore()
        store.add(_draft())
        transaction_id = store.list_transactions()[0].id
        store.remove(transaction_id)
        assert store.list_transactions() == []


class TestReads:
    """Tests for lookups and listing."""

    def test_get_or_raise(self, sample):
        store = InMemoryTransactionStore(initial=sample)
        assert store.get_or_raise("1").description == "Venda Marketplace"
        with pytest.raises(NotFoundError):
            store.get_or_raise("missing")

    def test_list_is_a_copy(self, sample):
        store = InMemoryTransactionStore(initial=sample)
        listing = store.list_transactions()
        listing.clear()
        assert len(store) == 3

    def test_sorted_by_date_newest_first(self):
        store = InMemoryTransactionStore()
        store.add(_draft(on=date(2025, 1, 1)))
        store.add(_draft(on=date(2025, 6, 1)))
        store.add(_draft(on=date(2025, 3, 1)))

        dates = [t.date for t in store.sorted_by_date()]
        assert dates == [date(2025, 6, 1), date(2025, 3, 1), date(2025, 1, 1)]

    def test_iteration(self, sample):
        store = InMemoryTransactionStore(initial=sample)
        assert [t.id for t in store] == ["1", "2", "3"]


class TestSeedData:
    """Tests for sample data and new entry defaults."""

    def test_sample_records(self, sample):
        assert [t.id for t in sample] == ["1", "2", "3"]
        assert all(t.date == date(2025, 3, 7) for t in sample)
        assert [t.amount for t in sample] == [Decimal("5000"), Decimal("500"), Decimal("200")]

    def test_sample_merchant_from_settings(self, monkeypatch):
        monkeypatch.setenv("MERCHANT_DEFAULT_NAME", "Loja Centro")
        assert {t.merchant_name for t in sample_transactions()} == {"Loja Centro"}

    def test_new_entry_defaults(self):
        draft = new_entry_draft(today=date(2025, 3, 10))
        assert draft.type == TransactionType.INCOME
        assert draft.category == "Vendas de Produtos"
        assert draft.amount == Decimal("0")
        assert draft.date == date(2025, 3, 10)
