"""
In-Memory Transaction Store

The store lives for the lifetime of the process (one dashboard session)
and is re-seeded on every fresh start. There is no durability.

TRADEOFFS:
- Lookups are linear scans; fine for the few hundred records a single
  merchant enters by hand or imports from a spreadsheet
- New records are prepended, so the most recent insert is always first
"""

from typing import Callable, Iterable, Optional
from uuid import uuid4

from ledger.logging_setup import get_logger
from ledger.models.transaction import Transaction, TransactionDraft
from ledger.services.storage.interface import (
    DuplicateError,
    TransactionStoreInterface,
)


logger = get_logger(__name__)


def _new_id() -> str:
    return uuid4().hex


class InMemoryTransactionStore(TransactionStoreInterface):
    """
    List-backed implementation of the Transaction Store.

    Single-threaded and synchronous: every call runs to completion and is
    visible to the next read.
    """

    def __init__(
        self,
        initial: Optional[Iterable[Transaction]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        """
        Initialize the store.

        Args:
            initial: Transactions to start with (e.g. sample data), kept
                     in the given order.
            id_factory: Callable producing new identifiers. Defaults to
                        uuid4 hex strings.

        Raises:
            DuplicateError: If ``initial`` contains the same id twice.
        """
        self._transactions: list[Transaction] = []
        self._id_factory = id_factory or _new_id

        seen: set[str] = set()
        for transaction in initial or []:
            if transaction.id in seen:
                raise DuplicateError(f"Duplicate transaction id: {transaction.id}")
            seen.add(transaction.id)
            self._transactions.append(transaction)

    def _index_of(self, transaction_id: str) -> Optional[int]:
        for idx, transaction in enumerate(self._transactions):
            if transaction.id == transaction_id:
                return idx
        return None

    def _fresh_id(self) -> str:
        transaction_id = self._id_factory()
        while self._index_of(transaction_id) is not None:
            transaction_id = self._id_factory()
        return transaction_id

    def add(self, draft: TransactionDraft) -> None:
        """Prepend a new transaction with a fresh id."""
        transaction = Transaction.from_draft(draft, self._fresh_id())
        self._transactions.insert(0, transaction)
        logger.info(
            "transaction_added",
            transaction_id=transaction.id,
            type=transaction.type.value,
            category=transaction.category,
            amount=str(transaction.amount),
        )

    def update(self, transaction: Transaction) -> None:
        """Replace in place; unknown ids are ignored."""
        idx = self._index_of(transaction.id)
        if idx is None:
            logger.debug("transaction_update_missing", transaction_id=transaction.id)
            return
        self._transactions[idx] = transaction
        logger.info("transaction_updated", transaction_id=transaction.id)

    def remove(self, transaction_id: str) -> None:
        """Delete by id; unknown ids are ignored."""
        idx = self._index_of(transaction_id)
        if idx is None:
            logger.debug("transaction_remove_missing", transaction_id=transaction_id)
            return
        del self._transactions[idx]
        logger.info("transaction_removed", transaction_id=transaction_id)

    def get(self, transaction_id: str) -> Optional[Transaction]:
        idx = self._index_of(transaction_id)
        return None if idx is None else self._transactions[idx]

    def list_transactions(self) -> list[Transaction]:
        return list(self._transactions)

    def __len__(self) -> int:
        return len(self._transactions)
