"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for the Transaction Store.
The dashboard and the aggregation engine only talk to this interface,
so the in-memory store can be swapped for a persistent one later without
touching business logic.

Semantics every implementation must keep:
- ``add`` assigns a fresh identifier; duplicate business data is allowed
- ``update`` and ``remove`` on an unknown identifier are silent no-ops
- every mutation is visible to the very next read
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Iterator, Optional

from ledger.models.transaction import Transaction, TransactionDraft, coerce_date


class TransactionStoreInterface(ABC):
    """
    Abstract interface for transaction storage operations.

    Mutations happen ONLY through add / update / remove.
    """

    @abstractmethod
    def add(self, draft: TransactionDraft) -> None:
        """
        Insert a new transaction.

        Args:
            draft: The transaction data without an identifier.
                   The store assigns a fresh unique id.
        """
        pass

    @abstractmethod
    def update(self, transaction: Transaction) -> None:
        """
        Replace the stored transaction with the same id.

        Does nothing when no transaction has that id.
        """
        pass

    @abstractmethod
    def remove(self, transaction_id: str) -> None:
        """
        Delete a transaction by id.

        Does nothing when no transaction has that id.
        """
        pass

    @abstractmethod
    def get(self, transaction_id: str) -> Optional[Transaction]:
        """
        Retrieve a transaction by its id.

        Returns:
            The transaction if found, None otherwise
        """
        pass

    @abstractmethod
    def list_transactions(self) -> list[Transaction]:
        """
        Snapshot of all transactions in store order.

        The returned list is a copy; mutating it does not touch the store.
        """
        pass

    def get_or_raise(self, transaction_id: str) -> Transaction:
        """
        Strict lookup.

        Raises:
            NotFoundError: If no transaction has that id
        """
        transaction = self.get(transaction_id)
        if transaction is None:
            raise NotFoundError(f"Transaction not found: {transaction_id}")
        return transaction

    def sorted_by_date(self) -> list[Transaction]:
        """
        All transactions, newest date first (table order).

        Records with an unreadable date sort last.
        """
        return sorted(
            self.list_transactions(),
            key=lambda t: coerce_date(t.date) or date.min,
            reverse=True,
        )

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self.list_transactions())

    def __len__(self) -> int:
        return len(self.list_transactions())


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class DuplicateError(StorageError):
    """Attempted to insert a duplicate identifier."""
    pass
