"""
Storage Services Package

Provides the abstract Transaction Store interface and the in-memory
implementation the dashboard runs on.
"""

from ledger.services.storage.interface import (
    DuplicateError,
    NotFoundError,
    StorageError,
    TransactionStoreInterface,
)
from ledger.services.storage.memory import InMemoryTransactionStore
from ledger.services.storage.seed import new_entry_draft, sample_transactions

__all__ = [
    # Interfaces
    "TransactionStoreInterface",
    # Exceptions
    "DuplicateError",
    "NotFoundError",
    "StorageError",
    # In-memory implementation
    "InMemoryTransactionStore",
    "new_entry_draft",
    "sample_transactions",
]
