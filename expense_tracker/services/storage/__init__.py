"""
Storage Services Package

Provides the abstract key-value store interface, its backends,
and the repositories that give meaning to the stored strings.
"""

from expense_tracker.services.storage.interface import (
    ConnectionError,
    KeyValueStore,
    StorageError,
    StoreReadError,
    StoreWriteError,
)
from expense_tracker.services.storage.local import (
    InMemoryStore,
    JsonFileStore,
)
from expense_tracker.services.storage.google_sheets import (
    GoogleSheetsClient,
    GoogleSheetsStore,
)
from expense_tracker.services.storage.repository import (
    ExpenseRepository,
    TargetRepository,
)

__all__ = [
    # Interface
    "KeyValueStore",
    # Exceptions
    "ConnectionError",
    "StorageError",
    "StoreReadError",
    "StoreWriteError",
    # Backends
    "GoogleSheetsClient",
    "GoogleSheetsStore",
    "InMemoryStore",
    "JsonFileStore",
    # Repositories
    "ExpenseRepository",
    "TargetRepository",
]
