"""Services package."""

from expense_tracker.services.storage import (
    ConnectionError,
    ExpenseRepository,
    GoogleSheetsClient,
    GoogleSheetsStore,
    InMemoryStore,
    JsonFileStore,
    KeyValueStore,
    StorageError,
    StoreReadError,
    StoreWriteError,
    TargetRepository,
)

__all__ = [
    # Storage services
    "ConnectionError",
    "ExpenseRepository",
    "GoogleSheetsClient",
    "GoogleSheetsStore",
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStore",
    "StorageError",
    "StoreReadError",
    "StoreWriteError",
    "TargetRepository",
]
