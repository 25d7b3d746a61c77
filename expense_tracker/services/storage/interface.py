"""
Abstract Storage Interface

DESIGN DECISION: The persistent store is an opaque string-keyed store
with just two async operations, get and set.
This allows us to:
1. Keep the repositories ignorant of where data lives
2. Run tests against InMemoryStore
3. Swap a local JSON file for Google Sheets without touching business logic

The interface is intentionally tiny - the repositories own all
knowledge of what the stored strings mean.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """
    Abstract interface for the persistent key-value store.

    Any backend (in-memory, JSON file, Google Sheets) must implement
    these methods. Both are suspension points; nothing else in the
    application awaits I/O.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Read the string stored under a key.

        Args:
            key: The store key

        Returns:
            The stored string, or None if the key has never been set

        Raises:
            StoreReadError: If the backend cannot be read
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """
        Store a string under a key, replacing any previous value.

        Args:
            key: The store key
            value: The string to store

        Raises:
            StoreWriteError: If the backend cannot be written
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StoreReadError(StorageError):
    """The backend failed while reading a key."""
    pass


class StoreWriteError(StorageError):
    """The backend failed while writing a key."""
    pass


class ConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass
