"""
Expense and Target Repositories

The repositories are the only code that knows what the stored strings
mean. Everything else asks them for a fresh copy of the data.

DESIGN DECISION: The expense list is read and written as a whole.
There are no partial updates and no index; `append` is a full
read-modify-write that assumes a single writer (one open form).

DEGRADE-TO-EMPTY: Unparsable stored JSON is treated as "no data yet".
A corrupted store is indistinguishable from a fresh install, and that
is logged rather than raised.
"""

import json
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

import structlog
from pydantic import ValidationError

from expense_tracker.models.expense import Expense
from expense_tracker.services.storage.interface import (
    KeyValueStore,
    StorageError,
)


logger = structlog.get_logger(__name__)

DEFAULT_EXPENSES_KEY = "expenses"
DEFAULT_TARGET_KEY = "daily_target"


class ExpenseRepository:
    """
    Owns read/modify/write access to the stored expense list.

    New expenses are prepended, so stored order is newest-insert-first.
    That insertion order is the only ordering guarantee.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str = DEFAULT_EXPENSES_KEY,
    ):
        self._store = store
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def _parse_raw(self, data: Optional[str]) -> list[Any]:
        """Decode the stored string into a list, or [] if it isn't one."""
        if not data:
            return []
        try:
            parsed = json.loads(data)
        except ValueError as e:
            logger.warning(
                "stored_expenses_unparsable",
                key=self._key,
                error=str(e),
            )
            return []
        if not isinstance(parsed, list):
            logger.warning(
                "stored_expenses_not_a_list",
                key=self._key,
                found_type=type(parsed).__name__,
            )
            return []
        return parsed

    async def list_all(self) -> list[Expense]:
        """
        Get every stored expense, in stored order.

        Never raises: an empty, unparsable or unreadable store all
        come back as an empty list. Malformed records are skipped.
        """
        try:
            data = await self._store.get(self._key)
        except StorageError as e:
            logger.error(
                "expense_list_read_failed",
                key=self._key,
                error=str(e),
            )
            return []

        expenses = []
        for position, item in enumerate(self._parse_raw(data)):
            try:
                expenses.append(Expense.model_validate(item))
            except ValidationError as e:
                logger.warning(
                    "stored_expense_skipped",
                    key=self._key,
                    position=position,
                    error_count=e.error_count(),
                )
                continue
        return expenses

    async def append(self, expense: Expense) -> None:
        """
        Prepend an expense and write the full list back.

        Records already in the store are written back exactly as they
        were read, including any this version cannot parse.

        Raises:
            StoreReadError: If the current list could not be read
            StoreWriteError: If the updated list could not be written
        """
        data = await self._store.get(self._key)
        existing = self._parse_raw(data)
        updated = [expense.to_store_dict(), *existing]
        await self._store.set(self._key, json.dumps(updated, ensure_ascii=False))


class TargetRepository:
    """Reads and overwrites the single daily target value."""

    def __init__(
        self,
        store: KeyValueStore,
        key: str = DEFAULT_TARGET_KEY,
    ):
        self._store = store
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    async def get_target(self) -> Optional[Decimal]:
        """
        Get the current daily target.

        Returns None when unset, unparsable, negative or unreadable.
        """
        try:
            data = await self._store.get(self._key)
        except StorageError as e:
            logger.error(
                "target_read_failed",
                key=self._key,
                error=str(e),
            )
            return None

        if data is None or not data.strip():
            return None

        try:
            value = Decimal(data.strip())
        except InvalidOperation:
            logger.warning("stored_target_unparsable", key=self._key, value=data)
            return None

        if not value.is_finite() or value < 0:
            logger.warning("stored_target_out_of_range", key=self._key, value=data)
            return None
        return value

    async def set_target(self, value: Decimal) -> None:
        """
        Overwrite the daily target.

        Raises:
            StoreWriteError: If the value could not be written
        """
        await self._store.set(self._key, str(value))
