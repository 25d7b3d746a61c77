"""
Local Storage Implementations

InMemoryStore keeps values in a dict and is what the tests run against.
JsonFileStore keeps every key in a single JSON object on disk and is the
default backend for a single-user install.
"""

import json
import os
from pathlib import Path
from typing import Optional, Union

from expense_tracker.services.storage.interface import (
    KeyValueStore,
    StoreReadError,
    StoreWriteError,
)


class InMemoryStore(KeyValueStore):
    """Dict-backed store. Nothing survives the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore(KeyValueStore):
    """
    File-backed store.

    The whole file is one JSON object mapping key -> string value.
    Writes go to a temporary file first and are moved into place, so a
    crash mid-write leaves the previous contents intact.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        """Load the file. A missing file is an empty store."""
        if not self._path.exists():
            return {}
        raw = self._path.read_text(encoding="utf-8")
        if not raw.strip():
            return {}
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object in {self._path}")
        return data

    async def get(self, key: str) -> Optional[str]:
        try:
            data = self._read_all()
        except (OSError, ValueError) as e:
            raise StoreReadError(f"Failed to read {self._path}: {e}")
        value = data.get(key)
        return None if value is None else str(value)

    async def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except (OSError, ValueError) as e:
            raise StoreWriteError(f"Failed to read {self._path} before writing: {e}")

        data[key] = value

        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as e:
            raise StoreWriteError(f"Failed to write {self._path}: {e}")
