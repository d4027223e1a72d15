"""
JSON File Storage Implementation

DESIGN DECISION: The local durable store is a single JSON object on disk,
mapping keys to string values. It plays the role browser local storage
plays for a web widget:
1. No database or server needed
2. The file is human-readable and easy to inspect or delete
3. One file per tracker

TRADEOFFS:
- The whole file is rewritten on every set/remove (fine for four keys)
- set_many() lands all its keys in one write, so a configuration is
  never half saved
- Writes go to a temporary file first and are moved into place, so a
  crash mid-write leaves the previous contents intact
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

import structlog

from savings_tracker.services.storage.interface import (
    KeyValueStore,
    StorageError,
    StoreUnreadableError,
)


logger = structlog.get_logger(__name__)


class JsonFileKeyValueStore(KeyValueStore):
    """
    Key-value store persisted as a JSON object in one file.

    The file is read on every access so that two sessions pointing at the
    same file see each other's writes.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        """Load the whole store. A missing file is an empty store."""
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise StorageError(f"Could not read store file {self._path}: {e}") from e

        if not raw.strip():
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StoreUnreadableError(
                f"Store file {self._path} is not valid JSON: {e}"
            ) from e

        if not isinstance(data, dict):
            raise StoreUnreadableError(
                f"Store file {self._path} must contain a JSON object"
            )

        # Values are strings by contract; anything else was not written by us
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: dict[str, str]) -> None:
        """Atomically replace the store file."""
        directory = self._path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                dir=directory,
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(data, fh, indent=2, sort_keys=True)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Could not write store file {self._path}: {e}") from e

        logger.debug("store_written", path=str(self._path), keys=sorted(data))

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"Store values must be strings, got {type(value).__name__}")
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def set_many(self, items: dict[str, str]) -> None:
        """Store several values in a single atomic file write."""
        for value in items.values():
            if not isinstance(value, str):
                raise TypeError(f"Store values must be strings, got {type(value).__name__}")
        data = self._read_all()
        data.update(items)
        self._write_all(data)

    def remove(self, key: str) -> None:
        data = self._read_all()
        if key not in data:
            return
        del data[key]
        self._write_all(data)
