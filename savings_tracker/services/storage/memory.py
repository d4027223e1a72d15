"""In-memory key-value store, used by tests and throwaway sessions."""

from typing import Optional

from savings_tracker.services.storage.interface import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Dictionary-backed store. Nothing survives the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"Store values must be strings, got {type(value).__name__}")
        self._data[key] = value

    def set_many(self, items: dict[str, str]) -> None:
        for value in items.values():
            if not isinstance(value, str):
                raise TypeError(f"Store values must be strings, got {type(value).__name__}")
        self._data.update(items)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        """Copy of everything currently stored."""
        return dict(self._data)
