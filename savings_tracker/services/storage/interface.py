"""
Abstract Key-Value Storage Interface

DESIGN DECISION: The tracker persists exactly four string values under
fixed keys. We define an abstract interface for that so we can:
1. Use an in-memory store for testing
2. Use a JSON file as the local durable store
3. Keep the session logic free of any storage details

The interface is deliberately as small as browser local storage:
get, set and remove. Values are always strings; callers serialize.
"""

from abc import ABC, abstractmethod
from typing import Optional


# Fixed logical keys. The names match the ones the browser widget used.
START_INSTANT_KEY = "trackerStartDateTime"
DAILY_RATE_KEY = "trackerDailySaving"
LABEL_KEY = "trackerLabel"
TREAT_LEDGER_KEY = "trackerTreatLog"

ALL_KEYS = (
    LABEL_KEY,
    START_INSTANT_KEY,
    DAILY_RATE_KEY,
    TREAT_LEDGER_KEY,
)


class KeyValueStore(ABC):
    """
    Abstract string-keyed store.

    Every operation is synchronous and completes before returning.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read a value.

        Args:
            key: The key to read

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Store a value, replacing any previous one.

        Raises:
            StorageError: If the backend cannot be written
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """
        Delete a key. Removing an absent key is not an error.

        Raises:
            StorageError: If the backend cannot be written
        """
        pass

    def set_many(self, items: dict[str, str]) -> None:
        """
        Store several values together.

        Backends that can write all of them at once override this; the
        default sets them one by one.

        Raises:
            StorageError: If the backend cannot be written
        """
        for key, value in items.items():
            self.set(key, value)

    def contains(self, key: str) -> bool:
        """Check whether a key is present."""
        return self.get(key) is not None


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StoreUnreadableError(StorageError):
    """The backing file exists but is not a valid store."""
    pass
