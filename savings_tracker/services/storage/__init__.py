"""
Storage Services Package

Provides the abstract key-value interface and its implementations.
"""

from savings_tracker.services.storage.interface import (
    ALL_KEYS,
    DAILY_RATE_KEY,
    LABEL_KEY,
    START_INSTANT_KEY,
    TREAT_LEDGER_KEY,
    KeyValueStore,
    StorageError,
    StoreUnreadableError,
)
from savings_tracker.services.storage.memory import InMemoryKeyValueStore
from savings_tracker.services.storage.json_file import JsonFileKeyValueStore

__all__ = [
    # Interface
    "KeyValueStore",
    # Keys
    "ALL_KEYS",
    "DAILY_RATE_KEY",
    "LABEL_KEY",
    "START_INSTANT_KEY",
    "TREAT_LEDGER_KEY",
    # Exceptions
    "StorageError",
    "StoreUnreadableError",
    # Implementations
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
]
