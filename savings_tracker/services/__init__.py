"""Services package."""

from savings_tracker.services.clock import Clock, ManualClock, SystemClock
from savings_tracker.services.scheduler import (
    AsyncioScheduler,
    ManualScheduler,
    ScheduledTask,
    Scheduler,
)
from savings_tracker.services.storage import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    StorageError,
    StoreUnreadableError,
)

__all__ = [
    # Clock
    "Clock",
    "ManualClock",
    "SystemClock",
    # Scheduler
    "AsyncioScheduler",
    "ManualScheduler",
    "ScheduledTask",
    "Scheduler",
    # Storage services
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "StorageError",
    "StoreUnreadableError",
]
