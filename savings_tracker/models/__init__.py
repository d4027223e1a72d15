"""
Data Models Package

This package contains all Pydantic models used by the Savings Tracker.
"""

from savings_tracker.models.tracker import (
    ElapsedBreakdown,
    SessionState,
    StartDefaults,
    TrackerConfig,
    TrackerStatus,
    Treat,
)
from savings_tracker.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivityEventType,
    ActivitySeverity,
)

__all__ = [
    # Tracker models
    "ElapsedBreakdown",
    "SessionState",
    "StartDefaults",
    "TrackerConfig",
    "TrackerStatus",
    "Treat",
    # Activity models
    "ActivityEvent",
    "ActivityEventBuilder",
    "ActivityEventType",
    "ActivitySeverity",
]
