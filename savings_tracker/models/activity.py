"""
Activity Event Models for the Savings Tracker

Every significant thing the tracker does is described by an ActivityEvent
and written to the structured log. This provides:
1. A trace of configuration changes and treat decisions
2. Diagnostics when persisted data turns out to be unreadable

DESIGN DECISION: Events only go to the local log. They are not stored
alongside the tracker data and there is no history to browse or undo.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ActivityEventType(str, Enum):
    """Types of events the tracker reports."""
    # Configuration lifecycle
    TRACKER_STARTED = "tracker_started"
    TRACKER_RESET = "tracker_reset"
    VALIDATION_FAILED = "validation_failed"
    FUTURE_START_DETECTED = "future_start_detected"

    # Treat ledger
    TREAT_LOGGED = "treat_logged"
    TREAT_REJECTED = "treat_rejected"
    LEDGER_INITIALIZED = "ledger_initialized"
    LEDGER_CORRUPTED = "ledger_corrupted"

    # Periodic updates
    TIMER_STARTED = "timer_started"
    TIMER_STOPPED = "timer_stopped"


class ActivitySeverity(str, Enum):
    """Severity level for activity events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ActivityEvent(BaseModel):
    """A single activity event."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    event_type: ActivityEventType
    severity: ActivitySeverity = ActivitySeverity.INFO

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class ActivityEventBuilder:
    """
    Helper class to build activity events with common patterns.

    Usage:
        event = ActivityEventBuilder.tracker_started(label, start, rate)
        event = ActivityEventBuilder.treat_rejected(label, amount, available)
    """

    @staticmethod
    def tracker_started(
        label: str,
        start_instant: datetime,
        daily_rate: Decimal,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.TRACKER_STARTED,
            description=f"Tracker started: {label}",
            details={
                "label": label,
                "start_instant": start_instant.isoformat(),
                "daily_rate": str(daily_rate),
            },
            is_user_action=True,
        )

    @staticmethod
    def tracker_reset() -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.TRACKER_RESET,
            description="Tracker reset, all stored data cleared",
            is_user_action=True,
        )

    @staticmethod
    def validation_failed(
        operation: str,
        field: str,
        message: str,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.VALIDATION_FAILED,
            severity=ActivitySeverity.WARNING,
            description=f"{operation} rejected: invalid {field}",
            details={
                "operation": operation,
                "field": field,
            },
            error_message=message,
            is_user_action=True,
        )

    @staticmethod
    def future_start_detected(
        start_instant: datetime,
        now: datetime,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.FUTURE_START_DETECTED,
            severity=ActivitySeverity.WARNING,
            description="Start time is in the future, updates halted",
            details={
                "start_instant": start_instant.isoformat(),
                "now": now.isoformat(),
            },
        )

    @staticmethod
    def treat_logged(
        label: str,
        amount: Decimal,
        total_treats: Decimal,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.TREAT_LOGGED,
            description=f"Treat logged: {label}",
            details={
                "label": label,
                "amount": str(amount),
                "total_treats": str(total_treats),
            },
            is_user_action=True,
        )

    @staticmethod
    def treat_rejected(
        label: str,
        amount: Decimal,
        available: Decimal,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.TREAT_REJECTED,
            severity=ActivitySeverity.WARNING,
            description=f"Treat rejected, insufficient savings: {label}",
            details={
                "label": label,
                "amount": str(amount),
                "available": str(available),
            },
            is_user_action=True,
        )

    @staticmethod
    def ledger_initialized() -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.LEDGER_INITIALIZED,
            severity=ActivitySeverity.DEBUG,
            description="Empty treat ledger created",
        )

    @staticmethod
    def ledger_corrupted(error_message: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.LEDGER_CORRUPTED,
            severity=ActivitySeverity.WARNING,
            description="Stored treat ledger could not be read, using an empty ledger",
            error_message=error_message,
        )

    @staticmethod
    def timer_started(interval_seconds: float) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.TIMER_STARTED,
            severity=ActivitySeverity.DEBUG,
            description="Periodic updates started",
            details={"interval_seconds": interval_seconds},
        )

    @staticmethod
    def timer_stopped(reason: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.TIMER_STOPPED,
            severity=ActivitySeverity.DEBUG,
            description=f"Periodic updates stopped: {reason}",
            details={"reason": reason},
        )
