"""
Activity Logger

DESIGN DECISION: Every significant tracker action is written to a
structured log. This provides:
1. Traceability of starts, resets and treat decisions
2. Debugging information when stored data is unreadable

The activity logger:
- Writes JSON lines through structlog
- Never persists events; the tracker keeps no history
- Picks the log level from the event severity
"""

import structlog

from savings_tracker.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivitySeverity,
)


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class ActivityLogger:
    """
    Central activity logging service.

    Holds a bound structlog logger; each event becomes one log line.
    """

    def __init__(self, logger_name: str = "savings_tracker.activity"):
        self._logger = structlog.get_logger(logger_name)

    def log(self, event: ActivityEvent) -> ActivityEvent:
        """
        Log an activity event at the level matching its severity.

        Returns the event so callers can chain or inspect it.
        """
        log_dict = event.to_log_dict()

        if event.severity == ActivitySeverity.ERROR:
            self._logger.error("activity_event", **log_dict)
        elif event.severity == ActivitySeverity.WARNING:
            self._logger.warning("activity_event", **log_dict)
        elif event.severity == ActivitySeverity.DEBUG:
            self._logger.debug("activity_event", **log_dict)
        else:
            self._logger.info("activity_event", **log_dict)

        return event

    def log_tracker_started(self, label, start_instant, daily_rate) -> None:
        """Log a successful start."""
        self.log(ActivityEventBuilder.tracker_started(
            label=label,
            start_instant=start_instant,
            daily_rate=daily_rate,
        ))

    def log_tracker_reset(self) -> None:
        """Log a confirmed reset."""
        self.log(ActivityEventBuilder.tracker_reset())

    def log_validation_failed(self, operation: str, field: str, message: str) -> None:
        """Log rejected user input."""
        self.log(ActivityEventBuilder.validation_failed(
            operation=operation,
            field=field,
            message=message,
        ))

    def log_future_start(self, start_instant, now) -> None:
        """Log that the start instant lies in the future."""
        self.log(ActivityEventBuilder.future_start_detected(
            start_instant=start_instant,
            now=now,
        ))

    def log_treat_logged(self, label, amount, total_treats) -> None:
        """Log an accepted treat."""
        self.log(ActivityEventBuilder.treat_logged(
            label=label,
            amount=amount,
            total_treats=total_treats,
        ))

    def log_treat_rejected(self, label, amount, available) -> None:
        """Log a treat refused for lack of savings."""
        self.log(ActivityEventBuilder.treat_rejected(
            label=label,
            amount=amount,
            available=available,
        ))

    def log_ledger_initialized(self) -> None:
        self.log(ActivityEventBuilder.ledger_initialized())

    def log_ledger_corrupted(self, error_message: str) -> None:
        """Log an unreadable ledger that was replaced by an empty one."""
        self.log(ActivityEventBuilder.ledger_corrupted(error_message))

    def log_timer_started(self, interval_seconds: float) -> None:
        self.log(ActivityEventBuilder.timer_started(interval_seconds))

    def log_timer_stopped(self, reason: str) -> None:
        self.log(ActivityEventBuilder.timer_stopped(reason))
