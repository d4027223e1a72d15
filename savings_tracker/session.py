"""
Tracker Session

This module ties together storage, clock, scheduler, validation and the
savings calculator, and defines the tracker lifecycle:

    UNCONFIGURED --start()--> ACTIVE --reset()--> UNCONFIGURED

While ACTIVE a periodic task calls tick() once per interval. The task is
cancelled and re-created whenever the configuration changes, and cancelled
for good on reset or when the start instant turns out to be in the future.

DESIGN DECISION: The session holds no tracker data of its own. Every
operation re-reads the key-value store, so the store is the only source
of truth and two sessions on the same store never disagree for long.
"""

from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Callable, Optional, Union

import structlog
from pydantic import ValidationError

from savings_tracker.activity import ActivityLogger
from savings_tracker.calculator import SavingsCalculator
from savings_tracker.config import get_settings
from savings_tracker.errors import (
    InputValidationError,
    InsufficientSavingsError,
    TrackerNotActiveError,
)
from savings_tracker.ledger import TreatLedger, append, total_spent
from savings_tracker.models.tracker import (
    SessionState,
    StartDefaults,
    TrackerConfig,
    TrackerStatus,
    Treat,
)
from savings_tracker.services.clock import Clock, SystemClock
from savings_tracker.services.scheduler import (
    ManualScheduler,
    ScheduledTask,
    Scheduler,
)
from savings_tracker.services.storage import (
    DAILY_RATE_KEY,
    LABEL_KEY,
    START_INSTANT_KEY,
    KeyValueStore,
)
from savings_tracker.validation import TrackerInputValidator, parse_decimal


logger = structlog.get_logger(__name__)

START_INSTANT_FORMAT = "%Y-%m-%dT%H:%M:00"


class TrackerSession:
    """
    One user's savings tracker.

    Call open() once after construction (the equivalent of page load),
    then drive it with start(), log_treat(), reset(). tick() is normally
    called by the scheduler.

    Args:
        store: Where label, start instant, rate and ledger are kept
        clock: Source of the current instant (system clock by default)
        scheduler: Drives periodic ticks. Defaults to a ManualScheduler,
                   for hosts that fire pending ticks themselves.
        activity_logger: Structured log of tracker events
        tick_interval: Seconds between ticks (from settings by default)
        on_update: Called with the new SessionState after every refresh
    """

    def __init__(
        self,
        store: KeyValueStore,
        clock: Optional[Clock] = None,
        scheduler: Optional[Scheduler] = None,
        activity_logger: Optional[ActivityLogger] = None,
        tick_interval: Optional[float] = None,
        on_update: Optional[Callable[[SessionState], None]] = None,
    ):
        self._store = store
        self._clock = clock or SystemClock()
        self._scheduler = scheduler or ManualScheduler()
        self._activity = activity_logger or ActivityLogger()
        self._tick_interval = tick_interval or get_settings().tick_interval_seconds
        self._on_update = on_update

        self._ledger = TreatLedger(store, self._activity)
        self._validator = TrackerInputValidator(self._clock)
        self._calculator = SavingsCalculator()

        self._timer: Optional[ScheduledTask] = None
        self._state: Optional[SessionState] = None
        self._defaults: Optional[StartDefaults] = None

    # =========================================================================
    # READ-ONLY VIEW
    # =========================================================================

    @property
    def status(self) -> TrackerStatus:
        if self.load_config() is None:
            return TrackerStatus.UNCONFIGURED
        return TrackerStatus.ACTIVE

    @property
    def config(self) -> Optional[TrackerConfig]:
        return self.load_config()

    @property
    def state(self) -> Optional[SessionState]:
        """State from the most recent refresh, None while unconfigured."""
        return self._state

    @property
    def defaults(self) -> Optional[StartDefaults]:
        """Setup-form defaults, only set while unconfigured."""
        return self._defaults

    @property
    def is_running(self) -> bool:
        """Are periodic updates scheduled?"""
        return self._timer is not None and not self._timer.cancelled

    @property
    def ledger(self) -> TreatLedger:
        return self._ledger

    def load_config(self) -> Optional[TrackerConfig]:
        """
        Read the configuration from the store.

        Returns None unless label, start instant and daily rate are all
        present and readable.
        """
        label = self._store.get(LABEL_KEY)
        start_raw = self._store.get(START_INSTANT_KEY)
        rate_raw = self._store.get(DAILY_RATE_KEY)
        if not (label and start_raw and rate_raw):
            return None

        try:
            start_local = datetime.fromisoformat(start_raw)
        except ValueError:
            logger.warning("stored_start_instant_unreadable", value=start_raw)
            return None

        rate = parse_decimal(rate_raw)
        if rate is None or rate < 0:
            logger.warning("stored_daily_rate_unreadable", value=rate_raw)
            return None

        try:
            return TrackerConfig(
                label=label,
                start_instant=self._clock.localize(start_local),
                daily_rate=rate,
            )
        except ValidationError as e:
            logger.warning("stored_config_invalid", error=str(e))
            return None

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def open(self) -> Optional[SessionState]:
        """
        Load whatever is stored and start updating.

        Any running timer is cancelled first, so calling open() again never
        leaves two timers behind. Returns the first state, or None if the
        tracker is unconfigured (defaults are prepared instead).
        """
        self._stop_timer("reload")

        config = self.load_config()
        if config is None:
            self._state = None
            self._defaults = self._make_defaults()
            return None

        self._defaults = None
        state = self._refresh(config)
        if not state.is_future:
            self._start_timer()
        return state

    def close(self) -> None:
        """Stop periodic updates. Stored data is untouched."""
        self._stop_timer("closed")

    def start(
        self,
        label: Optional[str],
        start_date: Union[date, str, None],
        start_time: Union[time, str, None],
        daily_rate: Union[Decimal, int, float, str, None],
    ) -> TrackerConfig:
        """
        Configure the tracker and begin updating.

        Input is validated, and the first state computed, before anything
        is written. Label, start and rate are stored together. An existing treat
        ledger is kept; only reset() clears it.

        Raises:
            InputValidationError: On the first invalid input
        """
        try:
            config = self._validator.validate_start(
                label=label,
                start_date=start_date,
                start_time=start_time,
                daily_rate=daily_rate,
            )
        except InputValidationError as e:
            self._activity.log_validation_failed("start", e.field, e.message)
            raise

        # Arithmetic failures surface here, before the store is touched
        self._calculator.snapshot(
            config=config,
            treats=self._ledger.load(),
            now=self._clock.now(),
        )

        self._store.set_many({
            LABEL_KEY: config.label,
            START_INSTANT_KEY: config.start_instant.strftime(START_INSTANT_FORMAT),
            DAILY_RATE_KEY: format(config.daily_rate, "f"),
        })
        self._ledger.initialize()

        self._activity.log_tracker_started(
            label=config.label,
            start_instant=config.start_instant,
            daily_rate=config.daily_rate,
        )

        self.open()
        return config

    def reset(self, confirm: Optional[Callable[[], bool]] = None) -> bool:
        """
        Clear all stored data and stop updating.

        Args:
            confirm: Asked before anything is cleared. If it returns False
                     the reset is abandoned.

        Returns:
            True if the tracker was reset
        """
        if confirm is not None and not confirm():
            return False

        self._store.remove(LABEL_KEY)
        self._store.remove(START_INSTANT_KEY)
        self._store.remove(DAILY_RATE_KEY)
        self._ledger.clear()
        self._stop_timer("reset")

        self._state = None
        self._defaults = self._make_defaults()

        self._activity.log_tracker_reset()
        return True

    def tick(self) -> Optional[SessionState]:
        """
        Recompute the session state from the clock and the store.

        Halts periodic updates if the start instant is in the future.
        """
        config = self.load_config()
        if config is None:
            self._stop_timer("unconfigured")
            self._state = None
            return None
        return self._refresh(config)

    # =========================================================================
    # TREATS
    # =========================================================================

    def log_treat(
        self,
        label: Optional[str],
        amount: Union[Decimal, int, float, str, None],
    ) -> Treat:
        """
        Record a treat paid for out of the savings.

        The treat is accepted only if treats already logged plus this one
        do not exceed gross savings at this instant.

        Raises:
            TrackerNotActiveError: If unconfigured or updates are halted
            InputValidationError: On invalid label or amount
            InsufficientSavingsError: If the savings do not cover the treat
        """
        config = self.load_config()
        if config is None:
            raise TrackerNotActiveError("Start the tracker before logging treats.")
        if not self.is_running:
            raise TrackerNotActiveError(
                "The tracker is not updating. Reset it and choose a start time in the past."
            )

        try:
            label, amount = self._validator.validate_treat(label, amount)
        except InputValidationError as e:
            self._activity.log_validation_failed("log_treat", e.field, e.message)
            raise

        now = self._clock.now()
        treats = self._ledger.load()
        elapsed = self._calculator.elapsed_seconds(now, config.start_instant)
        gross = self._calculator.gross_saved(elapsed, config.daily_rate)
        spent = total_spent(treats)

        if spent + amount > gross:
            available = gross - spent
            self._activity.log_treat_rejected(label, amount, available)
            raise InsufficientSavingsError(available=available, requested=amount)

        treat = Treat(
            label=label,
            amount=amount,
            timestamp=now.astimezone(timezone.utc),
        )
        self._ledger.save(append(treats, treat))
        self._activity.log_treat_logged(label, amount, spent + amount)

        self._refresh(config)
        return treat

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _refresh(self, config: TrackerConfig) -> SessionState:
        previous = self._state
        state = self._calculator.snapshot(
            config=config,
            treats=self._ledger.load(),
            now=self._clock.now(),
        )
        self._state = state

        if state.is_future:
            if previous is None or not previous.is_future:
                self._activity.log_future_start(config.start_instant, state.computed_at)
            self._stop_timer("future_start")

        if self._on_update is not None:
            self._on_update(state)
        return state

    def _make_defaults(self) -> StartDefaults:
        now = self._clock.now()
        return StartDefaults(
            label=self._store.get(LABEL_KEY) or None,
            start_date=now.strftime("%Y-%m-%d"),
            start_time=now.strftime("%H:%M"),
        )

    def _start_timer(self) -> None:
        self._timer = self._scheduler.schedule(self._tick_interval, self._on_timer)
        self._activity.log_timer_started(self._tick_interval)

    def _stop_timer(self, reason: str) -> None:
        if self._timer is None:
            return
        self._timer.cancel()
        self._timer = None
        self._activity.log_timer_stopped(reason)

    def _on_timer(self) -> None:
        self.tick()
