"""
Periodic Scheduler Service

DESIGN DECISION: The once-per-second refresh is requested through a
Scheduler rather than a real timer. This allows us to:
1. Drive ticks by hand in tests (ManualScheduler)
2. Run on an asyncio event loop in long-lived processes (AsyncioScheduler)
3. Let a UI framework that owns its own refresh cadence fire pending
   callbacks itself

Every schedule() returns a ScheduledTask. Cancelling it guarantees the
callback never runs again.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Callable, Optional

import structlog


logger = structlog.get_logger(__name__)

Callback = Callable[[], None]


class ScheduledTask:
    """Handle for a repeating callback."""

    def __init__(
        self,
        interval: float,
        callback: Callback,
        on_cancel: Optional[Callable[["ScheduledTask"], None]] = None,
    ):
        if interval <= 0:
            raise ValueError(f"Interval must be positive, got {interval}")
        self.interval = interval
        self.callback = callback
        self._on_cancel = on_cancel
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Stop the task. Cancelling twice is a no-op."""
        if self._cancelled:
            return
        self._cancelled = True
        if self._on_cancel is not None:
            self._on_cancel(self)


class Scheduler(ABC):
    """Runs a callback every `interval` seconds until cancelled."""

    @abstractmethod
    def schedule(self, interval: float, callback: Callback) -> ScheduledTask:
        pass


class ManualScheduler(Scheduler):
    """
    Scheduler whose callbacks only fire when run_pending() is called.

    The interval is recorded but not enforced; each run_pending() call
    counts as one period for every live task.
    """

    def __init__(self):
        self._tasks: list[ScheduledTask] = []

    def schedule(self, interval: float, callback: Callback) -> ScheduledTask:
        task = ScheduledTask(interval, callback, on_cancel=self._forget)
        self._tasks.append(task)
        return task

    def _forget(self, task: ScheduledTask) -> None:
        if task in self._tasks:
            self._tasks.remove(task)

    @property
    def active_tasks(self) -> list[ScheduledTask]:
        return list(self._tasks)

    def run_pending(self) -> int:
        """
        Fire every live task once.

        Returns the number of callbacks that ran. A callback may cancel
        its own task or others; cancelled tasks are skipped.
        """
        ran = 0
        for task in list(self._tasks):
            if task.cancelled:
                continue
            task.callback()
            ran += 1
        return ran


class AsyncioScheduler(Scheduler):
    """
    Scheduler backed by an asyncio event loop.

    Must be used from inside a running loop unless one is passed in.
    An exception raised by a callback is logged and the task keeps running.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def schedule(self, interval: float, callback: Callback) -> ScheduledTask:
        loop = self._loop or asyncio.get_running_loop()
        handles: dict[str, asyncio.TimerHandle] = {}

        def cancel_handle(_: ScheduledTask) -> None:
            handle = handles.pop("next", None)
            if handle is not None:
                handle.cancel()

        task = ScheduledTask(interval, callback, on_cancel=cancel_handle)

        def fire() -> None:
            handles.pop("next", None)
            if task.cancelled:
                return
            try:
                task.callback()
            except Exception:
                logger.exception("scheduled_callback_failed", interval=interval)
            if not task.cancelled:
                handles["next"] = loop.call_later(interval, fire)

        handles["next"] = loop.call_later(interval, fire)
        return task
