"""
Clock Service

DESIGN DECISION: Nothing in the tracker calls datetime.now() directly.
All "what time is it" questions go through a Clock so tests can pin or
advance time without sleeping.

All instants are timezone-aware. The start date and time the user types
are local wall-clock values; localize() turns them into instants the same
way the clock's own now() is expressed.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional


class Clock(ABC):
    """Source of the current instant."""

    @abstractmethod
    def now(self) -> datetime:
        """Current instant, timezone-aware."""
        pass

    @abstractmethod
    def localize(self, naive: datetime) -> datetime:
        """
        Interpret a naive local date-time as an aware instant.

        Already-aware values are returned unchanged.
        """
        pass


class SystemClock(Clock):
    """The machine's clock, in the machine's local timezone."""

    def now(self) -> datetime:
        return datetime.now().astimezone()

    def localize(self, naive: datetime) -> datetime:
        if naive.tzinfo is not None:
            return naive
        # astimezone() on a naive value assumes system local time, DST included
        return naive.astimezone()


class ManualClock(Clock):
    """
    A clock that only moves when told to.

    Usage:
        clock = ManualClock(datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc))
        clock.advance(seconds=30)
    """

    def __init__(
        self,
        start: Optional[datetime] = None,
        tz: tzinfo = timezone.utc,
    ):
        self._tz = tz
        if start is None:
            start = datetime(2026, 1, 1, tzinfo=tz)
        elif start.tzinfo is None:
            start = start.replace(tzinfo=tz)
        self._now = start

    def now(self) -> datetime:
        return self._now

    def set(self, instant: datetime) -> None:
        """Jump to an instant (naive values are taken as local)."""
        self._now = self.localize(instant)

    def advance(self, **delta: float) -> datetime:
        """Move forward by timedelta keyword arguments, e.g. advance(hours=1)."""
        self._now = self._now + timedelta(**delta)
        return self._now

    def localize(self, naive: datetime) -> datetime:
        if naive.tzinfo is not None:
            return naive
        return naive.replace(tzinfo=self._tz)
