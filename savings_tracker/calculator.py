"""
Savings Calculator

Turns a configuration, a ledger and the current instant into the numbers
shown on screen.

GUARANTEES:
- Elapsed time is whole seconds, floored, and recomputed from the start
  instant every time (no incremental accumulation, no drift)
- Gross savings grow linearly with elapsed seconds and never go negative
- Net savings are gross minus treats, floored at zero
- A start instant in the future yields zero savings and no breakdown
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from savings_tracker.ledger import ZERO, total_spent
from savings_tracker.models.tracker import (
    ElapsedBreakdown,
    SessionState,
    TrackerConfig,
    Treat,
)


SECONDS_PER_DAY = 86400

_ONE_SECOND = timedelta(seconds=1)


class SavingsCalculator:
    """Pure savings arithmetic. Holds no state."""

    @staticmethod
    def elapsed_seconds(now: datetime, start_instant: datetime) -> int:
        """
        Whole seconds from start_instant to now, floored.

        Negative when the start lies in the future.
        """
        # timedelta // timedelta is exact integer floor division
        return (now - start_instant) // _ONE_SECOND

    @staticmethod
    def gross_saved(elapsed_seconds: int, daily_rate: Decimal) -> Decimal:
        """Savings accumulated over elapsed_seconds at daily_rate per day."""
        if elapsed_seconds < 0:
            return ZERO
        return Decimal(elapsed_seconds) * daily_rate / SECONDS_PER_DAY

    @staticmethod
    def net_saved(gross: Decimal, total_treats: Decimal) -> Decimal:
        """Gross savings less treats, never below zero."""
        return max(ZERO, gross - total_treats)

    @staticmethod
    def breakdown(total_seconds: int) -> ElapsedBreakdown:
        """
        Split whole seconds into days, hours, minutes and seconds.

        Raises:
            ValueError: If total_seconds is negative
        """
        if total_seconds < 0:
            raise ValueError(f"Cannot break down negative duration: {total_seconds}")
        return ElapsedBreakdown(
            days=total_seconds // 86400,
            hours=total_seconds // 3600 % 24,
            minutes=total_seconds // 60 % 60,
            seconds=total_seconds % 60,
        )

    def snapshot(
        self,
        config: TrackerConfig,
        treats: Iterable[Treat],
        now: datetime,
    ) -> SessionState:
        """Compute the complete display state for one instant."""
        treats = tuple(treats)
        elapsed = self.elapsed_seconds(now, config.start_instant)
        total_treats = total_spent(treats)

        is_future = elapsed < 0
        breakdown: Optional[ElapsedBreakdown] = None
        if is_future:
            gross = ZERO
        else:
            gross = self.gross_saved(elapsed, config.daily_rate)
            breakdown = self.breakdown(elapsed)

        return SessionState(
            computed_at=now,
            elapsed_seconds=elapsed,
            is_future=is_future,
            breakdown=breakdown,
            gross_saved=gross,
            total_treats=total_treats,
            net_saved=self.net_saved(gross, total_treats),
            treats=treats,
        )
