"""Tests for the savings arithmetic."""

import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from savings_tracker.calculator import SECONDS_PER_DAY, SavingsCalculator
from savings_tracker.models.tracker import TrackerConfig, Treat


START = datetime(2026, 10, 1, 9, 30, tzinfo=timezone.utc)


def make_config(rate="10.00"):
    return TrackerConfig(label="Test", start_instant=START, daily_rate=Decimal(rate))


class TestElapsedSeconds:
    """Tests for elapsed time accounting."""

    def test_whole_seconds(self):
        now = START + timedelta(hours=1)
        assert SavingsCalculator.elapsed_seconds(now, START) == 3600

    def test_partial_seconds_are_floored(self):
        now = START + timedelta(seconds=59, milliseconds=999)
        assert SavingsCalculator.elapsed_seconds(now, START) == 59

    def test_future_start_is_negative(self):
        now = START - timedelta(seconds=10)
        assert SavingsCalculator.elapsed_seconds(now, START) == -10

    def test_negative_partial_seconds_floor_downwards(self):
        """Half a second before the start is already -1, not 0."""
        now = START - timedelta(milliseconds=500)
        assert SavingsCalculator.elapsed_seconds(now, START) == -1

    def test_compares_across_timezones(self):
        plus_two = timezone(timedelta(hours=2))
        now = datetime(2026, 10, 1, 12, 30, tzinfo=plus_two)  # 10:30 UTC
        assert SavingsCalculator.elapsed_seconds(now, START) == 3600


class TestGrossAndNet:
    """Tests for gross and net savings."""

    @pytest.mark.parametrize("elapsed,rate", [
        (0, Decimal("10")),
        (1, Decimal("0.01")),
        (3600, Decimal("24")),
        (86400, Decimal("10.00")),
        (1234567, Decimal("3.33")),
        (500, Decimal("0")),
    ])
    def test_gross_formula(self, elapsed, rate):
        assert SavingsCalculator.gross_saved(elapsed, rate) == Decimal(elapsed) * rate / SECONDS_PER_DAY

    def test_one_hour_at_24_per_day_is_exactly_one(self):
        assert SavingsCalculator.gross_saved(3600, Decimal("24.00")) == Decimal("1.00")

    def test_gross_is_zero_for_future_start(self):
        assert SavingsCalculator.gross_saved(-10, Decimal("100")) == 0

    def test_net_subtracts_treats(self):
        assert SavingsCalculator.net_saved(Decimal("5"), Decimal("4")) == Decimal("1")

    def test_net_is_floored_at_zero(self):
        assert SavingsCalculator.net_saved(Decimal("5"), Decimal("7.5")) == 0


class TestBreakdown:
    """Tests for splitting elapsed seconds into units."""

    @pytest.mark.parametrize("total", [0, 59, 60, 3599, 3600, 86399, 86400, 90061, 10**7 + 17])
    def test_components_add_back_up(self, total):
        b = SavingsCalculator.breakdown(total)
        assert b.days * 86400 + b.hours * 3600 + b.minutes * 60 + b.seconds == total
        assert 0 <= b.hours < 24
        assert 0 <= b.minutes < 60
        assert 0 <= b.seconds < 60

    def test_one_day_one_hour_one_minute_one_second(self):
        b = SavingsCalculator.breakdown(90061)
        assert (b.days, b.hours, b.minutes, b.seconds) == (1, 1, 1, 1)

    def test_negative_rejected(self):
        with pytest.raises(ValueError, match="negative"):
            SavingsCalculator.breakdown(-1)


class TestSnapshot:
    """Tests for the combined state computation."""

    def test_one_day_at_ten_per_day(self):
        state = SavingsCalculator().snapshot(make_config("10.00"), [], START + timedelta(days=1))
        assert state.gross_saved == Decimal("10.00")
        assert state.net_saved == Decimal("10.00")
        assert state.breakdown.days == 1
        assert (state.breakdown.hours, state.breakdown.minutes, state.breakdown.seconds) == (0, 0, 0)
        assert state.is_future is False

    def test_treats_reduce_net_not_gross(self):
        treats = [
            Treat(label="A", amount=Decimal("3"), timestamp=START),
            Treat(label="B", amount=Decimal("1.5"), timestamp=START),
        ]
        state = SavingsCalculator().snapshot(make_config("10"), treats, START + timedelta(days=1))
        assert state.gross_saved == Decimal("10")
        assert state.total_treats == Decimal("4.5")
        assert state.net_saved == Decimal("5.5")
        assert state.treats == tuple(treats)

    def test_future_start(self):
        state = SavingsCalculator().snapshot(make_config("10"), [], START - timedelta(seconds=10))
        assert state.is_future is True
        assert state.elapsed_seconds == -10
        assert state.breakdown is None
        assert state.gross_saved == 0
        assert state.net_saved == 0

    def test_same_instant_same_state(self):
        calculator = SavingsCalculator()
        now = START + timedelta(minutes=7)
        assert calculator.snapshot(make_config(), [], now) == calculator.snapshot(make_config(), [], now)
