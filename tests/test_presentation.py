"""Tests for display formatting."""

import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from savings_tracker.errors import InsufficientSavingsError
from savings_tracker.models.tracker import ElapsedBreakdown, Treat
from savings_tracker.presentation import (
    format_currency,
    format_start_instant,
    format_time_units,
    insufficient_savings_message,
    treat_rows,
)


WHEN = datetime(2026, 10, 18, 9, 0, tzinfo=timezone.utc)


class TestCurrency:
    """Tests for currency strings."""

    @pytest.mark.parametrize("amount,expected", [
        (Decimal("0"), "$0.00"),
        (Decimal("10"), "$10.00"),
        (Decimal("1234.5"), "$1,234.50"),
        (Decimal("0.005"), "$0.01"),
        (Decimal("0.0049"), "$0.00"),
        (Decimal("1") / Decimal("3"), "$0.33"),
        (Decimal("-1"), "-$1.00"),
    ])
    def test_two_decimals(self, amount, expected):
        assert format_currency(amount, symbol="$") == expected

    def test_symbol(self):
        assert format_currency(Decimal("5"), symbol="€") == "€5.00"


class TestTimeUnits:
    """Tests for the time cards."""

    def test_zero_padding(self):
        units = format_time_units(ElapsedBreakdown(days=1, hours=2, minutes=30, seconds=5))
        assert units == [("01", "Days"), ("02", "Hours"), ("30", "Minutes"), ("05", "Seconds")]

    def test_days_are_not_truncated(self):
        units = format_time_units(ElapsedBreakdown(days=365, hours=0, minutes=0, seconds=0))
        assert units[0] == ("365", "Days")


class TestTreatRows:
    """Tests for the treat list."""

    def test_newest_first(self):
        treats = [
            Treat(label="First", amount=Decimal("1"), timestamp=WHEN),
            Treat(label="Second", amount=Decimal("2.5"), timestamp=WHEN + timedelta(hours=1)),
        ]
        rows = treat_rows(treats, symbol="$")
        assert [row.label for row in rows] == ["Second", "First"]
        assert [row.amount for row in rows] == ["-$2.50", "-$1.00"]

    def test_empty(self):
        assert treat_rows([], symbol="$") == []


class TestMessages:
    """Tests for user-facing messages."""

    def test_insufficient_savings(self):
        error = InsufficientSavingsError(available=Decimal("1"), requested=Decimal("2"))
        message = insufficient_savings_message(error, symbol="$")
        assert "$1.00" in message
        assert "$2.00" in message

    def test_start_instant(self):
        local = datetime(2026, 10, 18, 9, 30).astimezone()
        assert format_start_instant(local) == "Oct 18, 2026, 09:30 AM"
