"""
Display Formatting

Turns SessionState values into the strings the UI shows. Kept apart from
the UI code so it can be tested without a browser.
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, NamedTuple, Optional

from savings_tracker.config import get_settings
from savings_tracker.errors import InsufficientSavingsError
from savings_tracker.models.tracker import ElapsedBreakdown, Treat


FUTURE_START_MESSAGE = "Start time is in the future!"

TIME_UNIT_LABELS = ("Days", "Hours", "Minutes", "Seconds")

_CENT = Decimal("0.01")


class TreatRow(NamedTuple):
    """One line of the treat list."""
    label: str
    when: str
    amount: str


def format_currency(amount: Decimal, symbol: Optional[str] = None) -> str:
    """
    Format an amount with exactly two decimals and thousands separators.

    Example: Decimal("1234.5") -> "$1,234.50", Decimal("-1") -> "-$1.00"
    """
    if symbol is None:
        symbol = get_settings().currency_symbol
    rounded = Decimal(amount).quantize(_CENT, rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{abs(rounded):,.2f}"


def format_time_units(breakdown: ElapsedBreakdown) -> list[tuple[str, str]]:
    """
    Zero-padded (value, label) pairs for the time cards.

    Days are padded to two digits but never truncated.
    """
    values = (
        breakdown.days,
        breakdown.hours,
        breakdown.minutes,
        breakdown.seconds,
    )
    return [(f"{value:02d}", label) for value, label in zip(values, TIME_UNIT_LABELS)]


def format_start_instant(instant: datetime) -> str:
    """Start instant in local time, e.g. 'Oct 18, 2026, 09:30 AM'."""
    local = instant.astimezone() if instant.tzinfo else instant
    return local.strftime("%b %d, %Y, %I:%M %p")


def format_treat_time(timestamp: datetime) -> str:
    """Treat time in local time, e.g. 'Oct 18, 09:30 AM'."""
    return timestamp.astimezone().strftime("%b %d, %I:%M %p")


def treat_rows(treats: Iterable[Treat], symbol: Optional[str] = None) -> list[TreatRow]:
    """Rows for the treat list, newest first."""
    return [
        TreatRow(
            label=treat.label,
            when=format_treat_time(treat.timestamp),
            amount=f"-{format_currency(treat.amount, symbol)}",
        )
        for treat in reversed(list(treats))
    ]


def insufficient_savings_message(
    error: InsufficientSavingsError,
    symbol: Optional[str] = None,
) -> str:
    """User-facing explanation of a rejected treat."""
    return (
        "Cannot log treat. Your available net savings are currently "
        f"{format_currency(error.available, symbol)}. "
        f"Treat amount ({format_currency(error.requested, symbol)}) is too high."
    )
