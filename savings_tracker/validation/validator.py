"""
Input Validation

DESIGN DECISION: User input is checked in a fixed order and the first
failing check aborts the operation:

START:
1. Label is non-empty after trimming
2. Both a start date and a start time are provided
3. The daily rate is a finite number, zero or greater

TREAT:
1. Label is non-empty after trimming
2. The amount is a finite number greater than zero

Each failure is its own InputValidationError with a message meant for
the user. Validation never corrects input and never touches storage.
"""

from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from savings_tracker.errors import InputValidationError
from savings_tracker.models.tracker import MAX_AMOUNT, TrackerConfig
from savings_tracker.services.clock import Clock


DateInput = Union[date, str, None]
TimeInput = Union[time, str, None]
NumberInput = Union[Decimal, int, float, str, None]

LABEL_REQUIRED = "Please enter a label for what you are tracking."
DATE_TIME_REQUIRED = "Please select both a start date and a start time."
DATE_INVALID = "Please enter the start date as YYYY-MM-DD."
TIME_INVALID = "Please enter the start time as HH:MM."
RATE_INVALID = "Please enter a valid daily saving amount (0 or greater)."
TREAT_LABEL_REQUIRED = "Please enter a description for the treat."
TREAT_AMOUNT_INVALID = "Please enter a valid amount greater than zero."


def clean_label(value: Optional[str]) -> str:
    """Trim a label; None becomes the empty string."""
    if value is None:
        return ""
    return str(value).strip()


def parse_decimal(value: NumberInput) -> Optional[Decimal]:
    """
    Parse a user-supplied number.

    Returns None for anything that is not a finite number, including
    empty strings, NaN and infinities. Magnitudes of MAX_AMOUNT or more
    are rejected too.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, (int, float)):
        # str() keeps 0.1 as 0.1 instead of its binary expansion
        number = Decimal(str(value))
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = Decimal(text)
        except InvalidOperation:
            return None

    # copy_abs() ignores the context, so huge exponents cannot overflow here
    if not number.is_finite() or number.copy_abs() >= MAX_AMOUNT:
        return None
    return number


def _parse_date(value: DateInput) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise InputValidationError("start_date", DATE_INVALID) from None


def _parse_time(value: TimeInput) -> Optional[time]:
    if value is None:
        return None
    if isinstance(value, time):
        return value

    text = str(value).strip()
    if not text:
        return None
    try:
        return time.fromisoformat(text)
    except ValueError:
        raise InputValidationError("start_time", TIME_INVALID) from None


class TrackerInputValidator:
    """
    Validates setup-form and treat-form input.

    Needs a clock only to turn the local start date and time into an
    instant.
    """

    def __init__(self, clock: Clock):
        self._clock = clock

    def validate_start(
        self,
        label: Optional[str],
        start_date: DateInput,
        start_time: TimeInput,
        daily_rate: NumberInput,
    ) -> TrackerConfig:
        """
        Check start input and build the configuration it describes.

        The start instant is local wall-clock time with seconds forced
        to zero.

        Raises:
            InputValidationError: On the first failing check
        """
        cleaned_label = clean_label(label)
        if not cleaned_label:
            raise InputValidationError("label", LABEL_REQUIRED)

        parsed_date = _parse_date(start_date)
        parsed_time = _parse_time(start_time)
        if parsed_date is None or parsed_time is None:
            raise InputValidationError("start_date_time", DATE_TIME_REQUIRED)

        rate = parse_decimal(daily_rate)
        if rate is None or rate < 0:
            raise InputValidationError("daily_rate", RATE_INVALID)

        local_start = datetime.combine(
            parsed_date,
            parsed_time.replace(second=0, microsecond=0, tzinfo=None),
        )

        return TrackerConfig(
            label=cleaned_label,
            start_instant=self._clock.localize(local_start),
            daily_rate=rate,
        )

    def validate_treat(
        self,
        label: Optional[str],
        amount: NumberInput,
    ) -> tuple[str, Decimal]:
        """
        Check treat input.

        Returns: (label, amount)

        Raises:
            InputValidationError: On the first failing check
        """
        cleaned_label = clean_label(label)
        if not cleaned_label:
            raise InputValidationError("treat_label", TREAT_LABEL_REQUIRED)

        parsed_amount = parse_decimal(amount)
        if parsed_amount is None or parsed_amount <= 0:
            raise InputValidationError("treat_amount", TREAT_AMOUNT_INVALID)

        return cleaned_label, parsed_amount
