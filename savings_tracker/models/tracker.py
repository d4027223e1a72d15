"""
Core Data Models for the Savings Tracker

These models define the shapes of everything the tracker stores or derives:
1. TrackerConfig - what the user is saving for, since when, at what rate
2. Treat - a single expenditure logged against the savings
3. SessionState - the derived numbers shown on every tick

DESIGN DECISION: Money is held as Decimal everywhere and only rounded to
two places when it is displayed. A rate of 24.00/day over one hour is
exactly 1.00, not 0.9999999.

Amounts and rates are capped at MAX_AMOUNT so that derived sums stay
well inside the default decimal context.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
)


MAX_AMOUNT = Decimal("1e12")


# =============================================================================
# ENUMS
# =============================================================================

class TrackerStatus(str, Enum):
    """
    The two states a tracker session can be in.

    ACTIVE means label, start instant and daily rate are all stored.
    Anything less is UNCONFIGURED.
    """
    UNCONFIGURED = "unconfigured"
    ACTIVE = "active"


# =============================================================================
# CONFIGURATION AND LEDGER ENTRIES
# =============================================================================

def _require_aware(value: datetime) -> datetime:
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError("Datetime must be timezone-aware")
    return value


class TrackerConfig(BaseModel):
    """
    The active tracker configuration.

    CRITICAL: All three fields are persisted together or not at all.
    A store holding only some of them loads as UNCONFIGURED.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    label: str = Field(
        ...,
        min_length=1,
        description="What the user is saving by (e.g. 'No takeaway coffee')"
    )
    start_instant: datetime = Field(
        ...,
        description="When saving started (timezone-aware, seconds are zero)"
    )
    daily_rate: Decimal = Field(
        ...,
        ge=0,
        lt=MAX_AMOUNT,
        description="Amount saved per full day"
    )

    @field_validator('start_instant')
    @classmethod
    def validate_start_instant(cls, v: datetime) -> datetime:
        """Elapsed time is only meaningful against an absolute instant."""
        return _require_aware(v)


class Treat(BaseModel):
    """
    A discretionary expenditure paid for out of the savings.

    Treats are immutable. They are never edited or individually deleted;
    the whole ledger is cleared when the tracker is reset.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    label: str = Field(
        ...,
        min_length=1,
        description="What the treat was"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        lt=MAX_AMOUNT,
        description="How much it cost"
    )
    timestamp: datetime = Field(
        ...,
        description="When it was logged"
    )

    @field_validator('timestamp')
    @classmethod
    def validate_timestamp(cls, v: datetime) -> datetime:
        return _require_aware(v)


# =============================================================================
# DERIVED STATE
# =============================================================================

class ElapsedBreakdown(BaseModel):
    """Whole elapsed seconds split into days, hours, minutes and seconds."""
    model_config = ConfigDict(frozen=True)

    days: int = Field(ge=0)
    hours: int = Field(ge=0, lt=24)
    minutes: int = Field(ge=0, lt=60)
    seconds: int = Field(ge=0, lt=60)

    @property
    def total_seconds(self) -> int:
        return (
            self.days * 86400
            + self.hours * 3600
            + self.minutes * 60
            + self.seconds
        )


class SessionState(BaseModel):
    """
    Everything the display needs for one tick.

    Never stored. Rebuilt from clock, configuration and ledger every time.
    When is_future is set the start instant lies after computed_at:
    gross and net savings are zero and there is no breakdown.
    """
    model_config = ConfigDict(frozen=True)

    computed_at: datetime
    elapsed_seconds: int
    is_future: bool = False
    breakdown: Optional[ElapsedBreakdown] = None

    gross_saved: Decimal = Field(ge=0)
    total_treats: Decimal = Field(ge=0)
    net_saved: Decimal = Field(ge=0)

    # Oldest first, as stored
    treats: tuple[Treat, ...] = ()

    @computed_field
    @property
    def available(self) -> Decimal:
        """Savings not yet spent on treats. Not floored, unlike net_saved."""
        return self.gross_saved - self.total_treats


class StartDefaults(BaseModel):
    """
    Default values for the setup form while the tracker is UNCONFIGURED.

    Derived from the clock when the session becomes unconfigured.
    """

    label: Optional[str] = None
    start_date: str = Field(
        ...,
        pattern=r"^\d{4}-\d{2}-\d{2}$",
        description="Local date as YYYY-MM-DD"
    )
    start_time: str = Field(
        ...,
        pattern=r"^\d{2}:\d{2}$",
        description="Local time as HH:MM"
    )
