"""Input validation package."""

from savings_tracker.validation.validator import (
    TrackerInputValidator,
    clean_label,
    parse_decimal,
)

__all__ = ["TrackerInputValidator", "clean_label", "parse_decimal"]
