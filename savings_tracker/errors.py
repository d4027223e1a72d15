"""
Tracker Exceptions

Every failure the tracker reports to its caller derives from TrackerError.
Storage backend failures are separate (see services.storage.StorageError)
because they are not the user's to fix.
"""

from decimal import Decimal


class TrackerError(Exception):
    """Base exception for tracker operations."""
    pass


class InputValidationError(TrackerError):
    """
    User input was rejected. Nothing was changed.

    `field` names the first input that failed; `message` is safe to show
    to the user as-is.
    """

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(message)


class InsufficientSavingsError(TrackerError):
    """
    A treat costs more than the savings not yet spent.

    `available` is gross savings minus treats already logged, measured at
    the instant the treat was attempted.
    """

    def __init__(self, available: Decimal, requested: Decimal):
        self.available = available
        self.requested = requested
        super().__init__(
            f"Cannot log treat: available savings are {available:.2f}, "
            f"treat amount is {requested:.2f}"
        )


class TrackerNotActiveError(TrackerError):
    """The operation needs a running tracker."""
    pass


class LedgerCorruptionError(TrackerError):
    """The stored treat ledger could not be parsed."""
    pass
