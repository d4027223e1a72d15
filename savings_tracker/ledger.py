"""
Treat Ledger

The ledger is the ordered list of treats, oldest first, stored as one
JSON array under a single key. It is always read and written whole:
appending means load, build a new list, save.

DESIGN DECISION: An unreadable ledger is not an error for the user.
read() reports it explicitly as a LedgerReadResult carrying the
LedgerCorruptionError; load() logs that and carries on with an empty
ledger, which the next save overwrites.
"""

from decimal import Decimal
from typing import Iterable, NamedTuple, Optional

from pydantic import TypeAdapter, ValidationError

from savings_tracker.activity import ActivityLogger
from savings_tracker.errors import LedgerCorruptionError
from savings_tracker.models.tracker import Treat
from savings_tracker.services.storage import TREAT_LEDGER_KEY, KeyValueStore


ZERO = Decimal("0")

_LEDGER_ADAPTER = TypeAdapter(list[Treat])


def total_spent(treats: Iterable[Treat]) -> Decimal:
    """Sum of all treat amounts; zero for an empty ledger."""
    return sum((treat.amount for treat in treats), ZERO)


def append(treats: Iterable[Treat], treat: Treat) -> list[Treat]:
    """New ledger with treat added at the end. Does not validate or persist."""
    return [*treats, treat]


def parse_ledger(raw: str) -> list[Treat]:
    """
    Parse a stored ledger.

    Accepts amounts written as JSON numbers or decimal strings.

    Raises:
        LedgerCorruptionError: If raw is not a JSON array of valid treats
    """
    try:
        return _LEDGER_ADAPTER.validate_json(raw)
    except ValidationError as e:
        raise LedgerCorruptionError(
            f"Stored treat ledger is invalid ({e.error_count()} errors): {e.errors()[0]['msg']}"
        ) from e


def serialize_ledger(treats: Iterable[Treat]) -> str:
    """Serialize a ledger as a JSON array of {label, amount, timestamp}."""
    return _LEDGER_ADAPTER.dump_json(list(treats)).decode("utf-8")


class LedgerReadResult(NamedTuple):
    """Outcome of reading the ledger: treats, or the reason there are none."""
    treats: list[Treat]
    error: Optional[LedgerCorruptionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class TreatLedger:
    """Stored list of treats behind a key-value store."""

    def __init__(
        self,
        store: KeyValueStore,
        activity_logger: Optional[ActivityLogger] = None,
    ):
        self._store = store
        self._activity = activity_logger or ActivityLogger()
        self._reported_corrupt_raw: Optional[str] = None

    def exists(self) -> bool:
        """Is there a ledger in the store at all (even an empty one)?"""
        return self._store.contains(TREAT_LEDGER_KEY)

    def read(self) -> LedgerReadResult:
        """Read the ledger, reporting corruption instead of raising it."""
        return self._parse(self._store.get(TREAT_LEDGER_KEY))

    @staticmethod
    def _parse(raw: Optional[str]) -> LedgerReadResult:
        if raw is None or raw == "":
            return LedgerReadResult(treats=[])
        try:
            return LedgerReadResult(treats=parse_ledger(raw))
        except LedgerCorruptionError as e:
            return LedgerReadResult(treats=[], error=e)

    def load(self) -> list[Treat]:
        """
        Stored treats, oldest first.

        Missing or unreadable ledgers load as empty. Corruption is logged
        once per distinct stored value, not on every load.
        """
        raw = self._store.get(TREAT_LEDGER_KEY)
        result = self._parse(raw)
        if result.ok:
            self._reported_corrupt_raw = None
        elif raw != self._reported_corrupt_raw:
            self._reported_corrupt_raw = raw
            self._activity.log_ledger_corrupted(str(result.error))
        return result.treats

    def save(self, treats: Iterable[Treat]) -> None:
        """Persist the whole ledger in a single write."""
        self._store.set(TREAT_LEDGER_KEY, serialize_ledger(treats))

    def initialize(self) -> bool:
        """
        Store an empty ledger if none exists.

        Returns True if one was created. An existing ledger, even one from
        an earlier configuration, is left alone.
        """
        if self.exists():
            return False
        self.save([])
        self._activity.log_ledger_initialized()
        return True

    def clear(self) -> None:
        """Remove the ledger key entirely."""
        self._store.remove(TREAT_LEDGER_KEY)
