"""Tests for the treat ledger."""

import json

import pytest
from datetime import datetime, timezone
from decimal import Decimal

from savings_tracker.errors import LedgerCorruptionError
from savings_tracker.ledger import (
    TreatLedger,
    append,
    parse_ledger,
    serialize_ledger,
    total_spent,
)
from savings_tracker.models.activity import ActivityEventType
from savings_tracker.models.tracker import Treat
from savings_tracker.services.storage import TREAT_LEDGER_KEY


WHEN = datetime(2026, 10, 18, 9, 0, tzinfo=timezone.utc)


def treat(label="Coffee", amount="3.50"):
    return Treat(label=label, amount=Decimal(amount), timestamp=WHEN)


@pytest.fixture
def ledger(store, activity):
    return TreatLedger(store, activity)


class TestLedgerFunctions:
    """Tests for the pure ledger helpers."""

    def test_total_spent_empty(self):
        assert total_spent([]) == Decimal("0")

    def test_total_spent_sums_amounts(self):
        assert total_spent([treat(amount="3.50"), treat(amount="1.25")]) == Decimal("4.75")

    def test_append_returns_new_list(self):
        original = [treat("A")]
        updated = append(original, treat("B"))
        assert [t.label for t in updated] == ["A", "B"]
        assert [t.label for t in original] == ["A"]

    def test_append_strictly_increases_total(self):
        before = [treat(amount="2")]
        after = append(before, treat(amount="0.01"))
        assert total_spent(after) > total_spent(before)

    def test_serialized_shape(self):
        data = json.loads(serialize_ledger([treat()]))
        assert data == [{
            "label": "Coffee",
            "amount": "3.50",
            "timestamp": "2026-10-18T09:00:00Z",
        }]

    def test_parse_accepts_numeric_amounts(self):
        """Ledgers written by the browser widget store amounts as numbers."""
        raw = '[{"label": "Coffee", "amount": 3.5, "timestamp": "2026-10-18T09:00:00.000Z"}]'
        treats = parse_ledger(raw)
        assert treats[0].amount == Decimal("3.5")
        assert treats[0].timestamp == WHEN

    @pytest.mark.parametrize("raw", [
        "not json",
        '{"label": "Coffee"}',
        '[{"label": "Coffee", "amount": -1, "timestamp": "2026-10-18T09:00:00Z"}]',
        '[{"label": "", "amount": 1, "timestamp": "2026-10-18T09:00:00Z"}]',
        '[{"label": "Yacht", "amount": "1e13", "timestamp": "2026-10-18T09:00:00Z"}]',
    ])
    def test_parse_rejects_corrupt_data(self, raw):
        with pytest.raises(LedgerCorruptionError):
            parse_ledger(raw)


class TestTreatLedger:
    """Tests for the stored ledger."""

    def test_load_absent_is_empty(self, ledger):
        assert ledger.load() == []
        assert ledger.exists() is False

    def test_save_then_load_keeps_order(self, ledger):
        ledger.save([treat("First"), treat("Second")])
        assert [t.label for t in ledger.load()] == ["First", "Second"]

    def test_corrupt_ledger_loads_empty_and_is_logged(self, ledger, store, activity):
        store.set(TREAT_LEDGER_KEY, "{oops")
        assert ledger.load() == []
        assert ActivityEventType.LEDGER_CORRUPTED in activity.event_types

    def test_corruption_is_logged_once_per_value(self, ledger, store, activity):
        store.set(TREAT_LEDGER_KEY, "{oops")
        ledger.load()
        ledger.load()
        store.set(TREAT_LEDGER_KEY, "[oops")
        ledger.load()
        ledger.load()
        assert activity.event_types.count(ActivityEventType.LEDGER_CORRUPTED) == 2

    def test_repaired_then_corrupted_again_is_logged_again(self, ledger, store, activity):
        store.set(TREAT_LEDGER_KEY, "{oops")
        ledger.load()
        ledger.save([treat()])
        ledger.load()
        store.set(TREAT_LEDGER_KEY, "{oops")
        ledger.load()
        assert activity.event_types.count(ActivityEventType.LEDGER_CORRUPTED) == 2

    def test_read_reports_corruption(self, ledger, store):
        store.set(TREAT_LEDGER_KEY, "{oops")
        result = ledger.read()
        assert result.ok is False
        assert isinstance(result.error, LedgerCorruptionError)
        assert result.treats == []

    def test_initialize_creates_empty_ledger_once(self, ledger, store):
        assert ledger.initialize() is True
        assert store.get(TREAT_LEDGER_KEY) == "[]"
        assert ledger.initialize() is False

    def test_initialize_keeps_existing_ledger(self, ledger):
        ledger.save([treat()])
        ledger.initialize()
        assert len(ledger.load()) == 1

    def test_clear_removes_key(self, ledger, store):
        ledger.save([])
        ledger.clear()
        assert store.get(TREAT_LEDGER_KEY) is None
        assert ledger.exists() is False
