"""
Shared fixtures.

No test touches the real clock, a real timer or the user's store file:
time is a ManualClock, ticks come from a ManualScheduler and storage is
in memory unless a test asks for tmp_path.
"""

from datetime import datetime, timedelta, timezone

import pytest

from savings_tracker.activity import ActivityLogger
from savings_tracker.services import (
    InMemoryKeyValueStore,
    ManualClock,
    ManualScheduler,
)
from savings_tracker.session import TrackerSession


NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


class RecordingActivityLogger(ActivityLogger):
    """ActivityLogger that also keeps every event it logs."""

    def __init__(self):
        super().__init__()
        self.events = []

    def log(self, event):
        self.events.append(event)
        return super().log(event)

    @property
    def event_types(self):
        return [event.event_type for event in self.events]


@pytest.fixture
def clock():
    return ManualClock(NOW)


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def activity():
    return RecordingActivityLogger()


@pytest.fixture
def session(store, clock, scheduler, activity):
    return TrackerSession(
        store=store,
        clock=clock,
        scheduler=scheduler,
        activity_logger=activity,
        tick_interval=1.0,
    )


def start_ago(session, clock, seconds, daily_rate, label="No takeaway coffee"):
    """Start the tracker `seconds` before the clock's current instant."""
    start = clock.now() - timedelta(seconds=seconds)
    assert start.second == 0, "start instants have minute precision"
    return session.start(
        label=label,
        start_date=start.date().isoformat(),
        start_time=start.strftime("%H:%M"),
        daily_rate=daily_rate,
    )
