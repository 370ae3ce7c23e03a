"""Shared fixtures for Meeting Cost Tracker tests."""

import pytest

from meeting_cost_tracker.config import get_settings
from meeting_cost_tracker.meeting import Clock, Meeting
from meeting_cost_tracker.models import SalaryCategory


class ManualClock(Clock):
    """Clock that only moves when a test tells it to."""
    
    def __init__(self, start: float = 1000.0):
        self._now = start
        self.reads = 0
    
    def now(self) -> float:
        self.reads += 1
        return self._now
    
    def advance(self, seconds: float) -> None:
        self._now += seconds
    
    def advance_ms(self, millis: float) -> None:
        self.advance(millis / 1000.0)


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def meeting(clock: ManualClock) -> Meeting:
    return Meeting(clock=clock)


@pytest.fixture
def engineer() -> SalaryCategory:
    return SalaryCategory.create("Engineer", 120_000)


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Isolate every test from the developer's environment and settings cache."""
    for var in (
        "MCT_APP_ENVIRONMENT",
        "MCT_LOG_LEVEL",
        "MCT_JSON_LOGS",
        "MCT_RESTORE_ATTENDEES",
        "MCT_STORAGE_DATA_DIR",
        "MCT_STORAGE_CATEGORIES_FILE",
        "MCT_STORAGE_ATTENDEES_FILE",
    ):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
