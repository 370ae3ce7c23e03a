"""
Meeting Cost Tracker - Source Package

Tracks the cost of a meeting in real time from attendee salaries.

Example:

    from meeting_cost_tracker import Meeting, SalaryCategory
    
    category = SalaryCategory.create("Engineer", 120_000)
    meeting = Meeting()
    meeting.add_attendee(category, 3)
    meeting.start()
    ...
    meeting.stop()
    print(f"Cost: ${meeting.total_cost():.2f}")

DESIGN PRINCIPLES:
1. Validate at the edges, trust inside the engine
2. Time is computed on demand, never polled
3. Missing data files mean "no data yet", not an error
4. Storage layer is swappable
"""

from meeting_cost_tracker.meeting import Clock, Meeting, MonotonicClock
from meeting_cost_tracker.models import (
    MILLIS_PER_WORK_YEAR,
    AttendeeEntry,
    AttendeeSnapshot,
    CategoryValidationError,
    EmptyTitleError,
    InvalidCountError,
    InvalidSalaryError,
    SalaryCategory,
    validate_count,
)
from meeting_cost_tracker.orchestrator import (
    DuplicateCategoryError,
    MeetingSession,
    UnknownCategoryError,
    create_app_components,
)
from meeting_cost_tracker.services.storage import (
    StorageError,
    StorageParseError,
    StorageReadError,
    StorageSerializationError,
    StorageWriteError,
    TomlSnapshotStore,
    load_attendee_snapshot,
    load_categories,
    save_attendee_snapshot,
    save_categories,
)

__version__ = "1.1.1"

__all__ = [
    "MILLIS_PER_WORK_YEAR",
    "AttendeeEntry",
    "AttendeeSnapshot",
    "CategoryValidationError",
    "Clock",
    "DuplicateCategoryError",
    "EmptyTitleError",
    "InvalidCountError",
    "InvalidSalaryError",
    "Meeting",
    "MeetingSession",
    "MonotonicClock",
    "SalaryCategory",
    "StorageError",
    "StorageParseError",
    "StorageReadError",
    "StorageSerializationError",
    "StorageWriteError",
    "TomlSnapshotStore",
    "UnknownCategoryError",
    "create_app_components",
    "load_attendee_snapshot",
    "load_categories",
    "save_attendee_snapshot",
    "save_categories",
    "validate_count",
]
