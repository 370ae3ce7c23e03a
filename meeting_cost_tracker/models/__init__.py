"""
Data Models Package

This package contains the Pydantic models used by the meeting cost tracker.
Everything that is validated or persisted conforms to these schemas.
"""

from meeting_cost_tracker.models.category import (
    MILLIS_PER_WORK_YEAR,
    CategoryValidationError,
    EmptyTitleError,
    InvalidCountError,
    InvalidSalaryError,
    SalaryCategory,
    validate_count,
)
from meeting_cost_tracker.models.attendee import (
    AttendeeEntry,
    AttendeeSnapshot,
)

__all__ = [
    # Category models
    "MILLIS_PER_WORK_YEAR",
    "CategoryValidationError",
    "EmptyTitleError",
    "InvalidCountError",
    "InvalidSalaryError",
    "SalaryCategory",
    "validate_count",
    # Attendee models
    "AttendeeEntry",
    "AttendeeSnapshot",
]
