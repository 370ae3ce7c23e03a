"""Meeting accounting package."""

from meeting_cost_tracker.meeting.clock import Clock, MonotonicClock
from meeting_cost_tracker.meeting.engine import AttendeeAggregate, Meeting

__all__ = ["AttendeeAggregate", "Clock", "Meeting", "MonotonicClock"]
