"""
Meeting Accounting Engine

A Meeting tracks who is in the room and for how long, and prices it.

STATE MACHINE:
- Stopped (initial): elapsed time is frozen
- Running: elapsed time grows with the clock

    start():  Stopped -> Running   (no-op when already running)
    stop():   Running -> Stopped   (no-op when already stopped)
    reset():  any     -> Stopped   (attendees and elapsed time cleared)

Time is never accumulated by polling. The clock is sampled on start(),
stop() and duration(), and elapsed time is the sum of closed intervals plus
the open one.

DESIGN DECISION: Attendees are aggregated per category title. The salary of
an aggregate is frozen when the first attendee of that title is added
(first-write-wins). Editing a category afterwards does not reprice people
already in the meeting. To reprice, remove the group and add it again.

The engine trusts its inputs. Counts are validated at the session boundary
(see validate_count), not here.
"""

from datetime import timedelta
from typing import Optional

from pydantic import BaseModel, Field

from meeting_cost_tracker.meeting.clock import Clock, MonotonicClock
from meeting_cost_tracker.models.attendee import AttendeeEntry, AttendeeSnapshot
from meeting_cost_tracker.models.category import MILLIS_PER_WORK_YEAR, SalaryCategory
from meeting_cost_tracker.observability import get_logger


logger = get_logger(__name__)


class AttendeeAggregate(BaseModel):
    """Internal record of attendees sharing the same category."""
    
    category_title: str
    salary_snapshot: float = Field(
        ...,
        gt=0,
        description="Salary frozen at the time the first attendee was added"
    )
    count: int = Field(default=0, ge=0)
    
    def cost_per_millisecond(self) -> float:
        """Combined cost rate of everyone in this group."""
        return self.salary_snapshot / MILLIS_PER_WORK_YEAR * self.count


class Meeting:
    """
    Attendee aggregation plus a start/stop timer.
    
    Not thread-safe. A multi-threaded host must serialize access, e.g. one
    lock per Meeting.
    """
    
    def __init__(self, clock: Optional[Clock] = None):
        """
        Create an empty, stopped meeting.
        
        Args:
            clock: Time source. Defaults to the monotonic system clock.
        """
        self._clock = clock or MonotonicClock()
        self._attendees: dict[str, AttendeeAggregate] = {}
        self._elapsed = timedelta(0)
        self._running = False
        self._running_since: Optional[float] = None
    
    # -------------------------------------------------------------------------
    # Timer
    # -------------------------------------------------------------------------
    
    def start(self) -> None:
        """Start the timer. Has no effect while already running."""
        if self._running:
            return
        self._running_since = self._clock.now()
        self._running = True
        logger.debug("meeting_started", elapsed_ms=self._elapsed_ms(self._elapsed))
    
    def stop(self) -> None:
        """Stop the timer and bank the running interval. Safe to call repeatedly."""
        if not self._running:
            return
        self._elapsed += self._open_interval()
        self._running_since = None
        self._running = False
        logger.debug("meeting_stopped", elapsed_ms=self._elapsed_ms(self._elapsed))
    
    def reset(self) -> None:
        """Return to the initial state: stopped, no attendees, zero elapsed time."""
        self._attendees.clear()
        self._elapsed = timedelta(0)
        self._running_since = None
        self._running = False
        logger.debug("meeting_reset")
    
    def is_running(self) -> bool:
        return self._running
    
    def duration(self) -> timedelta:
        """Total time spent in the Running state, across all start/stop cycles."""
        return self._elapsed + self._open_interval()
    
    # -------------------------------------------------------------------------
    # Attendees
    # -------------------------------------------------------------------------
    
    def add_attendee(self, category: SalaryCategory, count: int) -> None:
        """
        Add `count` attendees of `category`.
        
        The first add for a title fixes the salary used for that title until
        the group is removed. Later adds only increase the count, even if
        `category` now carries a different salary. Adding zero is a no-op.
        """
        if count == 0:
            return
        
        aggregate = self._attendees.get(category.title)
        if aggregate is None:
            aggregate = AttendeeAggregate(
                category_title=category.title,
                salary_snapshot=category.annual_salary,
            )
            self._attendees[category.title] = aggregate
        elif aggregate.salary_snapshot != category.annual_salary:
            logger.debug(
                "attendee_salary_kept",
                title=category.title,
                frozen_salary=aggregate.salary_snapshot,
                offered_salary=category.annual_salary,
            )
        
        aggregate.count += count
        logger.debug("attendees_added", title=category.title, added=count, count=aggregate.count)
    
    def remove_attendee(self, title: str, count: int) -> None:
        """
        Remove up to `count` attendees with the given title.
        
        Removing as many or more than are present deletes the group.
        Unknown titles are ignored.
        """
        aggregate = self._attendees.get(title)
        if aggregate is None:
            return
        
        if count >= aggregate.count:
            del self._attendees[title]
            logger.debug("attendee_group_removed", title=title)
        else:
            aggregate.count -= count
            logger.debug("attendees_removed", title=title, removed=count, count=aggregate.count)
    
    def clear_attendees(self) -> None:
        """Remove every attendee. Timing is left untouched."""
        self._attendees.clear()
    
    def attendees(self) -> tuple[AttendeeEntry, ...]:
        """
        Snapshot of current attendee groups as (title, salary, count) rows.
        
        The result is detached from the meeting and can be iterated any
        number of times. Order is unspecified.
        """
        return tuple(
            AttendeeEntry(a.category_title, a.salary_snapshot, a.count)
            for a in self._attendees.values()
        )
    
    def attendee_count(self, title: str) -> Optional[int]:
        """Attendee count for a title, or None if nobody of that title is present."""
        aggregate = self._attendees.get(title)
        return aggregate.count if aggregate else None
    
    def to_snapshot(self) -> list[AttendeeSnapshot]:
        """Current composition in its persisted form."""
        return [
            AttendeeSnapshot(title=a.category_title, count=a.count)
            for a in self._attendees.values()
        ]
    
    # -------------------------------------------------------------------------
    # Cost
    # -------------------------------------------------------------------------
    
    def cost_per_millisecond(self) -> float:
        """Current burn rate of the whole room, in dollars per millisecond."""
        return sum((a.cost_per_millisecond() for a in self._attendees.values()), 0.0)
    
    def total_cost(self) -> float:
        """Cost in dollars accrued so far."""
        millis = self._elapsed_ms(self.duration())
        return sum(
            ((a.salary_snapshot / MILLIS_PER_WORK_YEAR) * a.count * millis
             for a in self._attendees.values()),
            0.0,
        )
    
    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------
    
    def _open_interval(self) -> timedelta:
        if not self._running or self._running_since is None:
            return timedelta(0)
        # Clamp so a misbehaving clock can never shrink the meeting
        return timedelta(seconds=max(0.0, self._clock.now() - self._running_since))
    
    @staticmethod
    def _elapsed_ms(value: timedelta) -> float:
        return value.total_seconds() * 1000.0
