"""
Attendee Models

AttendeeSnapshot is the persisted form of a meeting's composition: just a
category title and a head count. It carries no salary and no timer state, so
a restored snapshot always re-prices against the current category list.

AttendeeEntry is the read-only row the meeting hands out when listing its
attendees.
"""

from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class AttendeeSnapshot(BaseModel):
    """A saved (title, count) pair."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)
    
    title: str = Field(
        ...,
        min_length=1,
        description="Title of the salary category"
    )
    count: StrictInt = Field(
        ...,
        ge=0,
        description="Number of attendees of this category"
    )


class AttendeeEntry(NamedTuple):
    """One attendee group as seen from outside the meeting."""
    title: str
    salary: float
    count: int
