"""Event model shared by calendar sources and the digest builder."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from calendar_digest.dates import add_days


class CalendarEvent(BaseModel):
    """A read-only calendar event.

    All-day events follow the usual calendar convention: `end` points to the
    midnight after the last included day, so a single-day all-day event on
    March 1 has start=Mar 1 00:00 and end=Mar 2 00:00.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Event title as shown in the calendar")
    start: datetime
    end: datetime
    is_all_day: bool = False

    @model_validator(mode="after")
    def check_order(self) -> CalendarEvent:
        if self.end < self.start:
            raise ValueError("Event end must not be before its start")
        return self

    @property
    def last_day(self) -> datetime:
        """Start of the last calendar day an all-day event covers."""
        return add_days(self.end, -1)
