"""Domain models for calendar digests."""

from calendar_digest.models.event import CalendarEvent

__all__ = [
    "CalendarEvent",
]
