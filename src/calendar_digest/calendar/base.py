"""Calendar source abstraction.

The digest only ever reads from a calendar. A source answers two questions:

- Which events touch a given day? (`events_for_day`)
- Which events touch the half-open range [start, end)? (`events_in_range`)

"Touch" means the event's span intersects the range, so an event that began
yesterday and ends today is part of today's events. Results are returned in
chronological order of start time, which the daily digest relies on.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from calendar_digest.dates import add_days, start_of_day
from calendar_digest.models.event import CalendarEvent


class CalendarSourceError(Exception):
    """Raised when events cannot be read from the calendar."""

    def __init__(
        self,
        message: str,
        calendar_id: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.calendar_id = calendar_id
        self.status_code = status_code


class CalendarSource(ABC):
    """Abstract base class for read-only calendar sources.

    Example:
        ```python
        class StaticSource(CalendarSource):
            def __init__(self, events):
                self._events = events

            def events_in_range(self, start, end):
                return [e for e in self._events if e.start < end and e.end > start]
        ```
    """

    @abstractmethod
    def events_in_range(
        self,
        start: datetime,
        end: datetime,
    ) -> list[CalendarEvent]:
        """Get events whose span intersects [start, end).

        Args:
            start: Range start (inclusive)
            end: Range end (exclusive)

        Returns:
            Events ordered by start time

        Raises:
            CalendarSourceError: If the calendar cannot be read
        """
        pass

    def events_for_day(self, day: datetime) -> list[CalendarEvent]:
        """Get events intersecting the calendar day containing `day`."""
        start = start_of_day(day)
        return self.events_in_range(start, add_days(start, 1))
