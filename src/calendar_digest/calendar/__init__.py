"""Calendar integration module.

Provides read-only access to calendar events for building digests.

## Sources

- `CalendarSource`: abstract interface (day query and range query)
- `GoogleCalendarClient`: Google Calendar API v3 implementation
"""

from calendar_digest.calendar.base import (
    CalendarSource,
    CalendarSourceError,
)
from calendar_digest.calendar.google_calendar import (
    GoogleCalendarClient,
    event_from_api,
    load_credentials,
)

__all__ = [
    "CalendarSource",
    "CalendarSourceError",
    "GoogleCalendarClient",
    "event_from_api",
    "load_credentials",
]
