"""Google Calendar API client.

Reads events from a single Google Calendar for the digest.

## API Documentation

https://developers.google.com/calendar/api/v3/reference/events/list

## Authentication

Either a service account key (share the calendar with the service account's
email address) or an authorized user token file. When no file is configured,
Application Default Credentials are used.

## Time Handling

`timeMin` is an exclusive bound on event end and `timeMax` an exclusive bound
on event start, so a list request returns exactly the events whose span
intersects [timeMin, timeMax).

Returned events are converted to naive datetimes in the host's local
timezone. All-day events, which the API reports as plain dates with an
exclusive end date, become local midnights.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Any

import google.auth
from google.oauth2 import service_account
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from calendar_digest.calendar.base import CalendarSource, CalendarSourceError
from calendar_digest.config import ConfigurationError, Settings
from calendar_digest.models.event import CalendarEvent

logger = logging.getLogger(__name__)


def _to_local(dt: datetime) -> datetime:
    """Convert an aware datetime to naive host-local time."""
    return dt.astimezone().replace(tzinfo=None)


def _to_rfc3339(dt: datetime) -> str:
    """Format a (naive local or aware) datetime for the API."""
    return dt.astimezone().isoformat()


def _parse_event_time(data: dict[str, Any]) -> datetime:
    """Parse an API 'start' or 'end' object.

    All-day events have a 'date' key; timed events have 'dateTime'.
    """
    if "date" in data:
        return datetime.combine(date.fromisoformat(data["date"]), time())
    return _to_local(datetime.fromisoformat(data["dateTime"].replace("Z", "+00:00")))


def event_from_api(data: dict[str, Any]) -> CalendarEvent:
    """Create a CalendarEvent from a Google Calendar API event resource."""
    start_data = data.get("start", {})
    end_data = data.get("end", {})

    return CalendarEvent(
        title=data.get("summary", "(No title)"),
        start=_parse_event_time(start_data),
        end=_parse_event_time(end_data),
        is_all_day="date" in start_data,
    )


class GoogleCalendarClient(CalendarSource):
    """Calendar source backed by the Google Calendar API.

    Example:
        ```python
        client = GoogleCalendarClient.from_settings(get_settings())

        events = client.events_for_day(datetime.now())
        ```
    """

    def __init__(
        self,
        calendar_id: str | None,
        credentials: Any = None,
        service: Any = None,
        max_results: int = 250,
    ):
        """Initialize the client.

        Args:
            calendar_id: Calendar ID (checked on first request)
            credentials: google-auth credentials used to build the service
            service: Prebuilt Calendar API service, mainly for tests
            max_results: Page size for list requests
        """
        self.calendar_id = calendar_id
        self.max_results = max_results
        self._credentials = credentials
        self._service = service

    @classmethod
    def from_settings(cls, settings: Settings) -> GoogleCalendarClient:
        """Create a client using the configured credentials."""
        return cls(
            calendar_id=settings.calendar_id,
            credentials=load_credentials(settings),
        )

    def _get_service(self) -> Any:
        """Get or build the Calendar API service."""
        if self._service is None:
            self._service = build(
                "calendar",
                "v3",
                credentials=self._credentials,
                cache_discovery=False,
            )
        return self._service

    def events_in_range(
        self,
        start: datetime,
        end: datetime,
    ) -> list[CalendarEvent]:
        """List events intersecting [start, end).

        Recurring events are expanded into single instances and cancelled
        events are skipped.
        """
        if not self.calendar_id:
            raise ConfigurationError("calendar_id")

        params: dict[str, Any] = {
            "calendarId": self.calendar_id,
            "timeMin": _to_rfc3339(start),
            "timeMax": _to_rfc3339(end),
            "maxResults": self.max_results,
            "singleEvents": True,
            "orderBy": "startTime",
        }

        events: list[CalendarEvent] = []
        service = self._get_service()

        while True:
            try:
                result = service.events().list(**params).execute()
            except HttpError as e:
                raise CalendarSourceError(
                    f"Failed to list events for calendar {self.calendar_id}",
                    calendar_id=self.calendar_id,
                    status_code=e.resp.status,
                ) from e

            for item in result.get("items", []):
                if item.get("status") == "cancelled":
                    continue
                events.append(event_from_api(item))

            page_token = result.get("nextPageToken")
            if not page_token:
                break
            params["pageToken"] = page_token

        logger.debug(
            f"Fetched {len(events)} events from {self.calendar_id} "
            f"between {start.isoformat()} and {end.isoformat()}"
        )
        return events


def load_credentials(settings: Settings) -> Any:
    """Load Google credentials according to settings.

    Falls back to Application Default Credentials when no file is set.
    """
    scopes = settings.google_calendar_scopes
    path = settings.google_credentials_file

    if path is None:
        credentials, _ = google.auth.default(scopes=scopes)
        return credentials

    if settings.google_credentials_type == "authorized_user":
        return Credentials.from_authorized_user_file(path, scopes=scopes)
    return service_account.Credentials.from_service_account_file(path, scopes=scopes)
