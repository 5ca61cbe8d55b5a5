"""Digest message construction.

Turns calendar events into the text posted to the webhook.

## Daily digest

One bullet per event, in the order the calendar returned them:

```
本日の予定はこちらです
- Standup
- Lunch with Aki
```

## Weekly digest

Covers [start of day, start of day + 7 days). Events are grouped under a
label for the calendar day they start on; groups are ordered by date and
separated by a blank line:

```
今週の予定はこちらです

3月4日(月)
- Standup

3月6日(水)
- Release
- Retro
```

All-day events spanning more than one day are left out of the weekly digest.
Timed events are always kept, however long they are.

Groups are keyed by the numeric calendar day, not by the rendered label, so
two different days can never be merged even if their labels render the same.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

from calendar_digest.calendar.base import CalendarSource
from calendar_digest.dates import (
    Locale,
    add_days,
    day_from_key,
    day_key,
    format_day_label,
    is_same_calendar_day,
    start_of_day,
)
from calendar_digest.models.event import CalendarEvent

logger = logging.getLogger(__name__)

WEEKLY_WINDOW_DAYS = 7

DAILY_HEADERS: dict[str, str] = {
    "ja": "本日の予定はこちらです",
    "en": "Here is today's schedule",
}

WEEKLY_HEADERS: dict[str, str] = {
    "ja": "今週の予定はこちらです",
    "en": "Here is this week's schedule",
}


def _bullet(event: CalendarEvent) -> str:
    return f"- {event.title}"


def weekly_window(start: datetime) -> tuple[datetime, datetime]:
    """Get the day-aligned 7-day range beginning on the day of `start`."""
    window_start = start_of_day(start)
    return window_start, add_days(window_start, WEEKLY_WINDOW_DAYS)


def is_multi_day_all_day(event: CalendarEvent) -> bool:
    """Check whether an all-day event covers more than one calendar day.

    The end of an all-day event is exclusive, so the last covered day is one
    day before it. Timed events always return False.
    """
    if not event.is_all_day:
        return False
    return not is_same_calendar_day(event.start, event.last_day)


def group_by_day(events: Sequence[CalendarEvent]) -> list[tuple[int, list[CalendarEvent]]]:
    """Group events by the calendar day they start on.

    Returns:
        (day_key, events) pairs in chronological order of day. Events keep
        their input order within a group.
    """
    groups: dict[int, list[CalendarEvent]] = {}
    for event in events:
        groups.setdefault(day_key(event.start), []).append(event)
    return sorted(groups.items())


def build_daily_message(
    events: Sequence[CalendarEvent],
    locale: Locale = "ja",
) -> str | None:
    """Build the daily digest.

    Args:
        events: Events for the day, in calendar order
        locale: Message language

    Returns:
        The message, or None when there are no events
    """
    if not events:
        return None

    lines = [DAILY_HEADERS[locale]]
    lines.extend(_bullet(event) for event in events)
    return "\n".join(lines)


def build_weekly_message(
    events: Sequence[CalendarEvent],
    locale: Locale = "ja",
) -> str | None:
    """Build the weekly digest.

    Args:
        events: Events intersecting the weekly window
        locale: Message language and day label format

    Returns:
        The message, or None when no events remain after filtering
    """
    single_day_events = [e for e in events if not is_multi_day_all_day(e)]
    if not single_day_events:
        return None

    sections = []
    for key, day_events in group_by_day(single_day_events):
        label = format_day_label(day_from_key(key), locale)
        bullets = "\n".join(_bullet(event) for event in day_events)
        sections.append(f"{label}\n{bullets}")

    body = "\n\n".join(sections)
    return f"{WEEKLY_HEADERS[locale]}\n\n{body}"


class DigestBuilder:
    """Fetches events from a calendar source and builds digests.

    Example:
        ```python
        builder = DigestBuilder(GoogleCalendarClient.from_settings(settings))

        message = builder.weekly(datetime.now())
        ```
    """

    def __init__(self, source: CalendarSource, locale: Locale = "ja"):
        self.source = source
        self.locale = locale

    def daily(self, day: datetime) -> str | None:
        """Build the digest for the calendar day containing `day`."""
        events = self.source.events_for_day(day)
        logger.info(f"Found {len(events)} events for {start_of_day(day).date()}")
        return build_daily_message(events, self.locale)

    def weekly(self, start: datetime) -> str | None:
        """Build the digest for the 7 days beginning on the day of `start`."""
        window_start, window_end = weekly_window(start)
        events = self.source.events_in_range(window_start, window_end)
        logger.info(
            f"Found {len(events)} events between {window_start.date()} "
            f"and {window_end.date()}"
        )
        return build_weekly_message(events, self.locale)
