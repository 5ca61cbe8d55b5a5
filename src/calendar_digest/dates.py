"""Calendar-day helpers.

All helpers are pure: they return new values and never modify their inputs.
Datetimes are treated as host local time. Calendar-day comparisons look only
at the year/month/day fields, so time-of-day and UTC offset are ignored.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Literal

Locale = Literal["ja", "en"]

# Indexed by date.weekday() (Monday=0)
_WEEKDAY_NAMES: dict[str, tuple[str, ...]] = {
    "ja": ("月", "火", "水", "木", "金", "土", "日"),
    "en": ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"),
}

_EN_MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def start_of_day(d: datetime) -> datetime:
    """Return `d` with its time-of-day set to midnight."""
    return d.replace(hour=0, minute=0, second=0, microsecond=0)


def add_days(d: datetime, days: int) -> datetime:
    """Shift `d` by a number of calendar days, keeping the time-of-day.

    `days` may be negative.
    """
    return d + timedelta(days=days)


def is_same_calendar_day(a: date, b: date) -> bool:
    """Check whether two dates fall on the same calendar day."""
    return (a.year, a.month, a.day) == (b.year, b.month, b.day)


def day_key(d: date) -> int:
    """Integer key identifying the calendar day of `d`.

    Consecutive days have consecutive keys, so keys sort chronologically.
    """
    return d.toordinal()


def day_from_key(key: int) -> date:
    """Inverse of `day_key`."""
    return date.fromordinal(key)


def weekday_index(d: date) -> int:
    """Day of week with 0=Sunday, 1=Monday, ..., 6=Saturday."""
    return (d.weekday() + 1) % 7


def format_day_label(d: date, locale: Locale = "ja") -> str:
    """Render a short "month day (weekday)" label for display.

    Examples:
        ja: 3月4日(月)
        en: Mar 4 (Mon)
    """
    weekday = _WEEKDAY_NAMES[locale][d.weekday()]
    if locale == "ja":
        return f"{d.month}月{d.day}日({weekday})"
    return f"{_EN_MONTH_NAMES[d.month - 1]} {d.day} ({weekday})"


def next_notification_time(now: datetime, hour: int) -> datetime:
    """Get the next moment the digest should be sent.

    Today at `hour:00` if that is still ahead of `now`, otherwise tomorrow
    at the same hour.
    """
    target = now.replace(hour=hour, minute=0, second=0, microsecond=0)
    if now >= target:
        target = add_days(target, 1)
    return target
