"""Pytest fixtures for calendar digest tests.

This module provides test fixtures that ensure:
1. No external API calls are made (Google Calendar, webhooks)
2. Isolated test environment with controlled configuration
"""

import os
from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest

# Set test environment BEFORE importing application modules
os.environ.setdefault("DISCORD_WEBHOOK_URL", "https://discord.test/api/webhooks/1/token")
os.environ.setdefault("CALENDAR_ID", "test-calendar-id")
os.environ.setdefault("NOTIFICATION_HOUR", "8")
os.environ.setdefault("WEEKLY_NOTIFICATION_DAY", "1")
os.environ.setdefault("LOCALE", "ja")

from calendar_digest.calendar.base import CalendarSource
from calendar_digest.config import Settings
from calendar_digest.models.event import CalendarEvent


class FakeCalendarSource(CalendarSource):
    """In-memory calendar that records the ranges it was asked for."""

    def __init__(self, events: list[CalendarEvent] | None = None):
        self.events = list(events or [])
        self.requested_ranges: list[tuple[datetime, datetime]] = []

    def events_in_range(self, start: datetime, end: datetime) -> list[CalendarEvent]:
        self.requested_ranges.append((start, end))
        return [e for e in self.events if e.start < end and e.end > start]


# =============================================================================
# Test Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Reset settings cache before each test to ensure clean state."""
    from calendar_digest.config import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings with explicit values, independent of any .env file."""
    return Settings(
        _env_file=None,
        discord_webhook_url="https://discord.test/api/webhooks/1/token",
        calendar_id="test-calendar-id",
        notification_hour=8,
        weekly_notification_day=1,
        locale="ja",
    )


@pytest.fixture
def mock_google_service():
    """Mock Calendar API service returning no events."""
    service = MagicMock()
    service.events.return_value.list.return_value.execute.return_value = {"items": []}
    return service


# =============================================================================
# Event Factories
# =============================================================================


def timed_event(title: str, start: datetime, hours: float = 1) -> CalendarEvent:
    """Timed event starting at `start`."""
    return CalendarEvent(
        title=title,
        start=start,
        end=start + timedelta(hours=hours),
        is_all_day=False,
    )


def all_day_event(title: str, first_day: datetime, days: int = 1) -> CalendarEvent:
    """All-day event covering `days` days, with the usual exclusive end."""
    return CalendarEvent(
        title=title,
        start=first_day,
        end=first_day + timedelta(days=days),
        is_all_day=True,
    )


@pytest.fixture
def standup() -> CalendarEvent:
    """Tuesday 2024-03-05 morning standup."""
    return timed_event("Standup", datetime(2024, 3, 5, 9, 30), hours=0.25)


@pytest.fixture
def fake_source() -> FakeCalendarSource:
    return FakeCalendarSource()
