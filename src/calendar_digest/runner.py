"""Single digest run.

Invoked once a day by the scheduler:

1. Pick the mode: weekly on the configured weekday, daily otherwise
2. Fetch events and build the digest
3. Deliver it if there is anything to report

Errors while reading the calendar propagate and abort the run, so a partial
digest is never sent. Delivery errors are handled by the notifier.
"""

from __future__ import annotations

import logging
from datetime import datetime

from calendar_digest.calendar.base import CalendarSource
from calendar_digest.config import Settings
from calendar_digest.dates import weekday_index
from calendar_digest.digest import DigestBuilder
from calendar_digest.notifier import WebhookNotifier

logger = logging.getLogger(__name__)


def is_weekly_run(now: datetime, weekly_day: int) -> bool:
    """Check whether `now` falls on the weekly digest day (0=Sunday)."""
    return weekday_index(now) == weekly_day


def run(
    now: datetime,
    settings: Settings,
    source: CalendarSource,
    notifier: WebhookNotifier | None = None,
    dry_run: bool = False,
) -> str | None:
    """Build and deliver the digest for `now`.

    Args:
        now: Time of the invocation (host local time)
        settings: Application settings
        source: Calendar to read events from
        notifier: Webhook notifier; built from settings when omitted
        dry_run: Build the digest without delivering it

    Returns:
        The digest that was built, or None if there was nothing to report
    """
    builder = DigestBuilder(source, locale=settings.locale)

    if is_weekly_run(now, settings.weekly_notification_day):
        logger.info(f"Building weekly digest starting {now.date()}")
        message = builder.weekly(now)
    else:
        logger.info(f"Building daily digest for {now.date()}")
        message = builder.daily(now)

    if message is None:
        logger.info("No events to report, skipping notification")
        return None

    if dry_run:
        logger.info("Dry run, notification not sent")
        return message

    if notifier is None:
        notifier = WebhookNotifier(settings.discord_webhook_url)
    if notifier.deliver(message):
        logger.info("Digest delivered")
    else:
        logger.warning("Digest could not be delivered")
    return message
