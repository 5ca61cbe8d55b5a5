"""Command-line interface for calendar digests."""

import argparse
import logging
import sys
import time
from datetime import datetime

import schedule

from calendar_digest import __version__
from calendar_digest.calendar.google_calendar import GoogleCalendarClient
from calendar_digest.config import ConfigurationError, Settings, get_settings
from calendar_digest.dates import next_notification_time
from calendar_digest.runner import run

logger = logging.getLogger(__name__)

# How often the serve loop checks for due jobs
POLL_INTERVAL_SECONDS = 30


def _parse_date(value: str) -> datetime:
    try:
        return datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid date: '{value}'. Expected format: YYYY-MM-DD"
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="calendar-digest",
        description="Calendar Digest - Post daily and weekly schedules to a chat webhook",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Run command
    run_parser = subparsers.add_parser(
        "run", help="Build the digest for today and send it"
    )
    run_parser.add_argument(
        "--date",
        type=_parse_date,
        help="Build the digest as if run on this day (YYYY-MM-DD)",
    )
    run_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the digest instead of sending it",
    )

    # Next command
    subparsers.add_parser(
        "next", help="Show when the next notification is due"
    )

    # Serve command
    subparsers.add_parser(
        "serve", help="Keep running and send the digest every day at the notification hour"
    )

    return parser


def _run_once(settings: Settings, now: datetime, dry_run: bool = False) -> str | None:
    source = GoogleCalendarClient.from_settings(settings)
    return run(now, settings, source, dry_run=dry_run)


def _scheduled_job(settings: Settings) -> None:
    try:
        _run_once(settings, datetime.now())
    except ConfigurationError:
        raise
    except Exception:
        logger.exception("Scheduled digest run failed")
    logger.info(
        "Next notification at "
        f"{next_notification_time(datetime.now(), settings.notification_hour)}"
    )


def serve(settings: Settings) -> None:
    """Run the digest every day at the configured hour until interrupted.

    A failed run is logged and retried the next day. A missing setting stops
    the scheduler with a ConfigurationError.
    """
    at = f"{settings.notification_hour:02d}:00"
    schedule.every().day.at(at).do(_scheduled_job, settings)
    logger.info(
        f"Scheduler started, next notification at "
        f"{next_notification_time(datetime.now(), settings.notification_hour)}"
    )

    while True:
        schedule.run_pending()
        time.sleep(POLL_INTERVAL_SECONDS)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "run":
            now = datetime.now()
            if args.date is not None:
                now = args.date.replace(hour=settings.notification_hour)
            message = _run_once(settings, now, dry_run=args.dry_run)
            if args.dry_run:
                print(message if message is not None else "No events to report.")
        elif args.command == "next":
            print(next_notification_time(datetime.now(), settings.notification_hour).isoformat())
        elif args.command == "serve":
            serve(settings)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted")

    return 0


if __name__ == "__main__":
    sys.exit(main())
