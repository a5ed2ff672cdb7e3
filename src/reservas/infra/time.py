"""Time utilities for consistent timestamp and calendar-date handling."""

import os
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo


def utc_now() -> datetime:
    """Return current UTC timestamp (timezone-aware)."""
    return datetime.now(timezone.utc)


def today() -> date:
    """Return the current calendar date in APP_TIMEZONE (default UTC).

    This is the "today" used by the no-past-checkin rule.
    """
    tz_name = os.environ.get("APP_TIMEZONE", "UTC")
    return datetime.now(ZoneInfo(tz_name)).date()
