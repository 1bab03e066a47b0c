# backend/goldfolio/utils/date_utils.py
"""
Date utility functions for the curve engine.

Timestamps in the engine are epoch milliseconds. Calendar-based decisions
(start of day, one point per day) are made in a configurable timezone:
passing tz=None uses the system local timezone.

Usage:
    from goldfolio.utils.date_utils import start_of_day_ms, truncate_to_minute

    midnight = start_of_day_ms(timestamp, tz)
"""

from datetime import date, datetime, tzinfo

from goldfolio.services.constants import MS_PER_MINUTE, MS_PER_SECOND

# Raised by datetime conversion for timestamps outside year 1..9999
# (OSError: platform localtime() limits when tz is None)
UNREPRESENTABLE_TIMESTAMP_ERRORS = (ValueError, OverflowError, OSError)


def to_datetime(timestamp_ms: int, tz: tzinfo | None = None) -> datetime:
    """
    Convert an epoch-millisecond timestamp to a datetime.

    Args:
        timestamp_ms: Epoch milliseconds
        tz: Target timezone (None = system local, naive result)

    Returns:
        datetime in the requested timezone

    Raises:
        One of UNREPRESENTABLE_TIMESTAMP_ERRORS if the timestamp has no
        calendar date in the requested timezone
    """
    return datetime.fromtimestamp(timestamp_ms / MS_PER_SECOND, tz)


def to_timestamp_ms(value: datetime) -> int:
    """Convert a datetime back to epoch milliseconds."""
    return int(round(value.timestamp() * MS_PER_SECOND))


def truncate_to_minute(timestamp_ms: int) -> int:
    """
    Zero the seconds and sub-second part of a timestamp.

    Example:
        >>> truncate_to_minute(90_500)
        60000
    """
    return timestamp_ms - timestamp_ms % MS_PER_MINUTE


def start_of_day_ms(timestamp_ms: int, tz: tzinfo | None = None) -> int:
    """
    Get local midnight of the calendar day containing a timestamp.

    Args:
        timestamp_ms: Epoch milliseconds
        tz: Timezone defining the calendar day (None = system local)

    Returns:
        Epoch milliseconds of 00:00:00.000 on that day
    """
    midnight = to_datetime(timestamp_ms, tz).replace(
        hour=0, minute=0, second=0, microsecond=0
    )
    return to_timestamp_ms(midnight)


def calendar_day(timestamp_ms: int, tz: tzinfo | None = None) -> date:
    """
    Get the (year, month, day) a timestamp falls on.

    Args:
        timestamp_ms: Epoch milliseconds
        tz: Timezone defining the calendar day (None = system local)

    Returns:
        The calendar date
    """
    return to_datetime(timestamp_ms, tz).date()
