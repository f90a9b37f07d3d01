"""
Timezone conversion utilities.

Reminder times are local wall-clock times. By default "local" is a fixed
UTC+2 offset regardless of daylight saving; configuring an IANA zone name
switches to DST-aware localization.
"""

import logging
from datetime import date, datetime, time

import pytz

logger = logging.getLogger(__name__)


def get_local_tz(utc_offset_hours: float = 2, tz_name: str | None = None):
    """
    Get the tzinfo used for reminder wall-clock times.

    Args:
        utc_offset_hours: Fixed offset used when no zone name is given
        tz_name: Optional IANA timezone (e.g., "Asia/Jerusalem")

    Returns:
        A pytz tzinfo (named zone or FixedOffset)
    """
    if tz_name:
        try:
            return pytz.timezone(tz_name)
        except pytz.UnknownTimeZoneError:
            logger.warning(
                f"Unknown timezone {tz_name!r}, falling back to UTC{utc_offset_hours:+g}"
            )
    return pytz.FixedOffset(int(round(utc_offset_hours * 60)))


def local_datetime(
    day: date,
    hour: int,
    minute: int,
    utc_offset_hours: float = 2,
    tz_name: str | None = None,
) -> datetime:
    """
    Build a timezone-aware UTC datetime for a local wall-clock time on a day.

    Args:
        day: Calendar date
        hour: Hour in 24-hour format (0-23)
        minute: Minute (0-59)
        utc_offset_hours: Fixed offset from UTC for "local" time
        tz_name: Optional IANA timezone overriding the fixed offset

    Returns:
        Aware datetime in UTC
    """
    tz = get_local_tz(utc_offset_hours, tz_name)
    naive = datetime.combine(day, time(hour, minute))
    return tz.localize(naive).astimezone(pytz.UTC)


def utc_now() -> datetime:
    """Current instant as an aware UTC datetime."""
    return datetime.now(pytz.UTC)
