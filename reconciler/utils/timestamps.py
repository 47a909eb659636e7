"""UTC timestamp helpers used for run reports and store updates."""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Returns:
        Current UTC time with timezone info
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Ensure a datetime is timezone-aware and in UTC.

    Naive datetimes are treated as UTC; aware ones are converted.

    Args:
        dt: Datetime to convert (can be None)

    Returns:
        Timezone-aware datetime in UTC, or None if input is None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def format_iso_timestamp(dt: datetime) -> str:
    """Format a datetime as ISO 8601 UTC with millisecond precision.

    This is the format the reference store expects for ``lastchecked`` and the
    format used for the report ``timestamp`` field.

    Args:
        dt: Datetime to format

    Returns:
        String like ``2025-11-04T12:00:00.000Z``

    Example:
        >>> from datetime import datetime, timezone
        >>> format_iso_timestamp(datetime(2025, 11, 4, 12, 0, 0, 123456, tzinfo=timezone.utc))
        '2025-11-04T12:00:00.123Z'
    """
    dt_utc = ensure_utc(dt)
    return dt_utc.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"
