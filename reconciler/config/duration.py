"""Parsing of scan interval strings such as ``7d``, ``12h`` or ``P7D``."""

import re

# Bounds for the daemon scan interval
MIN_SCAN_INTERVAL_SECONDS = 3600
MAX_SCAN_INTERVAL_SECONDS = 7 * 86400

_UNIT_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400}

_ISO_PATTERN = re.compile(
    r"^P(?:(\d+)W)?(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+(?:\.\d+)?)S)?)?$"
)


class DurationParseError(ValueError):
    """Raised when a duration string cannot be parsed or is out of range."""

    pass


def parse_duration(duration_str: str) -> int:
    """
    Parse a duration string to seconds.

    Accepts human-readable values ("30m", "12h", "7d", "1d12h") and ISO-8601
    durations ("PT30M", "PT12H", "P7D", "P1W").

    Args:
        duration_str: Duration string to parse

    Returns:
        Duration in seconds

    Raises:
        DurationParseError: If the string is empty, malformed, or zero

    Examples:
        >>> parse_duration("7d")
        604800
        >>> parse_duration("P1W")
        604800
        >>> parse_duration("PT1H")
        3600
    """
    duration_str = duration_str.strip()

    if not duration_str:
        raise DurationParseError("Duration string cannot be empty")

    if duration_str.upper().startswith("P"):
        total_seconds = _parse_iso8601_duration(duration_str)
    else:
        total_seconds = _parse_human_readable_duration(duration_str)

    if total_seconds == 0:
        raise DurationParseError(f"Duration cannot be zero: '{duration_str}'")

    return total_seconds


def _parse_iso8601_duration(duration_str: str) -> int:
    match = _ISO_PATTERN.match(duration_str.upper())

    if not match or duration_str.upper() in ("P", "PT"):
        raise DurationParseError(
            f"Invalid ISO-8601 duration format: '{duration_str}'. "
            "Expected format like 'P7D', 'P1W', 'PT12H' or 'PT30M'"
        )

    weeks, days, hours, minutes, seconds = match.groups()

    total_seconds = 0
    if weeks:
        total_seconds += int(weeks) * 7 * 86400
    if days:
        total_seconds += int(days) * 86400
    if hours:
        total_seconds += int(hours) * 3600
    if minutes:
        total_seconds += int(minutes) * 60
    if seconds:
        total_seconds += int(float(seconds))

    return total_seconds


def _parse_human_readable_duration(duration_str: str) -> int:
    matches = re.findall(r"(\d+)\s*([smhd])", duration_str.lower())

    if not matches:
        raise DurationParseError(
            f"Invalid duration format: '{duration_str}'. "
            "Expected format like '30m', '12h', '7d', or combinations like '1d12h'"
        )

    # Reject leftovers such as "7days" or "1x"
    parsed_str = "".join(f"{num}{unit}" for num, unit in matches)
    if parsed_str != re.sub(r"\s+", "", duration_str.lower()):
        raise DurationParseError(
            f"Invalid characters in duration: '{duration_str}'. "
            "Use only digits and units: s (seconds), m (minutes), h (hours), d (days)"
        )

    return sum(int(num) * _UNIT_SECONDS[unit] for num, unit in matches)


def validate_duration_range(
    duration_seconds: int,
    min_seconds: int = MIN_SCAN_INTERVAL_SECONDS,
    max_seconds: int = MAX_SCAN_INTERVAL_SECONDS,
) -> None:
    """
    Check that a duration lies within the allowed scan interval range.

    Args:
        duration_seconds: Duration in seconds to validate
        min_seconds: Minimum allowed duration (default: 1 hour)
        max_seconds: Maximum allowed duration (default: 7 days)

    Raises:
        DurationParseError: If duration is outside the valid range
    """
    if duration_seconds < min_seconds:
        raise DurationParseError(
            f"Scan interval too short: {_seconds_to_human_readable(duration_seconds)}. "
            f"Minimum is {_seconds_to_human_readable(min_seconds)}."
        )

    if duration_seconds > max_seconds:
        raise DurationParseError(
            f"Scan interval too long: {_seconds_to_human_readable(duration_seconds)}. "
            f"Maximum is {_seconds_to_human_readable(max_seconds)}."
        )


def _seconds_to_human_readable(seconds: int) -> str:
    if seconds < 60:
        value, unit = seconds, "second"
    elif seconds < 3600:
        value, unit = seconds // 60, "minute"
    elif seconds < 86400:
        value, unit = seconds // 3600, "hour"
    else:
        value, unit = seconds // 86400, "day"
    return f"{value} {unit}{'s' if value != 1 else ''}"
