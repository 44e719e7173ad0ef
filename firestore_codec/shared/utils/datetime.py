"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the codec are timezone-aware UTC.
Use these helpers instead of datetime.now() or datetime.utcnow().
"""

import re
from datetime import UTC, datetime, timedelta

UTC_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

_RFC3339_RE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})"
    r"(?:\.(\d{1,9}))?"
    r"(?:([Zz])|([+-])(\d{2}):(\d{2}))$"
)


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: datetime) -> datetime:
    """
    Ensure a datetime is UTC-aware.

    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime
    """
    if dt.tzinfo is None:
        # Naive datetime - assume it's UTC and attach timezone
        return dt.replace(tzinfo=UTC)

    # Aware datetime - convert to UTC
    return dt.astimezone(UTC)


def datetime_from_epoch(seconds: int, microseconds: int = 0) -> datetime:
    """
    Create a UTC-aware datetime from seconds (and microseconds) since the epoch.

    Works for the whole 0001..9999 range, unlike datetime.fromtimestamp()
    which is bounded by the platform's time_t.

    Args:
        seconds: Whole seconds since the Unix epoch (may be negative)
        microseconds: Non-negative fraction of the second

    Returns:
        UTC-aware datetime
    """
    return UTC_EPOCH + timedelta(seconds=seconds, microseconds=microseconds)


def format_rfc3339(seconds: int, nanos: int) -> str:
    """
    Format an epoch instant as an RFC 3339 UTC string.

    The fraction is printed with 0, 3, 6 or 9 digits, whichever is the
    shortest exact representation (e.g. 2024-01-02T03:04:05.120Z).

    Args:
        seconds: Whole seconds since the Unix epoch
        nanos: Fraction of the second in nanoseconds (0..999999999)

    Returns:
        String such as 2024-01-02T03:04:05Z
    """
    dt = datetime_from_epoch(seconds)
    # strftime does not zero-pad years below 1000 on every platform
    base = (
        f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"
        f"T{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}"
    )
    if nanos == 0:
        return f"{base}Z"
    if nanos % 1_000_000 == 0:
        return f"{base}.{nanos // 1_000_000:03d}Z"
    if nanos % 1_000 == 0:
        return f"{base}.{nanos // 1_000:06d}Z"
    return f"{base}.{nanos:09d}Z"


def parse_rfc3339(text: str) -> tuple[int, int]:
    """
    Parse an RFC 3339 timestamp into (seconds, nanos) since the epoch.

    Accepts up to nine fractional digits and either 'Z' or a numeric
    offset (e.g. 2024-01-02T05:04:05+02:00).

    Args:
        text: Timestamp string

    Returns:
        Tuple of (seconds, nanos)

    Raises:
        ValueError: If the string is not a valid RFC 3339 timestamp
    """
    match = _RFC3339_RE.match(text)
    if match is None:
        raise ValueError(f"Invalid RFC 3339 timestamp: {text!r}")
    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    fraction, zulu, sign, offset_hours, offset_minutes = match.groups()[6:]
    dt = datetime(year, month, day, hour, minute, second, tzinfo=UTC)
    delta = dt - UTC_EPOCH
    seconds = delta.days * 86400 + delta.seconds
    if not zulu:
        offset = int(offset_hours) * 3600 + int(offset_minutes) * 60
        seconds = seconds - offset if sign == "+" else seconds + offset
    nanos = int(fraction.ljust(9, "0")) if fraction else 0
    return seconds, nanos
