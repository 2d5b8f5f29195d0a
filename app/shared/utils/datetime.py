"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the system should be timezone-aware UTC. The
document store holds JSON only, so datetimes are written as ISO-8601 strings.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Use this instead of:
        - datetime.now() - naive, uses local timezone
        - datetime.utcnow() - naive, deprecated in Python 3.12

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def to_iso(dt: datetime | None = None) -> str:
    """Return an ISO-8601 string for dt (default: now), suitable for JSON storage."""
    return (dt or utc_now()).isoformat()


def from_timestamp_ms_utc(timestamp_ms: int) -> datetime:
    """
    Create a UTC-aware datetime from a millisecond Unix timestamp.
    The Realtime Database server timestamp is in milliseconds.

    Args:
        timestamp_ms: Unix timestamp in milliseconds

    Returns:
        UTC-aware datetime
    """
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=UTC)
