"""
Time-related utilities.

All timestamps are generated in UTC and serialized using
ISO-8601 format with timezone information.
"""

from datetime import datetime, timezone


def utc_now_iso() -> str:
    """Return current UTC time in ISO-8601 format.

    Example:
        2024-01-15T10:42:31.123456+00:00
    """
    return datetime.now(timezone.utc).isoformat()


def utc_now_millis() -> int:
    """Return current UTC time as milliseconds since the epoch."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)
