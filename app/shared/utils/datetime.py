"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the service are timezone-aware UTC, whichever store
produced them (SQL server defaults or the in-memory clock).
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: datetime) -> datetime:
    """
    Normalize a datetime to UTC.

    Naive values (e.g. from drivers that drop tzinfo) are assumed to be UTC;
    aware values are converted.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def epoch_millis(dt: datetime | None = None) -> int:
    """Return milliseconds since the Unix epoch for dt (default: now)."""
    return int((dt or utc_now()).timestamp() * 1000)
