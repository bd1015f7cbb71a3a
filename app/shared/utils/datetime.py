"""
UTC datetime utilities for record timestamps.

Record tables store dates as ISO-8601 strings in UTC. Use these helpers
instead of datetime.now() or datetime.utcnow().
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string (seconds precision)."""
    return utc_now().isoformat(timespec="seconds")


def parse_iso(value: object) -> datetime | None:
    """
    Parse an ISO-8601 cell value into a UTC-aware datetime.

    Naive values are assumed to be UTC. Non-string or malformed cells
    yield None rather than raising (cells may be hand-edited).
    """
    if not isinstance(value, str) or not value:
        return None
    try:
        dt = datetime.fromisoformat(value)
    except ValueError:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
