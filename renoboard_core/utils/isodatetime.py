"""Timestamp conversions.

Stored timestamps (users.created_at) are ISO 8601 UTC strings with a "Z"
suffix. Token claims (iat, exp) are integer seconds since the epoch.
"""

from datetime import datetime, UTC


def to_timestamp(dt: datetime) -> str:
    """Format a datetime as "YYYY-MM-DDTHH:MM:SS[.ffffff]Z". Naive means UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat().replace("+00:00", "Z")


def to_datetime(timestamp: str) -> datetime:
    return datetime.fromisoformat(timestamp.replace("Z", "+00:00"))


def now() -> str:
    """Current UTC time as an ISO 8601 string."""
    return to_timestamp(datetime.now(UTC))


def now_unix() -> int:
    """Current time in whole epoch seconds."""
    return int(datetime.now(UTC).timestamp())
