from datetime import datetime, timezone
from typing import Optional, Union

from dateutil.parser import parse


def utcnow() -> datetime:
    """
    Current time as naive UTC.

    Every timestamp column stores naive UTC so values read back from
    SQLite and PostgreSQL compare the same way.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_naive(ts: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values are assumed UTC."""
    if ts.tzinfo is None:
        return ts
    return ts.astimezone(timezone.utc).replace(tzinfo=None)


def parse_timestamp(value: Optional[Union[str, datetime]]) -> Optional[datetime]:
    """
    Parse an ISO-8601 string (or pass through a datetime) into naive UTC.

    Raises ValueError for unparseable input.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return to_utc_naive(value)
    try:
        return to_utc_naive(parse(value))
    except (ValueError, OverflowError, TypeError) as exc:
        raise ValueError(f"Invalid timestamp: {value!r}") from exc


def isoformat(ts: Optional[datetime]) -> Optional[str]:
    if ts is None:
        return None
    return ts.replace(tzinfo=timezone.utc).isoformat()
