"""Date and time utilities."""

from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from dateutil import parser as date_parser


def parse_date(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse a date value to a timezone-aware datetime.

    Handles the formats news feeds and SQLite hand back: ISO 8601, RFC 2822
    and already-parsed datetimes.

    Args:
        value: Date string, datetime or None

    Returns:
        Parsed datetime (UTC if the input was naive) or None if parsing fails
    """
    if not value:
        return None

    if isinstance(value, datetime):
        dt = value
    else:
        try:
            dt = date_parser.parse(value)
        except (ValueError, TypeError, OverflowError):
            return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    return dt


def now_utc() -> datetime:
    """Get current UTC datetime.

    Returns:
        Current UTC datetime (timezone-aware)
    """
    return datetime.now(timezone.utc)


def lookback_cutoff(days: int, now: Optional[datetime] = None) -> datetime:
    """Get the start of a lookback window of N days ending at now.

    Args:
        days: Window length in days
        now: Reference time (defaults to current UTC time)

    Returns:
        Timezone-aware cutoff datetime
    """
    reference = now or now_utc()
    return reference - timedelta(days=days)


def to_db_timestamp(dt: Optional[datetime]) -> Optional[str]:
    """Serialize a datetime for storage.

    Timestamps are stored as UTC ISO strings so that lexical comparison in
    SQLite matches chronological order.

    Args:
        dt: Datetime to serialize

    Returns:
        ISO 8601 string in UTC, or None
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="microseconds")
