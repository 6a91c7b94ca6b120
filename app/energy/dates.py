"""Calendar-day keys.

Every log category and every score is matched on a ``YYYY-MM-DD`` key.
Keys are always derived with UTC semantics so the host timezone never
shifts a day boundary.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Iterator


def _parse_timestamp(value: str) -> datetime:
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def normalize_date_string(value: str) -> str:
    """Return the UTC calendar-day key for a date or timestamp string.

    "1990-05-15" -> "1990-05-15"
    "1990-05-15T04:23:00.000Z" -> "1990-05-15"
    "1990-05-15T23:30:00-05:00" -> "1990-05-16"

    Raises ValueError for anything that is not an ISO date/timestamp.
    """
    if not isinstance(value, str):
        raise ValueError(f"Expected a date string, got {type(value).__name__}")
    if "T" in value or " " in value.strip():
        return format_as_key(_parse_timestamp(value))
    return date.fromisoformat(value.strip()).isoformat()


def parse_as_utc(key: str) -> datetime:
    """Parse a day key (or timestamp) to UTC midnight of that day."""
    day = date.fromisoformat(normalize_date_string(key))
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def format_as_key(value: date | datetime) -> str:
    """Inverse of parse_as_utc. Aware datetimes are converted to UTC first."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date().isoformat()
    return value.isoformat()


def coerce_date(value: date | datetime | str) -> date:
    """Accept a date, datetime or string and return the UTC calendar day."""
    if isinstance(value, datetime):
        return date.fromisoformat(format_as_key(value))
    if isinstance(value, date):
        return value
    return date.fromisoformat(normalize_date_string(value))


def iter_days(start: date, end_exclusive: date) -> Iterator[date]:
    current = start
    while current < end_exclusive:
        yield current
        current += timedelta(days=1)
