"""Conversion between instant-like values and epoch milliseconds.

Every timestamp inside calspan is an integer count of milliseconds since the
Unix epoch in UTC. These helpers are the single place where datetimes, dates
and ISO strings cross into that representation.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import TypeAlias

from dateutil.parser import isoparse

from calspan.util import DAY

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)

Instant: TypeAlias = int | datetime | date | str


def to_milliseconds(value: Instant) -> int:
    """Convert an instant-like value to integer epoch milliseconds.

    Accepts:
    - int: Passed through as-is (epoch milliseconds)
    - datetime: Must be timezone-aware
    - date: Midnight UTC of that day
    - str: ISO-8601 date or datetime; a value without offset is read as UTC

    Raises:
        TypeError: If value is an unsupported type or a naive datetime
    """
    if isinstance(value, bool):
        raise TypeError(f"Expected a timestamp, got bool: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        parsed = isoparse(value)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return (parsed - EPOCH) // _ONE_MS
    if isinstance(value, datetime):
        if value.tzinfo is None:
            raise TypeError(
                f"Interval endpoints must be timezone-aware datetimes.\n"
                f"Got naive datetime: {value!r}\n"
                f"Hint: Add timezone info:\n"
                f"  dt = datetime(..., tzinfo=timezone.utc)"
            )
        return (value - EPOCH) // _ONE_MS
    if isinstance(value, date):
        return (datetime.combine(value, time.min, tzinfo=timezone.utc) - EPOCH) // _ONE_MS
    raise TypeError(
        f"Interval endpoint must be int, datetime, date, or str.\n"
        f"Got {type(value).__name__!r}: {value!r}\n"
        f"Examples:\n"
        f"  Interval.from_instants(1704067200000, 1704153600000)  # epoch ms\n"
        f"  Interval.from_instants(date(2024, 1, 1), date(2024, 1, 2))\n"
        f"  Interval.from_instants('2024-01-01T09:00Z', '2024-01-01T17:00Z')"
    )


def to_datetime(milliseconds: int) -> datetime:
    """Aware UTC datetime for an epoch-millisecond timestamp."""
    return EPOCH + timedelta(milliseconds=milliseconds)


def floor_to_day(milliseconds: int) -> int:
    """Truncate an epoch-millisecond timestamp to midnight UTC."""
    return milliseconds - milliseconds % DAY

