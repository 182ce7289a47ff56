"""Text renderings of intervals.

Names of months and weekdays are fixed English strings so output does not
depend on the process locale. All dates are shown in UTC.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Literal

from calspan.timestamps import to_datetime
from calspan.util import DAY

if TYPE_CHECKING:
    from calspan.interval import Interval

Style = Literal["iso", "short", "long", "smart"]

_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_WEEKDAYS = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)


def _iso(dt: datetime, date_only: bool) -> str:
    if date_only:
        return dt.date().isoformat()
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _short(dt: datetime, with_year: bool = True) -> str:
    text = f"{_MONTHS[dt.month - 1][:3]} {dt.day}"
    return f"{text}, {dt.year}" if with_year else text


def _long(dt: datetime) -> str:
    return f"{_WEEKDAYS[dt.weekday()]}, {_MONTHS[dt.month - 1]} {dt.day}, {dt.year}"


def format_interval(interval: "Interval", style: Style = "iso") -> str:
    """Render an interval in bracket notation.

    Styles:
    - iso: ``[2024-01-01, 2024-01-15)``; full timestamps when either endpoint
      is not at midnight UTC
    - short: ``[Jan 1, 2024, Jan 15, 2024)``
    - long: ``[Monday, January 1, 2024, Monday, January 15, 2024)``
    - smart: same as iso

    Raises:
        ValueError: If style is not one of the above
    """
    opening, closing = interval.bounds.brackets
    start = to_datetime(interval.start)
    end = to_datetime(interval.end)

    if style in ("iso", "smart"):
        date_only = interval.start % DAY == 0 and interval.end % DAY == 0
        parts = (_iso(start, date_only), _iso(end, date_only))
    elif style == "short":
        parts = (_short(start), _short(end))
    elif style == "long":
        parts = (_long(start), _long(end))
    else:
        raise ValueError(
            f"Unknown format style: {style!r}\n"
            f"Valid styles: 'iso', 'short', 'long', 'smart'"
        )

    return f"{opening}{parts[0]}, {parts[1]}{closing}"


def display(interval: "Interval") -> str:
    """Human-readable date range without bounds notation.

    Examples:
        Jan 15, 2024                   (a single day)
        Jan 15 - 20, 2024              (same month)
        Jan 15 - Feb 20, 2024          (same year)
        Dec 15, 2023 - Jan 20, 2024    (across years)
    """
    start = to_datetime(interval.start)
    end = to_datetime(interval.end)

    if (interval.end - interval.start) // DAY == 1:
        return _short(start)
    if start.year == end.year and start.month == end.month:
        return f"{_short(start, with_year=False)} - {end.day}, {start.year}"
    if start.year == end.year:
        return f"{_short(start, with_year=False)} - {_short(end, with_year=False)}, {start.year}"
    return f"{_short(start)} - {_short(end)}"
