"""Named constructors for calendar-aligned and relative intervals.

Calendar spans (day, ISO week, month, quarter, year) are aligned to midnight
UTC and use python-dateutil's relativedelta to step whole calendar units, so
month and year lengths are exact rather than the fixed approximations used by
Duration. Relative spans (after, before, around) keep millisecond precision.
"""

from datetime import date, datetime, timezone

from dateutil.relativedelta import relativedelta

from calspan.bounds import Bounds
from calspan.duration import Duration
from calspan.interval import Interval
from calspan.timestamps import Instant, floor_to_day, to_milliseconds
from calspan.util import DAY, DEFAULT_BOUNDS


def now() -> datetime:
    """Current time in UTC. Every clock-relative constructor reads it here."""
    return datetime.now(timezone.utc)


def _calendar_span(start: datetime, step: relativedelta, bounds: Bounds) -> Interval:
    return Interval.from_instants(start, start + step, bounds)


def from_day(day: Instant, bounds: Bounds = DEFAULT_BOUNDS) -> Interval:
    """The UTC calendar day containing the given instant."""
    start = floor_to_day(to_milliseconds(day))
    return Interval(start, start + DAY, bounds)


def from_week(year: int, week: int, bounds: Bounds = DEFAULT_BOUNDS) -> Interval:
    """ISO week: Monday to the following Monday.

    Week 1 is the week containing the year's first Thursday.

    Raises:
        ValueError: If the year has no such ISO week
    """
    try:
        monday = date.fromisocalendar(year, week, 1)
    except ValueError:
        raise ValueError(
            f"Invalid ISO week: {year}-W{week:02d}\n"
            f"ISO years have 52 or 53 weeks, numbered from 1"
        ) from None
    start = datetime(monday.year, monday.month, monday.day, tzinfo=timezone.utc)
    return _calendar_span(start, relativedelta(weeks=1), bounds)


def from_month(year: int, month: int, bounds: Bounds = DEFAULT_BOUNDS) -> Interval:
    """Whole calendar month (month is 1-12)."""
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    start = datetime(year, month, 1, tzinfo=timezone.utc)
    return _calendar_span(start, relativedelta(months=1), bounds)


def from_quarter(year: int, quarter: int, bounds: Bounds = DEFAULT_BOUNDS) -> Interval:
    """Calendar quarter: Q1 is January-March, Q4 is October-December."""
    if not 1 <= quarter <= 4:
        raise ValueError(f"Quarter must be between 1 and 4, got {quarter}")
    start = datetime(year, (quarter - 1) * 3 + 1, 1, tzinfo=timezone.utc)
    return _calendar_span(start, relativedelta(months=3), bounds)


def from_year(year: int, bounds: Bounds = DEFAULT_BOUNDS) -> Interval:
    start = datetime(year, 1, 1, tzinfo=timezone.utc)
    return _calendar_span(start, relativedelta(years=1), bounds)


def after(
    start: Instant, duration: Duration, bounds: Bounds = DEFAULT_BOUNDS
) -> Interval:
    """Interval beginning at start and lasting duration."""
    start_ms = to_milliseconds(start)
    return Interval(start_ms, start_ms + duration.milliseconds, bounds)


def before(end: Instant, duration: Duration, bounds: Bounds = DEFAULT_BOUNDS) -> Interval:
    """Interval lasting duration and ending at end."""
    end_ms = to_milliseconds(end)
    return Interval(end_ms - duration.milliseconds, end_ms, bounds)


def around(
    center: Instant, duration: Duration, bounds: Bounds = DEFAULT_BOUNDS
) -> Interval:
    """Interval reaching half the duration either side of center
    (odd milliseconds round down)."""
    center_ms = to_milliseconds(center)
    half = duration.milliseconds // 2
    return Interval(center_ms - half, center_ms + half, bounds)


def from_iso8601(start: Instant, text: str, bounds: Bounds = DEFAULT_BOUNDS) -> Interval:
    """Interval beginning at start and lasting an ISO-8601 duration, e.g. ``"PT2H"``."""
    return after(start, Duration.parse(text), bounds)


def today(bounds: Bounds = DEFAULT_BOUNDS) -> Interval:
    return from_day(now(), bounds)


def this_week(bounds: Bounds = DEFAULT_BOUNDS) -> Interval:
    iso = now().isocalendar()
    return from_week(iso.year, iso.week, bounds)


def this_month(bounds: Bounds = DEFAULT_BOUNDS) -> Interval:
    current = now()
    return from_month(current.year, current.month, bounds)


def this_year(bounds: Bounds = DEFAULT_BOUNDS) -> Interval:
    return from_year(now().year, bounds)
