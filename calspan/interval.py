from dataclasses import dataclass, replace
from datetime import datetime
from typing import Literal

import structlog

from calspan import formatting
from calspan.bounds import Bounds
from calspan.duration import Duration
from calspan.errors import InvalidRange
from calspan.timestamps import Instant, floor_to_day, to_datetime, to_milliseconds
from calspan.util import DAY, DEFAULT_BOUNDS

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Interval:
    """A span of time between two epoch-millisecond timestamps.

    ``bounds`` decides which endpoints belong to the interval. Instances are
    immutable; every transformation returns a new Interval and goes through
    the same ``start < end`` validation as direct construction.
    """

    start: int
    end: int
    bounds: Bounds = DEFAULT_BOUNDS

    def __post_init__(self) -> None:
        if not isinstance(self.start, int) or not isinstance(self.end, int):
            raise TypeError(
                f"Interval endpoints must be integer epoch milliseconds.\n"
                f"Got start={self.start!r}, end={self.end!r}\n"
                f"Hint: Use Interval.from_instants() for datetimes, dates "
                f"or ISO strings"
            )
        object.__setattr__(self, "bounds", Bounds(self.bounds))
        if self.start >= self.end:
            raise InvalidRange(self.start, self.end)

    @classmethod
    def from_instants(
        cls, start: Instant, end: Instant, bounds: Bounds = DEFAULT_BOUNDS
    ) -> "Interval":
        """Build an interval keeping millisecond precision."""
        return cls(to_milliseconds(start), to_milliseconds(end), bounds)

    @classmethod
    def from_calendar_dates(
        cls, start: Instant, end: Instant, bounds: Bounds = DEFAULT_BOUNDS
    ) -> "Interval":
        """Build a day-precision interval.

        Both endpoints are floored to midnight UTC before validation, so any
        time-of-day component is discarded. Two instants on the same UTC day
        collapse to the same value and raise InvalidRange.
        """
        endpoints: list[int] = []
        for value in (start, end):
            raw = to_milliseconds(value)
            normalized = floor_to_day(raw)
            if normalized != raw:
                logger.debug(
                    "interval.truncated_to_day",
                    input=to_datetime(raw).isoformat(),
                    normalized=to_datetime(normalized).isoformat(),
                )
            endpoints.append(normalized)
        return cls(endpoints[0], endpoints[1], bounds)

    @property
    def start_datetime(self) -> datetime:
        return to_datetime(self.start)

    @property
    def end_datetime(self) -> datetime:
        return to_datetime(self.end)

    @property
    def duration(self) -> Duration:
        return Duration(self.end - self.start)

    @property
    def duration_in_days(self) -> float:
        return (self.end - self.start) / DAY

    def overlaps(self, other: "Interval") -> bool:
        """True if the intervals share at least one instant.

        At an exact touch the shared point counts only when the touching end
        and the touching start are both inclusive.
        """
        if self.end < other.start or other.end < self.start:
            return False
        if self.end == other.start:
            return self.bounds.includes_end and other.bounds.includes_start
        if other.end == self.start:
            return other.bounds.includes_end and self.bounds.includes_start
        return True

    def contains(self, other: "Interval") -> bool:
        """True if other lies entirely within this interval's own bounds."""
        if self.bounds.includes_start:
            start_ok = self.start <= other.start
        else:
            start_ok = self.start < other.start
        if self.bounds.includes_end:
            end_ok = self.end >= other.end
        else:
            end_ok = self.end > other.end
        return start_ok and end_ok

    def contains_instant(self, point: Instant) -> bool:
        timestamp = to_milliseconds(point)
        if self.bounds.includes_start:
            start_ok = self.start <= timestamp
        else:
            start_ok = self.start < timestamp
        if self.bounds.includes_end:
            end_ok = timestamp <= self.end
        else:
            end_ok = timestamp < self.end
        return start_ok and end_ok

    def __contains__(self, point: Instant) -> bool:
        return self.contains_instant(point)

    def touches(self, other: "Interval") -> bool:
        """True if the intervals share an endpoint value, whatever the bounds."""
        return self.end == other.start or other.end == self.start

    def abuts(self, other: "Interval") -> bool:
        """True if the intervals touch at a point neither side shares."""
        if not self.touches(other):
            return False
        return not self.overlaps(other)

    def equals(self, other: "Interval") -> bool:
        return self == other

    def is_before(self, other: "Interval") -> bool:
        return self.end <= other.start

    def is_after(self, other: "Interval") -> bool:
        return self.start >= other.end

    def gap(self, other: "Interval") -> "Interval | None":
        """The span strictly between two separated intervals, with this
        interval's bounds. None if they overlap or touch."""
        if self.overlaps(other) or self.touches(other):
            return None
        if self.is_before(other):
            return Interval(self.end, other.start, self.bounds)
        return Interval(other.end, self.start, self.bounds)

    def intersection(self, other: "Interval") -> "Interval | None":
        """Shared span with this interval's bounds, or None.

        Two inclusive intervals that only touch share a single instant,
        which is not a valid interval, so that case also yields None.
        """
        if not self.overlaps(other):
            return None
        start = max(self.start, other.start)
        end = min(self.end, other.end)
        if start >= end:
            return None
        return Interval(start, end, self.bounds)

    def can_merge_consecutive_days(self, other: "Interval") -> bool:
        """True if touching intervals form a continuous run.

        Looser than ``overlaps``: continuity needs only one of the two
        touching endpoints to be inclusive.
        """
        if self.end == other.start:
            return self.bounds.includes_end or other.bounds.includes_start
        if other.end == self.start:
            return other.bounds.includes_end or self.bounds.includes_start
        return False

    def union(self, other: "Interval") -> "Interval | None":
        """Combined span with this interval's bounds, or None if the two
        neither overlap nor merge as consecutive days."""
        if not self.overlaps(other) and not self.can_merge_consecutive_days(other):
            return None
        return Interval(
            min(self.start, other.start), max(self.end, other.end), self.bounds
        )

    def starting_on(self, start: Instant) -> "Interval":
        return replace(self, start=to_milliseconds(start))

    def ending_on(self, end: Instant) -> "Interval":
        return replace(self, end=to_milliseconds(end))

    def with_bounds(self, bounds: Bounds) -> "Interval":
        return replace(self, bounds=bounds)

    def with_duration(self, duration: Duration) -> "Interval":
        return replace(self, end=self.start + duration.milliseconds)

    def move(self, duration: Duration) -> "Interval":
        return replace(
            self,
            start=self.start + duration.milliseconds,
            end=self.end + duration.milliseconds,
        )

    def move_backward(self, duration: Duration) -> "Interval":
        return replace(
            self,
            start=self.start - duration.milliseconds,
            end=self.end - duration.milliseconds,
        )

    def expand(self, duration: Duration) -> "Interval":
        """Grow by half the duration on each side (odd milliseconds round down)."""
        half = duration.milliseconds // 2
        return replace(self, start=self.start - half, end=self.end + half)

    def format(
        self, style: Literal["iso", "short", "long", "smart"] = "iso"
    ) -> str:
        return formatting.format_interval(self, style)

    def to_display_string(self) -> str:
        return formatting.display(self)

    def __str__(self) -> str:
        """Bracket notation, e.g. ``[2024-01-01, 2024-01-15)``."""
        return formatting.format_interval(self)
