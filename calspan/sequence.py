"""Immutable, start-ordered collections of intervals.

A Sequence keeps its intervals in a tuple sorted by start time (ties keep
insertion order). Every operation returns a new Sequence; aggregates are
computed at most once per instance and never invalidated.
"""

from collections.abc import Callable, Iterable, Iterator
from functools import cached_property
from itertools import takewhile
from typing import Any, TypeVar, overload

import structlog
from typing_extensions import override

from calspan.duration import Duration
from calspan.errors import IndexOutOfRange
from calspan.interval import Interval

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def _by_start(interval: Interval) -> int:
    return interval.start


def _by_duration(interval: Interval) -> int:
    return interval.end - interval.start


class Sequence:
    """Start-ordered, immutable collection of intervals.

    Construct with ``Sequence(*intervals)`` or ``Sequence.from_unsorted()``
    to sort once, or ``Sequence.from_sorted()`` when the input is already in
    start order. ``sort(key=...)`` and out-of-order positional edits produce
    a Sequence that is no longer known to be start-ordered; set operations
    re-sort such input before running.
    """

    def __init__(self, *intervals: Interval):
        self._intervals: tuple[Interval, ...] = tuple(sorted(intervals, key=_by_start))
        self._ordered: bool = True

    @classmethod
    def _wrap(cls, intervals: tuple[Interval, ...], ordered: bool) -> "Sequence":
        """Adopt an already-built tuple without copying or sorting."""
        sequence = cls.__new__(cls)
        sequence._intervals = intervals
        sequence._ordered = ordered
        return sequence

    @classmethod
    def from_unsorted(cls, intervals: Iterable[Interval]) -> "Sequence":
        """Sort by start time once (stable for equal starts)."""
        return cls(*intervals)

    @classmethod
    def from_sorted(cls, intervals: Iterable[Interval]) -> "Sequence":
        """Trust the caller's start order and skip sorting."""
        return cls._wrap(tuple(intervals), ordered=True)

    @classmethod
    def empty(cls) -> "Sequence":
        return cls()

    # Positional access

    def __len__(self) -> int:
        return len(self._intervals)

    @property
    def is_empty(self) -> bool:
        return not self._intervals

    @property
    def is_start_ordered(self) -> bool:
        """True if intervals are known to be sorted by start time."""
        return self._ordered

    def get(self, index: int) -> Interval:
        """Interval at a non-negative index.

        Raises:
            IndexOutOfRange: If index is outside [0, len)
        """
        if not 0 <= index < len(self._intervals):
            raise IndexOutOfRange(index, len(self._intervals))
        return self._intervals[index]

    @overload
    def __getitem__(self, item: int) -> Interval: ...

    @overload
    def __getitem__(self, item: slice) -> "Sequence": ...

    def __getitem__(self, item: int | slice) -> "Interval | Sequence":
        if isinstance(item, slice):
            forward = item.step is None or item.step > 0
            return Sequence._wrap(self._intervals[item], self._ordered and forward)
        return self.element_at(item)

    @property
    def first(self) -> Interval | None:
        return self._intervals[0] if self._intervals else None

    @property
    def last(self) -> Interval | None:
        return self._intervals[-1] if self._intervals else None

    def to_list(self) -> list[Interval]:
        """Independent copy of the intervals; mutating it leaves the Sequence intact."""
        return list(self._intervals)

    def __iter__(self) -> Iterator[Interval]:
        return iter(self._intervals)

    def __contains__(self, interval: object) -> bool:
        return interval in self._intervals

    def index_of(self, interval: Interval) -> int | None:
        for index, candidate in enumerate(self._intervals):
            if candidate == interval:
                return index
        return None

    # Aggregates

    @cached_property
    def boundaries(self) -> Interval | None:
        """Span from the earliest start to the latest end, or None if empty.

        Only starts are ordered, so the latest end is scanned across every
        member rather than read off the last one. Uses the first member's
        bounds.
        """
        if not self._intervals:
            return None
        earliest = min(interval.start for interval in self._intervals)
        latest = max(interval.end for interval in self._intervals)
        return Interval(earliest, latest, self._intervals[0].bounds)

    @cached_property
    def total_duration(self) -> Duration:
        """Sum of member lengths. Overlapping time is counted once per member."""
        return Duration(sum(interval.end - interval.start for interval in self._intervals))

    @cached_property
    def gaps(self) -> "Sequence":
        """Spans not covered by any member, between the first start and last end.

        Algorithm: Sweep in start order while tracking the member that reaches
        furthest. A gap opens when the next member neither overlaps nor touches
        that member; it runs from the reach's end to the next start and takes
        the reach's bounds. A long member that spans several shorter ones keeps
        the space between them from being reported.
        """
        found: list[Interval] = []
        reach: Interval | None = None

        for interval in self._start_ordered():
            if reach is None:
                reach = interval
                continue
            if not reach.overlaps(interval) and not reach.touches(interval):
                found.append(Interval(reach.end, interval.start, reach.bounds))
            if interval.end > reach.end:
                reach = interval

        return Sequence._wrap(tuple(found), ordered=True)

    # Set algebra

    def _start_ordered(self) -> tuple[Interval, ...]:
        if self._ordered:
            return self._intervals
        logger.debug("sequence.resorted", count=len(self._intervals))
        return tuple(sorted(self._intervals, key=_by_start))

    def union(self, other: "Sequence") -> "Sequence":
        """All intervals from both sequences, exact duplicates dropped.

        Overlapping intervals are kept as they are; use ``merge()`` to fuse them.
        """
        if not self._intervals:
            return other
        if not other._intervals:
            return self
        combined = dict.fromkeys((*self._intervals, *other._intervals))
        return Sequence.from_unsorted(combined)

    def intersect(self, other: "Sequence") -> "Sequence":
        """Overlapping spans between the two sequences.

        Algorithm: Walk both start-ordered sequences with one cursor each. The
        current pair contributes ``[max(starts), min(ends))`` with the left
        interval's bounds when that span is non-empty; then the cursor whose
        interval ends first moves on. Runs in O(n + m) and the pieces come out
        in start order. Every piece lies within a member of each operand; the
        result is exhaustive when neither operand overlaps itself (for example
        after ``merge()``).
        """
        if not self._intervals or not other._intervals:
            return Sequence.empty()

        left = self._start_ordered()
        right = other._start_ordered()
        pieces: list[Interval] = []
        i = j = 0

        while i < len(left) and j < len(right):
            a = left[i]
            b = right[j]

            overlap_start = max(a.start, b.start)
            overlap_end = min(a.end, b.end)
            if overlap_start < overlap_end:
                pieces.append(Interval(overlap_start, overlap_end, a.bounds))

            if a.end <= b.end:
                i += 1
            else:
                j += 1

        return Sequence._wrap(tuple(pieces), ordered=True)

    def subtract(self, other: "Sequence") -> "Sequence":
        """Members of this sequence that overlap no member of other.

        Members are kept or dropped whole, never trimmed. Anything outside
        ``other.boundaries`` is kept without inspection; otherwise other's
        members are scanned until one starts at or after the member's end.
        """
        if not self._intervals:
            return Sequence.empty()
        if not other._intervals:
            return self

        span = other.boundaries
        if span is None:
            return self
        subtractors = other._start_ordered()
        remaining: list[Interval] = []

        for interval in self._start_ordered():
            if interval.end <= span.start or interval.start >= span.end:
                remaining.append(interval)
                continue

            candidates = takewhile(lambda c: c.start < interval.end, subtractors)
            if not any(interval.overlaps(candidate) for candidate in candidates):
                remaining.append(interval)

        return Sequence._wrap(tuple(remaining), ordered=True)

    def merge(self) -> "Sequence":
        """Fuse overlapping and consecutive intervals into continuous spans.

        Algorithm: One left-to-right sweep in start order. The running interval
        absorbs the next one whenever ``Interval.union`` accepts it (overlap,
        or a touch where either touching endpoint is inclusive); otherwise it
        is emitted and the next interval takes its place. Merged spans keep
        the bounds of the first interval in each run.
        """
        intervals = self._start_ordered()
        if len(intervals) < 2:
            return self if self._ordered else Sequence._wrap(intervals, ordered=True)

        merged: list[Interval] = []
        current = intervals[0]

        for nxt in intervals[1:]:
            combined = current.union(nxt)
            if combined is None:
                merged.append(current)
                current = nxt
            else:
                current = combined

        merged.append(current)
        return Sequence._wrap(tuple(merged), ordered=True)

    def __or__(self, other: "Sequence") -> "Sequence":
        self._check_operand(other, "|")
        return self.union(other)

    def __and__(self, other: "Sequence") -> "Sequence":
        self._check_operand(other, "&")
        return self.intersect(other)

    def __sub__(self, other: "Sequence") -> "Sequence":
        self._check_operand(other, "-")
        return self.subtract(other)

    @staticmethod
    def _check_operand(other: Any, symbol: str) -> None:
        if isinstance(other, Sequence):
            return
        hint = ""
        if isinstance(other, Interval):
            hint = f"\nHint: Wrap the interval first: sequence {symbol} Sequence(interval)"
        raise TypeError(
            f"Unsupported operand for {symbol}: Sequence and "
            f"{type(other).__name__}{hint}"
        )

    # Ordering and functional helpers

    def sort(
        self, key: Callable[[Interval], Any] | None = None, reverse: bool = False
    ) -> "Sequence":
        """Reorder by key (start time when omitted).

        Any other order is kept as given, and the result is no longer treated
        as start-ordered by the set operations.
        """
        ordered = key is None and not reverse
        result = tuple(sorted(self._intervals, key=key or _by_start, reverse=reverse))
        return Sequence._wrap(result, ordered=ordered)

    def sort_by_start(self) -> "Sequence":
        return self if self._ordered else self.sort()

    def sort_by_duration(self) -> "Sequence":
        """Shortest first; equal lengths keep their current order."""
        return self.sort(key=_by_duration)

    def filter(self, predicate: Callable[[Interval], bool]) -> "Sequence":
        kept = tuple(interval for interval in self._intervals if predicate(interval))
        return Sequence._wrap(kept, ordered=self._ordered)

    def map(self, mapper: Callable[[Interval], T]) -> list[T]:
        return [mapper(interval) for interval in self._intervals]

    def find(self, predicate: Callable[[Interval], bool]) -> Interval | None:
        return next((i for i in self._intervals if predicate(i)), None)

    # Positional edits

    def _normalize(self, index: int, upper: int) -> int:
        normalized = index + len(self._intervals) if index < 0 else index
        if not 0 <= normalized < upper:
            raise IndexOutOfRange(normalized, len(self._intervals))
        return normalized

    def _edited(self, intervals: tuple[Interval, ...], index: int) -> "Sequence":
        """Wrap an edited tuple, checking the slot at index against its neighbours."""
        interval = intervals[index]
        in_order = self._ordered
        if in_order and index > 0:
            in_order = intervals[index - 1].start <= interval.start
        if in_order and index + 1 < len(intervals):
            in_order = interval.start <= intervals[index + 1].start
        return Sequence._wrap(intervals, ordered=in_order)

    def push(self, interval: Interval) -> "Sequence":
        """Append at the end."""
        return self._edited((*self._intervals, interval), len(self._intervals))

    def unshift(self, interval: Interval) -> "Sequence":
        """Prepend at the front."""
        return self._edited((interval, *self._intervals), 0)

    def insert(self, index: int, interval: Interval) -> "Sequence":
        """Insert before index; negative indices count from the end.

        Raises:
            IndexOutOfRange: If the normalized index is outside [0, len]
        """
        index = self._normalize(index, len(self._intervals) + 1)
        intervals = (*self._intervals[:index], interval, *self._intervals[index:])
        return self._edited(intervals, index)

    def set(self, index: int, interval: Interval) -> "Sequence":
        """Replace the interval at index; negative indices count from the end.

        Raises:
            IndexOutOfRange: If the normalized index is outside [0, len)
        """
        index = self._normalize(index, len(self._intervals))
        intervals = (*self._intervals[:index], interval, *self._intervals[index + 1 :])
        return self._edited(intervals, index)

    def element_at(self, index: int) -> Interval:
        """Interval at index; negative indices count from the end.

        Raises:
            IndexOutOfRange: If the normalized index is outside [0, len)
        """
        return self._intervals[self._normalize(index, len(self._intervals))]

    def without_at(self, index: int) -> "Sequence":
        """Copy with the interval at index removed; this sequence is untouched.

        Raises:
            IndexOutOfRange: If the normalized index is outside [0, len)
        """
        index = self._normalize(index, len(self._intervals))
        intervals = self._intervals[:index] + self._intervals[index + 1 :]
        return Sequence._wrap(intervals, ordered=self._ordered)

    def clear(self) -> "Sequence":
        return Sequence.empty()

    # Comparison and display

    def equals(self, other: "Sequence") -> bool:
        return self == other

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sequence):
            return NotImplemented
        return self._intervals == other._intervals

    @override
    def __hash__(self) -> int:
        return hash(self._intervals)

    @override
    def __repr__(self) -> str:
        return f"Sequence({', '.join(repr(i) for i in self._intervals)})"

    @override
    def __str__(self) -> str:
        if not self._intervals:
            return "Sequence(empty)"
        return f"Sequence({len(self._intervals)} intervals, {self.boundaries})"
