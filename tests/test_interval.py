from datetime import date, datetime, timedelta, timezone

import pytest

from calspan import DAY, HOUR, Bounds, Duration, Interval, InvalidRange
from calspan.timestamps import to_milliseconds

INCL_EXCL = Bounds.START_INCLUSIVE_END_EXCLUSIVE
EXCL_INCL = Bounds.START_EXCLUSIVE_END_INCLUSIVE
BOTH = Bounds.BOTH_INCLUSIVE
NEITHER = Bounds.BOTH_EXCLUSIVE


def day(year: int, month: int, dom: int) -> int:
    return to_milliseconds(date(year, month, dom))


class TestConstruction:
    def test_valid_interval(self):
        interval = Interval(0, 10)
        assert interval.start == 0
        assert interval.end == 10
        assert interval.bounds is INCL_EXCL

    def test_custom_bounds(self):
        assert Interval(0, 10, BOTH).bounds is BOTH

    def test_integer_bounds_are_coerced(self):
        assert Interval(0, 10, 0b11).bounds is BOTH

    @pytest.mark.parametrize(("start", "end"), [(10, 10), (10, 5)])
    def test_start_must_precede_end(self, start, end):
        with pytest.raises(InvalidRange) as info:
            Interval(start, end)
        assert info.value.start == start
        assert info.value.end == end

    def test_invalid_range_is_a_value_error(self):
        with pytest.raises(ValueError):
            Interval(5, 5)

    def test_direct_construction_needs_integers(self):
        with pytest.raises(TypeError, match="from_instants"):
            Interval(datetime(2024, 1, 1, tzinfo=timezone.utc), 10)  # type: ignore[arg-type]

    def test_round_trip(self):
        original = Interval(day(2024, 1, 1), day(2024, 1, 15), EXCL_INCL)
        assert Interval(original.start, original.end, original.bounds) == original
        assert Interval(original.start, original.end, original.bounds).equals(original)

    def test_hashable_value_object(self):
        assert len({Interval(0, 10), Interval(0, 10), Interval(0, 10, BOTH)}) == 2


class TestFromInstants:
    def test_accepts_mixed_inputs(self):
        interval = Interval.from_instants(
            "2024-01-01T09:30:00Z",
            datetime(2024, 1, 1, 17, tzinfo=timezone.utc),
        )
        assert interval.start == day(2024, 1, 1) + 9 * HOUR + 30 * 60_000
        assert interval.end == day(2024, 1, 1) + 17 * HOUR

    def test_string_without_offset_is_utc(self):
        interval = Interval.from_instants("2024-01-01", "2024-01-02")
        assert interval == Interval(day(2024, 1, 1), day(2024, 1, 2))

    def test_keeps_sub_day_precision(self):
        start = datetime(2024, 1, 1, 8, tzinfo=timezone.utc)
        interval = Interval.from_instants(start, start + timedelta(milliseconds=1))
        assert interval.end - interval.start == 1

    def test_rejects_naive_datetime(self):
        with pytest.raises(TypeError, match="timezone-aware"):
            Interval.from_instants(datetime(2024, 1, 1), datetime(2024, 1, 2))

    def test_rejects_unsupported_type(self):
        with pytest.raises(TypeError, match="must be int, datetime, date, or str"):
            Interval.from_instants(1.5, 10)  # type: ignore[arg-type]

    def test_datetime_accessors(self):
        interval = Interval.from_instants(date(2024, 1, 1), date(2024, 1, 3))
        assert interval.start_datetime == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert interval.end_datetime == datetime(2024, 1, 3, tzinfo=timezone.utc)
        assert interval.duration == Duration.from_days(2)
        assert interval.duration_in_days == 2


class TestFromCalendarDates:
    def test_truncates_to_midnight_utc(self):
        interval = Interval.from_calendar_dates(
            "2024-01-01T15:45:00Z", datetime(2024, 1, 3, 1, tzinfo=timezone.utc)
        )
        assert interval.start == day(2024, 1, 1)
        assert interval.end == day(2024, 1, 3)

    def test_same_day_instants_always_fail(self):
        with pytest.raises(InvalidRange):
            Interval.from_calendar_dates(
                "2024-01-01T08:00:00Z", "2024-01-01T18:00:00Z"
            )

    def test_pre_epoch_dates_floor_downwards(self):
        interval = Interval.from_calendar_dates(
            "1969-12-31T12:00:00Z", "1970-01-01T00:00:00Z"
        )
        assert interval.start == -DAY
        assert interval.end == 0


class TestBoundaryMembership:
    @pytest.mark.parametrize(
        ("bounds", "has_start", "has_end"),
        [
            (INCL_EXCL, True, False),
            (EXCL_INCL, False, True),
            (BOTH, True, True),
            (NEITHER, False, False),
        ],
    )
    def test_contains_instant(self, bounds, has_start, has_end):
        interval = Interval(day(2024, 1, 1), day(2024, 1, 15), bounds)

        assert interval.contains_instant(day(2024, 1, 1)) is has_start
        assert interval.contains_instant(day(2024, 1, 15)) is has_end
        assert interval.contains_instant(date(2024, 1, 10))
        assert not interval.contains_instant(date(2024, 2, 1))
        assert (day(2024, 1, 1) in interval) is has_start


class TestRelations:
    def test_separate_intervals_do_not_overlap(self):
        a = Interval(0, 10)
        b = Interval(20, 30)
        assert not a.overlaps(b)
        assert not a.touches(b)
        assert not a.abuts(b)

    def test_interleaved_intervals_overlap(self):
        assert Interval(0, 10).overlaps(Interval(5, 15))
        assert Interval(5, 15).overlaps(Interval(0, 10))
        assert Interval(0, 10, NEITHER).overlaps(Interval(5, 15, NEITHER))

    def test_half_open_touch_abuts(self):
        a = Interval(0, 10)
        b = Interval(10, 20)
        assert not a.overlaps(b)
        assert a.touches(b)
        assert a.abuts(b)

    def test_closed_touch_overlaps(self):
        a = Interval(0, 10, BOTH)
        b = Interval(10, 20, BOTH)
        assert a.overlaps(b)
        assert b.overlaps(a)
        assert a.touches(b)
        assert not a.abuts(b)

    def test_touch_needs_both_sides_inclusive(self):
        # end inclusive, but the next start is exclusive
        assert not Interval(0, 10, BOTH).overlaps(Interval(10, 20, EXCL_INCL))
        # reversed receiver: other's end inclusive and this start inclusive
        assert Interval(10, 20, INCL_EXCL).overlaps(Interval(0, 10, EXCL_INCL))

    def test_contains_respects_own_bounds(self):
        outer = Interval(0, 100)
        assert outer.contains(Interval(0, 50))
        assert not outer.contains(Interval(50, 100))
        assert not Interval(0, 100, NEITHER).contains(Interval(0, 50))
        assert not Interval(0, 100, NEITHER).contains(Interval(50, 100))
        assert Interval(0, 100, BOTH).contains(Interval(0, 100))
        assert not outer.contains(Interval(50, 150))

    def test_equality(self):
        assert Interval(0, 10) == Interval(0, 10)
        assert Interval(0, 10) != Interval(0, 10, BOTH)
        assert Interval(0, 10) != Interval(0, 11)

    def test_ordering_is_non_strict(self):
        a = Interval(0, 10)
        b = Interval(10, 20)
        c = Interval(5, 15)
        assert a.is_before(b)
        assert b.is_after(a)
        assert not a.is_before(c)
        assert not c.is_after(a)


class TestGap:
    def test_gap_between_separate_intervals(self):
        a = Interval(day(2024, 1, 1), day(2024, 1, 10), BOTH)
        b = Interval(day(2024, 1, 20), day(2024, 1, 30))

        assert a.gap(b) == Interval(day(2024, 1, 10), day(2024, 1, 20), BOTH)
        assert b.gap(a) == Interval(day(2024, 1, 10), day(2024, 1, 20))

    def test_no_gap_when_overlapping_or_touching(self):
        assert Interval(0, 10).gap(Interval(5, 15)) is None
        assert Interval(0, 10).gap(Interval(10, 15)) is None
        assert Interval(0, 10, NEITHER).gap(Interval(10, 15, NEITHER)) is None


class TestIntersectionAndUnion:
    def test_intersection(self):
        a = Interval(0, 10, BOTH)
        b = Interval(5, 15)
        assert a.intersection(b) == Interval(5, 10, BOTH)
        assert b.intersection(a) == Interval(5, 10)

    def test_intersection_none_when_disjoint(self):
        assert Interval(0, 10).intersection(Interval(10, 20)) is None
        assert Interval(0, 10).intersection(Interval(15, 20)) is None

    def test_intersection_of_single_shared_instant_is_none(self):
        assert Interval(0, 10, BOTH).intersection(Interval(10, 20, BOTH)) is None

    @pytest.mark.parametrize(
        ("left", "right", "mergeable"),
        [
            (INCL_EXCL, INCL_EXCL, True),
            (EXCL_INCL, EXCL_INCL, True),
            (BOTH, BOTH, True),
            (NEITHER, NEITHER, False),
            (INCL_EXCL, EXCL_INCL, False),
            (BOTH, INCL_EXCL, True),
        ],
    )
    def test_consecutive_days_rule_is_looser_than_overlap(self, left, right, mergeable):
        a = Interval(day(2024, 1, 1), day(2024, 1, 2), left)
        b = Interval(day(2024, 1, 2), day(2024, 1, 3), right)

        assert a.can_merge_consecutive_days(b) is mergeable
        assert b.can_merge_consecutive_days(a) is mergeable

    def test_consecutive_days_requires_touch(self):
        assert not Interval(0, 10, BOTH).can_merge_consecutive_days(Interval(5, 15, BOTH))
        assert not Interval(0, 10, BOTH).can_merge_consecutive_days(Interval(11, 15, BOTH))

    def test_union(self):
        a = Interval(0, 10, EXCL_INCL)
        assert a.union(Interval(5, 20)) == Interval(0, 20, EXCL_INCL)
        assert a.union(Interval(10, 20)) == Interval(0, 20, EXCL_INCL)
        assert Interval(0, 10).union(Interval(10, 20)) == Interval(0, 20)
        assert a.union(Interval(15, 20)) is None
        assert Interval(0, 10, NEITHER).union(Interval(10, 20, NEITHER)) is None


class TestTransformations:
    base = Interval(day(2024, 1, 15), day(2024, 1, 22))

    def test_starting_and_ending_on(self):
        assert self.base.starting_on(date(2024, 1, 10)) == Interval(
            day(2024, 1, 10), day(2024, 1, 22)
        )
        assert self.base.ending_on(date(2024, 1, 31)) == Interval(
            day(2024, 1, 15), day(2024, 1, 31)
        )

    def test_with_bounds(self):
        changed = self.base.with_bounds(BOTH)
        assert changed.bounds is BOTH
        assert self.base.bounds is INCL_EXCL

    def test_with_duration(self):
        assert self.base.with_duration(Duration.from_days(10)).end == day(2024, 1, 25)

    def test_move(self):
        moved = self.base.move(Duration.from_days(7))
        assert moved == Interval(day(2024, 1, 22), day(2024, 1, 29))
        back = self.base.move_backward(Duration.from_days(7))
        assert back == Interval(day(2024, 1, 8), day(2024, 1, 15))

    def test_expand(self):
        expanded = self.base.expand(Duration.from_days(2))
        assert expanded == Interval(day(2024, 1, 14), day(2024, 1, 23))

    def test_transformations_validate(self):
        with pytest.raises(InvalidRange):
            self.base.starting_on(date(2024, 1, 22))
        with pytest.raises(InvalidRange):
            self.base.with_duration(Duration(0))

    def test_original_is_unchanged(self):
        self.base.move(Duration.from_days(1))
        self.base.expand(Duration.from_days(1))
        assert self.base == Interval(day(2024, 1, 15), day(2024, 1, 22))
        with pytest.raises(AttributeError):
            self.base.start = 0  # type: ignore[misc]
