"""Tests for conflict detection and overlap classification."""
from datetime import date, datetime

import pytest

from shiftgen.engine.conflicts import classify_overlap, detect_conflicts, overlaps
from shiftgen.models.schedule import OverlapKind, Shift, ShiftInstance
from shiftgen.models.shift import DayOfWeek, parse_time

MONDAY = date(2024, 6, 3)


def _candidate(start, end, employee="E1", on=MONDAY):
    return ShiftInstance(
        date=on, day_of_week=DayOfWeek.from_date(on),
        start_time=parse_time(start), end_time=parse_time(end),
        location_id="loc-1", employee_id=employee,
    )


def _existing(start, end, employee="E1", on=MONDAY, id="s1"):
    return Shift(id=id, date=on, start_time=start, end_time=end,
                 location_id="loc-1", employee_id=employee)


class TestClassifyOverlap:
    @pytest.mark.parametrize("new, old, kind", [
        ((8 * 60, 18 * 60), (9 * 60, 17 * 60), OverlapKind.COMPLETE),
        ((9 * 60, 17 * 60), (9 * 60, 17 * 60), OverlapKind.COMPLETE),
        ((12 * 60, 13 * 60), (9 * 60, 17 * 60), OverlapKind.CONTAINED),
        ((7 * 60, 10 * 60), (9 * 60, 17 * 60), OverlapKind.PARTIAL_END),
        ((16 * 60, 20 * 60), (9 * 60, 17 * 60), OverlapKind.PARTIAL_START),
    ])
    def test_kinds(self, new, old, kind):
        assert classify_overlap(*new, *old) is kind

    def test_touching_ranges_overlap(self):
        assert overlaps(17 * 60, 20 * 60, 9 * 60, 17 * 60) is True
        assert overlaps(18 * 60, 20 * 60, 9 * 60, 17 * 60) is False


class TestDetectConflicts:
    def test_contained_conflict(self):
        """Existing E1 09:00-17:00; candidate 12:00-13:00 the same day is contained."""
        result = detect_conflicts([_candidate("12:00", "13:00")], [_existing("09:00", "17:00")])

        assert result[0].has_conflict is True
        assert len(result[0].conflict_details) == 1
        detail = result[0].conflict_details[0]
        assert detail.kind is OverlapKind.CONTAINED
        assert detail.shift.id == "s1"

    def test_unassigned_never_conflicts(self):
        existing = [_existing("09:00", "17:00", employee=None), _existing("09:00", "17:00", id="s2")]
        result = detect_conflicts([_candidate("09:00", "17:00", employee=None)], existing)
        assert result[0].has_conflict is False
        assert result[0].conflict_details == ()

    def test_existing_unassigned_shift_ignored(self):
        result = detect_conflicts(
            [_candidate("09:00", "17:00")], [_existing("09:00", "17:00", employee=None)]
        )
        assert result[0].has_conflict is False

    def test_other_employee_or_date_ignored(self):
        existing = [
            _existing("09:00", "17:00", employee="E2"),
            _existing("09:00", "17:00", on=date(2024, 6, 4), id="s2"),
        ]
        result = detect_conflicts([_candidate("10:00", "11:00")], existing)
        assert result[0].has_conflict is False

    def test_multiple_overlaps_reported(self):
        existing = [
            _existing("08:00", "10:00", id="a"),
            _existing("15:00", "18:00", id="b"),
            _existing("19:00", "21:00", id="c"),
        ]
        result = detect_conflicts([_candidate("09:00", "16:00")], existing)
        kinds = {d.shift.id: d.kind for d in result[0].conflict_details}
        assert kinds == {"a": OverlapKind.PARTIAL_START, "b": OverlapKind.PARTIAL_END}

    def test_inputs_untouched_and_order_kept(self):
        candidates = [_candidate("12:00", "13:00"), _candidate("20:00", "21:00")]
        result = detect_conflicts(candidates, [_existing("09:00", "17:00")])

        assert [r.has_conflict for r in result] == [True, False]
        assert all(c.has_conflict is False for c in candidates)

    def test_empty_inputs(self):
        assert detect_conflicts([], [_existing("09:00", "17:00")]) == []
        result = detect_conflicts([_candidate("09:00", "10:00")], [])
        assert result[0].has_conflict is False

    def test_conflicts_logged(self, caplog):
        with caplog.at_level("WARNING", logger="shiftgen.engine.conflicts"):
            detect_conflicts([_candidate("12:00", "13:00")], [_existing("09:00", "17:00")])
        assert "contained" in caplog.text

    def test_existing_shift_dated_with_datetime(self):
        """Existing shifts loaded with a timestamp still match on the calendar day."""
        existing = [_existing("09:00", "17:00", on=datetime(2024, 6, 3, 0, 0))]
        result = detect_conflicts([_candidate("12:00", "13:00")], existing)
        assert result[0].has_conflict is True
        assert result[0].conflict_details[0].kind is OverlapKind.CONTAINED
