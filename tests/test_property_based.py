"""
Property-Based Tests with Hypothesis
====================================
Invariants of expansion and conflict detection for arbitrary valid inputs.
"""
from collections import Counter
from datetime import date, time

from hypothesis import given, settings, strategies as st

from shiftgen.engine.conflicts import detect_conflicts
from shiftgen.engine.expansion import expand
from shiftgen.models.schedule import Shift
from shiftgen.models.shift import DayOfWeek, minutes_of_day
from shiftgen.models.template import ShiftTemplate

employees = st.one_of(st.none(), st.sampled_from(["E1", "E2", "E3"]))
start_dates = st.dates(min_value=date(2000, 1, 1), max_value=date(2099, 12, 31))


@st.composite
def time_ranges(draw):
    start = draw(st.integers(min_value=0, max_value=22 * 60))
    end = draw(st.integers(min_value=start + 1, max_value=23 * 60 + 59))
    return time(start // 60, start % 60), time(end // 60, end % 60)


@st.composite
def templates(draw, employee=employees):
    start, end = draw(time_ranges())
    return ShiftTemplate(
        id=draw(st.text(alphabet="abcdef0123456789", min_size=1, max_size=8)),
        location_id="loc-1",
        day_of_week=draw(st.sampled_from(list(DayOfWeek))),
        start_time=start,
        end_time=end,
        employee_id=draw(employee),
        version=1,
    )


template_sets = st.lists(templates(), min_size=1, max_size=10)


@st.composite
def existing_shifts(draw, around: date):
    start, end = draw(time_ranges())
    offset = draw(st.integers(min_value=0, max_value=20))
    return Shift(
        id=f"s{draw(st.integers(min_value=0, max_value=10_000))}",
        date=date.fromordinal(around.toordinal() + offset),
        start_time=start,
        end_time=end,
        location_id="loc-1",
        employee_id=draw(employees),
    )


class TestExpansionProperties:
    @given(tpls=template_sets, start=start_dates, weeks=st.integers(min_value=1, max_value=12))
    def test_count_is_templates_times_weeks(self, tpls, start, weeks):
        assert len(expand(tpls, start, weeks)) == len(tpls) * weeks

    @given(tpls=template_sets, start=start_dates, weeks=st.integers(min_value=1, max_value=6))
    def test_weekday_matches_template(self, tpls, start, weeks):
        shifts = expand(tpls, start, weeks)
        for i, shift in enumerate(shifts):
            template = tpls[i % len(tpls)]
            assert DayOfWeek.from_date(shift.date) is template.day_of_week
            assert shift.day_of_week is template.day_of_week

    @given(tpls=template_sets, start=start_dates, weeks=st.integers(min_value=1, max_value=6))
    def test_dates_within_horizon(self, tpls, start, weeks):
        for shift in expand(tpls, start, weeks):
            delta = (shift.date - start).days
            assert 0 <= delta < 7 * weeks

    @given(tpls=template_sets, start=start_dates, weeks=st.integers(min_value=1, max_value=4))
    def test_expansion_is_idempotent(self, tpls, start, weeks):
        first = Counter(s.key for s in expand(tpls, start, weeks))
        second = Counter(s.key for s in expand(tpls, start, weeks))
        assert first == second


class TestConflictProperties:
    @settings(max_examples=50)
    @given(data=st.data(), start=start_dates)
    def test_reported_conflicts_are_real_overlaps(self, data, start):
        tpls = data.draw(template_sets)
        existing = data.draw(st.lists(existing_shifts(start), max_size=15))

        for candidate in detect_conflicts(expand(tpls, start, 3), existing):
            assert candidate.has_conflict == bool(candidate.conflict_details)
            for detail in candidate.conflict_details:
                other = detail.shift
                assert other.date == candidate.date
                assert candidate.employee_id is not None
                assert other.employee_id == candidate.employee_id
                a0, a1 = minutes_of_day(candidate.start_time), minutes_of_day(candidate.end_time)
                b0, b1 = minutes_of_day(other.start_time), minutes_of_day(other.end_time)
                assert max(a0, b0) <= min(a1, b1)

    @settings(max_examples=50)
    @given(data=st.data(), start=start_dates)
    def test_every_overlap_is_reported(self, data, start):
        tpls = data.draw(template_sets)
        existing = data.draw(st.lists(existing_shifts(start), max_size=15))

        for candidate in detect_conflicts(expand(tpls, start, 3), existing):
            expected = {
                s.id for s in existing
                if candidate.employee_id is not None
                and s.employee_id == candidate.employee_id
                and s.date == candidate.date
                and minutes_of_day(candidate.start_time) <= minutes_of_day(s.end_time)
                and minutes_of_day(candidate.end_time) >= minutes_of_day(s.start_time)
            }
            assert {d.shift.id for d in candidate.conflict_details} == expected

    @given(tpls=st.lists(templates(employee=st.none()), min_size=1, max_size=5), start=start_dates)
    def test_unassigned_never_conflict(self, tpls, start):
        existing = [
            Shift(id="x", date=start, start_time="00:00", end_time="23:59",
                  location_id="loc-1", employee_id="E1"),
        ]
        assert not any(c.has_conflict for c in detect_conflicts(expand(tpls, start, 2), existing))
