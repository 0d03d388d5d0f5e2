"""Tests for template expansion."""
from datetime import date, datetime, time

import pytest

from shiftgen.engine.expansion import (
    expand,
    find_next_day_occurrence,
    map_to_preview,
    sort_templates,
    start_date_options,
    weeks_options,
)
from shiftgen.errors import ValidationError
from shiftgen.models.shift import DayOfWeek
from shiftgen.models.template import ShiftTemplate

WEDNESDAY = date(2024, 6, 5)


def _template(day, start="09:00", end="17:00", employee="E1", **kwargs):
    return ShiftTemplate(
        id=kwargs.pop("id", f"t-{day}"), location_id=kwargs.pop("location_id", "loc-1"),
        day_of_week=day, start_time=start, end_time=end, employee_id=employee,
        version=kwargs.pop("version", 1), **kwargs,
    )


class TestExpand:
    def test_monday_template_from_wednesday(self):
        """A Monday template started on a Wednesday lands on the next two Mondays."""
        shifts = expand([_template("Monday")], WEDNESDAY, 2)

        assert [s.date for s in shifts] == [date(2024, 6, 10), date(2024, 6, 17)]
        assert all(s.start_time == time(9) and s.end_time == time(17) for s in shifts)
        assert all(s.employee_id == "E1" for s in shifts)
        assert all(s.day_of_week is DayOfWeek.MONDAY for s in shifts)

    def test_same_weekday_as_start_uses_start(self):
        shifts = expand([_template("Wednesday")], WEDNESDAY, 1)
        assert shifts[0].date == WEDNESDAY

    def test_sunday_template(self):
        shifts = expand([_template("Sunday")], WEDNESDAY, 1)
        assert shifts[0].date == date(2024, 6, 9)

    def test_output_is_week_major(self, templates):
        shifts = expand(templates, WEDNESDAY, 2)

        assert len(shifts) == 6
        days = [s.day_of_week.value for s in shifts]
        assert days == ["Monday", "Wednesday", "Saturday"] * 2
        # Not sorted by date: week 0 Monday comes after week 0 Wednesday
        assert shifts[0].date > shifts[1].date

    def test_carries_template_fields(self, templates):
        shifts = expand(templates, WEDNESDAY, 1)
        unassigned = [s for s in shifts if s.day_of_week is DayOfWeek.SATURDAY][0]

        assert unassigned.employee_id is None
        assert unassigned.location_id == "loc-1"
        assert unassigned.version == 1
        assert unassigned.has_conflict is False
        assert unassigned.conflict_details == ()

    def test_accepts_datetime_and_string(self):
        t = [_template("Friday")]
        a = expand(t, datetime(2024, 6, 5, 15, 30), 1)
        b = expand(t, "2024-06-05", 1)
        assert a[0].date == b[0].date == date(2024, 6, 7)

    def test_no_upper_bound_on_weeks(self):
        assert len(expand([_template("Monday")], WEDNESDAY, 60)) == 60

    def test_repeatable_with_assigned_and_unassigned_on_same_slot(self):
        tpls = [
            _template("Monday", "00:00", "00:01", employee=None, id="a"),
            _template("Monday", "00:00", "00:01", employee="E1", id="b"),
        ]
        first = [s.key for s in expand(tpls, WEDNESDAY, 2)]
        assert first == [s.key for s in expand(tpls, WEDNESDAY, 2)]
        assert [k[-1] for k in first] == [None, "E1", None, "E1"]

    def test_templates_not_mutated(self, templates):
        before = [t.to_dict() for t in templates]
        expand(templates, WEDNESDAY, 3)
        assert [t.to_dict() for t in templates] == before

    def test_empty_templates_raise(self):
        with pytest.raises(ValidationError, match="No templates"):
            expand([], WEDNESDAY, 1)

    def test_missing_date_raises(self):
        with pytest.raises(ValidationError, match="start date"):
            expand([_template("Monday")], None, 1)

    @pytest.mark.parametrize("weeks", [0, -1])
    def test_weeks_below_one_raise(self, weeks):
        with pytest.raises(ValidationError):
            expand([_template("Monday")], WEDNESDAY, weeks)

    def test_mixed_sets_raise(self):
        mixed = [_template("Monday"), _template("Tuesday", version=2)]
        with pytest.raises(ValidationError, match="template sets"):
            expand(mixed, WEDNESDAY, 1)


class TestDateHelpers:
    def test_next_occurrence_skips_same_day(self):
        assert find_next_day_occurrence(WEDNESDAY, "Wednesday") == date(2024, 6, 12)

    def test_next_occurrence(self):
        assert find_next_day_occurrence(WEDNESDAY, "Friday") == date(2024, 6, 7)
        assert find_next_day_occurrence(WEDNESDAY, DayOfWeek.MONDAY) == date(2024, 6, 10)

    def test_weeks_options(self):
        options = weeks_options()
        assert len(options) == 12
        assert options[0] == ("1", "1 week")
        assert options[-1] == ("12", "12 weeks")

    def test_start_date_options_follow_first_day(self, templates):
        options = start_date_options(templates, WEDNESDAY, count=3)
        assert options == [date(2024, 6, 10), date(2024, 6, 17), date(2024, 6, 24)]

    def test_start_date_options_empty(self):
        assert start_date_options([], WEDNESDAY) == []

    def test_sort_templates_monday_first(self):
        unsorted = [
            _template("Sunday", id="a"),
            _template("Monday", start="13:00", id="b"),
            _template("Monday", start="08:00", id="c"),
        ]
        assert [t.id for t in sort_templates(unsorted)] == ["c", "b", "a"]


class TestMapToPreview:
    def test_decorates_names(self, templates, locations, staff):
        rows = map_to_preview(expand(templates, WEDNESDAY, 1), locations, staff)
        by_day = {r.day_of_week: r for r in rows}

        assert by_day[DayOfWeek.MONDAY].employee_name == "Alice Smith"
        assert by_day[DayOfWeek.MONDAY].location_name == "High Street"
        assert by_day[DayOfWeek.SATURDAY].employee_name == "Unassigned"

    def test_unknown_employee_left_blank(self, locations):
        rows = map_to_preview(expand([_template("Monday", employee="E9")], WEDNESDAY, 1), locations, [])
        assert rows[0].employee_name == ""
