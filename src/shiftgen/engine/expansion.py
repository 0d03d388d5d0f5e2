"""
Shift Expansion
===============
Materializes dated shift instances from a weekly template set.

For week ``i`` and template ``t`` the instance falls on::

    start_date + 7*i + (day_number(t) - day_number(start_date) + 7) % 7

so week 0 holds the first occurrence of each template weekday on or after
the start date. Output is week-major, template-order-minor.
"""
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from shiftgen.errors import ValidationError
from shiftgen.models.rules import RULES
from shiftgen.models.schedule import ShiftInstance, parse_date
from shiftgen.models.shift import DayOfWeek, day_number
from shiftgen.models.template import Location, ShiftTemplate, StaffMember
from shiftgen.utils.logging_setup import get_logger, log_function_call

logger = get_logger("shiftgen.engine.expansion")


def _as_date(value: Union[date, datetime, str, None]) -> date:
    if value is None:
        raise ValidationError("Please select a start date.")
    return parse_date(value)


def _check_single_set(templates: Sequence[ShiftTemplate]) -> None:
    sets = {(t.location_id, t.version) for t in templates}
    if len(sets) > 1:
        raise ValidationError(
            f"Templates span {len(sets)} template sets; expand one (location, version) at a time"
        )


@log_function_call
def expand(
    templates: Sequence[ShiftTemplate],
    start_date: Union[date, datetime, str],
    weeks: int,
) -> List[ShiftInstance]:
    """
    Expand a template set over ``weeks`` weeks starting at ``start_date``.

    Args:
        templates: Templates of one (location, version) set, non-empty
        start_date: Week-0 anchor; any weekday
        weeks: Number of weeks, at least 1

    Returns:
        ``len(templates) * weeks`` instances, week-major

    Raises:
        ValidationError: empty template list, missing date, weeks < 1,
            mixed template sets
    """
    if not templates:
        raise ValidationError("No templates found for the selected version.")
    start = _as_date(start_date)
    if int(weeks) < 1:
        raise ValidationError(f"weeks must be at least 1, got {weeks}")
    _check_single_set(templates)

    start_no = day_number(start)
    offsets = [(day_number(t.day_of_week) - start_no + 7) % 7 for t in templates]

    instances: List[ShiftInstance] = []
    for week in range(int(weeks)):
        for template, offset in zip(templates, offsets):
            shift_date = start + timedelta(days=7 * week + offset)
            instances.append(ShiftInstance(
                date=shift_date,
                day_of_week=DayOfWeek.from_date(shift_date),
                start_time=template.start_time,
                end_time=template.end_time,
                location_id=template.location_id,
                employee_id=template.employee_id,
                employee_name=template.employee_name,
                version=template.version,
            ))
            logger.debug(
                "Week %d: %s %s %s-%s", week, template.day_of_week.value,
                shift_date.isoformat(), template.start_time, template.end_time,
            )

    logger.info(
        "Expanded %d templates over %d weeks from %s: %d shifts",
        len(templates), weeks, start.isoformat(), len(instances),
    )
    return instances


def sort_templates(templates: Iterable[ShiftTemplate]) -> List[ShiftTemplate]:
    """Order templates Monday first, then by start time."""
    return sorted(templates, key=lambda t: (t.day_of_week.order, t.start_time))


def find_next_day_occurrence(start: date, day: Union[str, DayOfWeek]) -> date:
    """Next occurrence of ``day`` strictly after ``start``."""
    days_to_add = (day_number(day) + 7 - day_number(start)) % 7
    return start + timedelta(days=days_to_add or 7)


def weeks_options(max_weeks: int = RULES.max_weeks) -> List[Tuple[str, str]]:
    return [
        (str(n), "1 week" if n == 1 else f"{n} weeks")
        for n in range(1, max_weeks + 1)
    ]


def start_date_options(
    templates: Sequence[ShiftTemplate],
    today: date,
    count: int = RULES.start_date_options,
) -> List[date]:
    """Suggest start dates aligned on the earliest weekday of the set."""
    if not templates:
        return []
    first = sort_templates(templates)[0].day_of_week
    first_date = find_next_day_occurrence(today, first)
    return [first_date + timedelta(weeks=n) for n in range(count)]


def map_to_preview(
    instances: Sequence[ShiftInstance],
    locations: Sequence[Location] = (),
    staff: Sequence[StaffMember] = (),
) -> List[ShiftInstance]:
    """Attach location and employee display names to instances."""
    location_names: Dict[str, str] = {loc.id: loc.name for loc in locations}
    staff_names: Dict[str, str] = {s.id: s.full_name for s in staff}

    decorated = []
    for inst in instances:
        employee_name: Optional[str] = inst.employee_name
        if inst.employee_id is None:
            employee_name = RULES.unassigned_label
        elif not employee_name:
            employee_name = staff_names.get(inst.employee_id, "")
        decorated.append(replace(
            inst,
            location_name=location_names.get(inst.location_id, inst.location_name),
            employee_name=employee_name,
        ))
    return decorated
