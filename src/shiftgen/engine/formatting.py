"""Row shaping for the persistence sink."""
from typing import Any, Dict, List, Sequence

from shiftgen.errors import ValidationError
from shiftgen.models.rules import RULES
from shiftgen.models.schedule import ShiftInstance
from shiftgen.models.shift import format_time


def shift_name(instance: ShiftInstance) -> str:
    return RULES.shift_name_format.format(day=instance.day_of_week.value)


def format_for_persistence(instances: Sequence[ShiftInstance]) -> List[Dict[str, Any]]:
    """
    Map preview instances to insertable shift rows.

    Each row carries the ISO date, ``HH:MM:SS`` times, location, employee,
    a display name such as ``"Monday Shift"`` and the default status.
    """
    rows = []
    for inst in instances:
        if not isinstance(inst, ShiftInstance):
            raise ValidationError(f"Expected ShiftInstance, got {type(inst).__name__}")
        rows.append({
            "date": inst.date.isoformat(),
            "start_time": format_time(inst.start_time),
            "end_time": format_time(inst.end_time),
            "location_id": inst.location_id,
            "employee_id": inst.employee_id,
            "name": shift_name(inst),
            "status": RULES.default_status,
        })
    return rows
