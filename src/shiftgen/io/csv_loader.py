"""CSV loading and saving for templates and shifts."""
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

import pandas as pd

from shiftgen.errors import ValidationError
from shiftgen.models.schedule import Shift
from shiftgen.models.template import Location, ShiftTemplate, StaffMember
from shiftgen.utils.logging_setup import get_logger

logger = get_logger("shiftgen.io.csv_loader")

Source = Union[str, Path, pd.DataFrame]

TEMPLATE_COLUMNS = [
    "id", "location_id", "day_of_week", "start_time", "end_time",
    "employee_id", "version", "name",
]
SHIFT_COLUMNS = [
    "id", "date", "start_time", "end_time", "location_id", "employee_id", "status", "name",
]


def _safe_int(value, default: int = 0) -> int:
    """Safely convert value to int."""
    try:
        return int(float(value))
    except (ValueError, TypeError):
        return default


def _read(source: Source, required: Sequence[str], what: str) -> pd.DataFrame:
    if isinstance(source, pd.DataFrame):
        df = source.copy()
    else:
        df = pd.read_csv(source, dtype=str, keep_default_na=False)
    df = df.fillna("")

    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(f"{what} CSV must have columns: {', '.join(missing)}")
    return df


def _text(row: Dict[str, Any], key: str) -> str:
    return str(row.get(key, "")).strip()


def load_templates(source: Source) -> List[ShiftTemplate]:
    """
    Load shift templates from a CSV file or DataFrame.

    Rows without a location are skipped. A bad weekday or time raises
    ``ValidationError`` naming the row.
    """
    df = _read(source, ["location_id", "day_of_week", "start_time", "end_time"], "Templates")

    templates = []
    for idx, row in enumerate(df.to_dict("records")):
        location_id = _text(row, "location_id")
        if not location_id:
            continue
        try:
            templates.append(ShiftTemplate(
                id=_text(row, "id") or f"tpl-{idx}",
                location_id=location_id,
                day_of_week=_text(row, "day_of_week"),
                start_time=_text(row, "start_time"),
                end_time=_text(row, "end_time"),
                employee_id=_text(row, "employee_id") or None,
                version=max(1, _safe_int(row.get("version"), 1)),
                name=_text(row, "name"),
                employee_name=_text(row, "employee_name"),
            ))
        except ValidationError as exc:
            raise ValidationError(f"Template row {idx + 1}: {exc}") from exc

    logger.info("Loaded %d templates", len(templates))
    return templates


def load_shifts(source: Source) -> List[Shift]:
    """Load existing shifts from a CSV file or DataFrame."""
    df = _read(source, ["date", "start_time", "end_time", "location_id"], "Shifts")

    shifts = []
    for idx, row in enumerate(df.to_dict("records")):
        if not _text(row, "date"):
            continue
        try:
            shifts.append(Shift(
                id=_text(row, "id") or f"shift-{idx}",
                date=_text(row, "date"),
                start_time=_text(row, "start_time"),
                end_time=_text(row, "end_time"),
                location_id=_text(row, "location_id"),
                employee_id=_text(row, "employee_id") or None,
                status=_text(row, "status") or "scheduled",
                name=_text(row, "name"),
            ))
        except ValidationError as exc:
            raise ValidationError(f"Shift row {idx + 1}: {exc}") from exc

    logger.info("Loaded %d shifts", len(shifts))
    return shifts


def load_locations(source: Source) -> List[Location]:
    df = _read(source, ["id", "name"], "Locations")
    return [
        Location(id=_text(row, "id"), name=_text(row, "name"), address=_text(row, "address") or None)
        for row in df.to_dict("records")
        if _text(row, "id")
    ]


def load_staff(source: Source) -> List[StaffMember]:
    df = _read(source, ["id", "first_name", "last_name"], "Staff")
    return [
        StaffMember(
            id=_text(row, "id"),
            first_name=_text(row, "first_name"),
            last_name=_text(row, "last_name"),
            role=_text(row, "role"),
            email=_text(row, "email"),
        )
        for row in df.to_dict("records")
        if _text(row, "id")
    ]


def shifts_to_dataframe(shifts: Sequence[Shift]) -> pd.DataFrame:
    if not shifts:
        return pd.DataFrame(columns=SHIFT_COLUMNS)
    return pd.DataFrame([s.to_dict() for s in shifts], columns=SHIFT_COLUMNS)


def save_shifts(shifts: Sequence[Shift], path: Union[str, Path]) -> None:
    """Save shifts to CSV (employee left blank when unassigned)."""
    df = shifts_to_dataframe(shifts)
    df["employee_id"] = df["employee_id"].fillna("")
    df.to_csv(path, index=False)


def save_templates(templates: Sequence[ShiftTemplate], path: Union[str, Path]) -> None:
    if not templates:
        df = pd.DataFrame(columns=TEMPLATE_COLUMNS)
    else:
        df = pd.DataFrame([t.to_dict() for t in templates], columns=TEMPLATE_COLUMNS)
    df["employee_id"] = df["employee_id"].fillna("")
    df.to_csv(path, index=False)
