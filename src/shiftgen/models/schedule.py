"""Dated shift records: preview instances and persisted shifts."""
from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

import pandas as pd

from shiftgen.errors import ValidationError

from .shift import DayOfWeek, format_time, parse_time


class OverlapKind(str, Enum):
    """How a candidate shift overlaps an existing one."""
    COMPLETE = "complete"            # candidate covers the existing shift
    CONTAINED = "contained"          # existing shift covers the candidate
    PARTIAL_END = "partial-end"      # candidate starts first, runs into existing
    PARTIAL_START = "partial-start"  # candidate runs past the end of existing


def parse_date(value: Union[str, date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        raise ValidationError(f"Invalid date: {value!r}") from None


@dataclass(frozen=True)
class Shift:
    """A shift already on the rota."""

    id: str
    date: date
    start_time: time
    end_time: time
    location_id: str
    employee_id: Optional[str] = None
    status: str = "scheduled"
    name: str = ""

    def __post_init__(self):
        object.__setattr__(self, "date", parse_date(self.date))
        object.__setattr__(self, "start_time", parse_time(self.start_time))
        object.__setattr__(self, "end_time", parse_time(self.end_time))
        object.__setattr__(self, "employee_id", self.employee_id or None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "start_time": format_time(self.start_time),
            "end_time": format_time(self.end_time),
            "location_id": self.location_id,
            "employee_id": self.employee_id,
            "status": self.status,
            "name": self.name,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Shift":
        return cls(
            id=str(d.get("id", "")),
            date=d["date"],
            start_time=d["start_time"],
            end_time=d["end_time"],
            location_id=str(d["location_id"]),
            employee_id=d.get("employee_id") or None,
            status=str(d.get("status") or "scheduled"),
            name=str(d.get("name") or ""),
        )


@dataclass(frozen=True)
class ConflictDetail:
    shift: Shift
    kind: OverlapKind


@dataclass(frozen=True)
class ShiftInstance:
    """A generated, not yet persisted, shift."""

    date: date
    day_of_week: DayOfWeek
    start_time: time
    end_time: time
    location_id: str
    employee_id: Optional[str] = None
    employee_name: str = ""
    location_name: str = ""
    version: Optional[int] = None
    has_conflict: bool = False
    conflict_details: Tuple[ConflictDetail, ...] = field(default=(), compare=False)

    @property
    def key(self) -> Tuple[date, time, time, str, Optional[str]]:
        """Identity used when comparing expansion runs."""
        return (self.date, self.start_time, self.end_time, self.location_id, self.employee_id)


@dataclass
class ShiftPreview:
    """Rows shown to the user before confirming a bulk insert."""

    rows: List[ShiftInstance] = field(default_factory=list)
    location_id: str = ""
    version: Optional[int] = None
    start_date: Optional[date] = None
    weeks: int = 0

    @property
    def conflict_count(self) -> int:
        return sum(1 for r in self.rows if r.has_conflict)

    @property
    def has_conflicts(self) -> bool:
        return any(r.has_conflict for r in self.rows)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert preview rows to a DataFrame, sorted by date then start."""
        columns = [
            "date", "day", "start_time", "end_time", "location", "employee",
            "conflict", "conflict_kinds",
        ]
        if not self.rows:
            return pd.DataFrame(columns=columns)

        records = [
            {
                "date": r.date.isoformat(),
                "day": r.day_of_week.value,
                "start_time": format_time(r.start_time),
                "end_time": format_time(r.end_time),
                "location": r.location_name or r.location_id,
                "employee": r.employee_name or (r.employee_id or ""),
                "conflict": r.has_conflict,
                "conflict_kinds": ",".join(c.kind.value for c in r.conflict_details),
            }
            for r in self.rows
        ]
        df = pd.DataFrame(records, columns=columns)
        return df.sort_values(["date", "start_time"], kind="stable").reset_index(drop=True)

    def summary(self) -> Dict[str, Any]:
        dates = [r.date for r in self.rows]
        return {
            "location_id": self.location_id,
            "version": self.version,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "weeks": self.weeks,
            "shifts": len(self.rows),
            "conflicts": self.conflict_count,
            "first_date": min(dates).isoformat() if dates else None,
            "last_date": max(dates).isoformat() if dates else None,
        }
