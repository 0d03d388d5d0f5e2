"""Weekly shift templates and the reference data that decorates them."""
from dataclasses import dataclass, field
from datetime import time
from typing import Optional

from .shift import DayOfWeek, format_time, parse_time


@dataclass(frozen=True)
class Location:
    id: str
    name: str
    address: Optional[str] = None


@dataclass(frozen=True)
class StaffMember:
    id: str
    first_name: str
    last_name: str
    role: str = ""
    email: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class ShiftTemplate:
    """A recurring weekly shift at one location, part of a versioned set."""

    id: str
    location_id: str
    day_of_week: DayOfWeek
    start_time: time
    end_time: time
    employee_id: Optional[str] = None
    version: int = 1
    name: str = ""
    employee_name: str = field(default="", compare=False)

    def __post_init__(self):
        """Normalize string inputs; templates are never mutated afterwards."""
        object.__setattr__(self, "day_of_week", DayOfWeek.from_string(self.day_of_week))
        object.__setattr__(self, "start_time", parse_time(self.start_time))
        object.__setattr__(self, "end_time", parse_time(self.end_time))
        object.__setattr__(self, "employee_id", self.employee_id or None)
        object.__setattr__(self, "version", int(self.version))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "location_id": self.location_id,
            "day_of_week": self.day_of_week.value,
            "start_time": format_time(self.start_time),
            "end_time": format_time(self.end_time),
            "employee_id": self.employee_id,
            "version": self.version,
            "name": self.name,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "ShiftTemplate":
        return cls(
            id=str(d.get("id", "")),
            location_id=str(d["location_id"]),
            day_of_week=d["day_of_week"],
            start_time=d["start_time"],
            end_time=d["end_time"],
            employee_id=d.get("employee_id") or None,
            version=int(d.get("version", 1)),
            name=str(d.get("name", "") or ""),
            employee_name=str(d.get("employee_name", "") or ""),
        )


@dataclass(frozen=True)
class TemplateMaster:
    """One (location, version) template set."""
    location_id: str
    version: int
    location_name: str = ""


def default_template_name(template: ShiftTemplate) -> str:
    """Name given to a template saved without one, e.g. ``Monday 09:00-17:00``."""
    return (
        f"{template.day_of_week.value} "
        f"{template.start_time.strftime('%H:%M')}-{template.end_time.strftime('%H:%M')}"
    )
