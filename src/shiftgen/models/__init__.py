# shiftgen/models - Data models for shift generation
from .config import GenerationConfig
from .rules import RULES, RulesConfig
from .schedule import ConflictDetail, OverlapKind, Shift, ShiftInstance, ShiftPreview
from .shift import ALL_DAYS, WEEKDAYS, WEEKEND, DayOfWeek, day_number, parse_time
from .template import Location, ShiftTemplate, StaffMember, TemplateMaster

__all__ = [
    "DayOfWeek", "ALL_DAYS", "WEEKDAYS", "WEEKEND", "day_number", "parse_time",
    "ShiftTemplate", "TemplateMaster", "Location", "StaffMember",
    "Shift", "ShiftInstance", "ShiftPreview", "ConflictDetail", "OverlapKind",
    "GenerationConfig", "RULES", "RulesConfig",
]
