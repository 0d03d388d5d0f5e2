"""
Business Rules and Constants
============================
Central source of truth for generation limits, statuses and labels.
"""
from dataclasses import dataclass, field
from typing import List


@dataclass
class RulesConfig:
    """Business rules constants."""

    # Horizon
    default_weeks: int = 1
    max_weeks: int = 12

    # Status written on persisted shifts
    default_status: str = "scheduled"

    # Labels
    unassigned_label: str = "Unassigned"
    shift_name_format: str = "{day} Shift"

    # Roles that may be put on the rota
    schedulable_roles: List[str] = field(default_factory=lambda: [
        "Manager", "Front Of House", "Instructor",
        "manager", "front_of_house", "instructor",
    ])

    # Start date suggestions offered for a template set
    start_date_options: int = 4


RULES = RulesConfig()
