"""Shift expansion engine."""
from .conflicts import classify_overlap, detect_conflicts, overlaps
from .date_range import date_range_for_preset, expansion_range
from .expansion import (
    expand,
    find_next_day_occurrence,
    map_to_preview,
    sort_templates,
    start_date_options,
    weeks_options,
)
from .formatting import format_for_persistence

__all__ = [
    "expand",
    "detect_conflicts",
    "classify_overlap",
    "overlaps",
    "format_for_persistence",
    "map_to_preview",
    "sort_templates",
    "find_next_day_occurrence",
    "start_date_options",
    "weeks_options",
    "date_range_for_preset",
    "expansion_range",
]
