"""
Conflict Detection
==================
Flags generated shifts that overlap shifts already on the rota for the
same employee on the same date. Informational only: conflicts never
block saving.
"""
from collections import defaultdict
from dataclasses import replace
from datetime import date, time
from typing import Dict, List, Optional, Sequence, Tuple

from shiftgen.models.schedule import ConflictDetail, OverlapKind, Shift, ShiftInstance
from shiftgen.models.shift import minutes_of_day
from shiftgen.utils.logging_setup import get_logger

logger = get_logger("shiftgen.engine.conflicts")


def overlaps(new_start: int, new_end: int, existing_start: int, existing_end: int) -> bool:
    """Closed-interval overlap on minutes of day; touching shifts overlap."""
    return new_start <= existing_end and new_end >= existing_start


def classify_overlap(
    new_start: int, new_end: int, existing_start: int, existing_end: int
) -> OverlapKind:
    """Classify an overlap already known to exist."""
    if new_start <= existing_start and new_end >= existing_end:
        return OverlapKind.COMPLETE
    if existing_start <= new_start and existing_end >= new_end:
        return OverlapKind.CONTAINED
    if new_start < existing_start:
        return OverlapKind.PARTIAL_END
    return OverlapKind.PARTIAL_START


def find_conflicts(
    start_time: time,
    end_time: time,
    employee_id: Optional[str],
    candidates: Sequence[Shift],
) -> List[ConflictDetail]:
    """Overlapping shifts among ``candidates`` (already filtered to one date)."""
    if employee_id is None:
        return []
    new_start, new_end = minutes_of_day(start_time), minutes_of_day(end_time)
    details = []
    for shift in candidates:
        if shift.employee_id != employee_id:
            continue
        ex_start, ex_end = minutes_of_day(shift.start_time), minutes_of_day(shift.end_time)
        if overlaps(new_start, new_end, ex_start, ex_end):
            details.append(ConflictDetail(
                shift=shift,
                kind=classify_overlap(new_start, new_end, ex_start, ex_end),
            ))
    return details


def detect_conflicts(
    candidates: Sequence[ShiftInstance],
    existing: Sequence[Shift],
) -> List[ShiftInstance]:
    """
    Annotate each candidate with its overlaps against ``existing``.

    A conflict needs the same date, the same non-null employee and
    overlapping times. Returns new instances in input order; the inputs
    are left untouched.
    """
    by_key: Dict[Tuple[date, str], List[Shift]] = defaultdict(list)
    for shift in existing:
        if shift.employee_id is not None:
            by_key[(shift.date, shift.employee_id)].append(shift)

    annotated = []
    for candidate in candidates:
        pool = by_key.get((candidate.date, candidate.employee_id), []) if candidate.employee_id else []
        details = find_conflicts(candidate.start_time, candidate.end_time, candidate.employee_id, pool)
        if details:
            logger.warning(
                "Conflict: %s %s-%s employee=%s overlaps %d shift(s) (%s)",
                candidate.date.isoformat(), candidate.start_time, candidate.end_time,
                candidate.employee_id, len(details),
                ", ".join(d.kind.value for d in details),
            )
        annotated.append(replace(
            candidate,
            has_conflict=bool(details),
            conflict_details=tuple(details),
        ))

    logger.info(
        "Checked %d candidates against %d existing shifts: %d conflicts",
        len(candidates), len(existing), sum(1 for a in annotated if a.has_conflict),
    )
    return annotated
