"""Named date-range presets used to filter the rota."""
from calendar import monthrange
from datetime import date, timedelta
from typing import Optional, Tuple

DateRange = Tuple[date, date]

PRESETS = (
    "today", "tomorrow", "thisWeek", "nextWeek", "lastWeek", "thisMonth", "lastMonth",
)


def start_of_week(d: date) -> date:
    """Monday of the week containing ``d``."""
    return d - timedelta(days=d.weekday())


def end_of_week(d: date) -> date:
    return start_of_week(d) + timedelta(days=6)


def start_of_month(d: date) -> date:
    return d.replace(day=1)


def end_of_month(d: date) -> date:
    return d.replace(day=monthrange(d.year, d.month)[1])


def date_range_for_preset(preset: str, today: Optional[date] = None) -> DateRange:
    """
    Resolve a preset name to an inclusive (start, end) range.

    Weeks start on Monday. Unknown presets resolve to today..today.
    """
    today = today or date.today()

    if preset == "tomorrow":
        tomorrow = today + timedelta(days=1)
        return tomorrow, tomorrow
    if preset == "thisWeek":
        return start_of_week(today), end_of_week(today)
    if preset == "nextWeek":
        nxt = today + timedelta(weeks=1)
        return start_of_week(nxt), end_of_week(nxt)
    if preset == "lastWeek":
        last = today - timedelta(weeks=1)
        return start_of_week(last), end_of_week(last)
    if preset == "thisMonth":
        return start_of_month(today), end_of_month(today)
    if preset == "lastMonth":
        last_month = start_of_month(today) - timedelta(days=1)
        return start_of_month(last_month), end_of_month(last_month)
    return today, today


def expansion_range(start: date, weeks: int) -> DateRange:
    """Inclusive range covered by an expansion of ``weeks`` weeks from ``start``."""
    return start, start + timedelta(days=7 * weeks - 1)
