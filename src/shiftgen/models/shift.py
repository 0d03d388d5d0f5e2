"""Day-of-week and time-of-day definitions."""
from datetime import date, time
from enum import Enum
from typing import Union

from shiftgen.errors import ValidationError


class DayOfWeek(str, Enum):
    """Days a weekly template can repeat on."""
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @property
    def number(self) -> int:
        """Day number with Sunday=0 through Saturday=6."""
        return _DAY_NUMBERS[self]

    @property
    def order(self) -> int:
        """Display order, Monday first (Monday=1 through Sunday=7)."""
        return self.number or 7

    @property
    def short(self) -> str:
        return self.value[:3]

    @classmethod
    def from_string(cls, s: Union[str, "DayOfWeek"]) -> "DayOfWeek":
        """Parse a day from full name or abbreviation, any case."""
        if isinstance(s, cls):
            return s
        key = str(s).strip().lower()
        if key in DAY_ALIASES:
            return DAY_ALIASES[key]
        raise ValidationError(f"Unknown day of week: {s!r}")

    @classmethod
    def from_date(cls, d: date) -> "DayOfWeek":
        return _BY_NUMBER[d.isoweekday() % 7]


_DAY_NUMBERS = {
    DayOfWeek.SUNDAY: 0,
    DayOfWeek.MONDAY: 1,
    DayOfWeek.TUESDAY: 2,
    DayOfWeek.WEDNESDAY: 3,
    DayOfWeek.THURSDAY: 4,
    DayOfWeek.FRIDAY: 5,
    DayOfWeek.SATURDAY: 6,
}
_BY_NUMBER = {n: d for d, n in _DAY_NUMBERS.items()}

# Day constants, display order
ALL_DAYS = list(DayOfWeek)
WEEKDAYS = ALL_DAYS[:5]
WEEKEND = ALL_DAYS[5:]

DAY_ALIASES = {}
for _day in DayOfWeek:
    DAY_ALIASES[_day.value.lower()] = _day
    DAY_ALIASES[_day.short.lower()] = _day
DAY_ALIASES.update({
    "tues": DayOfWeek.TUESDAY,
    "weds": DayOfWeek.WEDNESDAY,
    "thur": DayOfWeek.THURSDAY,
    "thurs": DayOfWeek.THURSDAY,
})


def day_number(value: Union[str, DayOfWeek, date]) -> int:
    """Sunday=0 .. Saturday=6 for a day token or a calendar date."""
    if isinstance(value, date):
        return value.isoweekday() % 7
    return DayOfWeek.from_string(value).number


def parse_time(value: Union[str, time]) -> time:
    """Parse ``HH:MM`` or ``HH:MM:SS`` into a time."""
    if isinstance(value, time):
        return value
    text = str(value).strip()
    parts = text.split(":")
    if len(parts) not in (2, 3):
        raise ValidationError(f"Invalid time: {value!r}")
    try:
        numbers = [int(p) for p in parts]
        return time(*numbers)
    except ValueError:
        raise ValidationError(f"Invalid time: {value!r}") from None


def format_time(t: time) -> str:
    return t.strftime("%H:%M:%S")


def minutes_of_day(t: time) -> int:
    return t.hour * 60 + t.minute
