"""Pytest configuration and fixtures."""
import sys
from datetime import date
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest

from shiftgen.data.cache import TTLCache
from shiftgen.data.sources import InMemoryStore
from shiftgen.models.schedule import Shift
from shiftgen.models.template import Location, ShiftTemplate, StaffMember
from shiftgen.services.shift_service import ShiftService

MONDAY = date(2024, 6, 3)
WEDNESDAY = date(2024, 6, 5)


class FakeClock:
    """Manually advanced clock for cache tests."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def locations():
    return [
        Location(id="loc-1", name="High Street"),
        Location(id="loc-2", name="Riverside"),
    ]


@pytest.fixture
def staff():
    return [
        StaffMember(id="E1", first_name="Alice", last_name="Smith", role="Manager"),
        StaffMember(id="E2", first_name="Bob", last_name="Jones", role="Instructor"),
        StaffMember(id="E3", first_name="Cara", last_name="Lee", role="Accountant"),
    ]


@pytest.fixture
def templates():
    """Version 1 of the High Street rota."""
    return [
        ShiftTemplate(id="t1", location_id="loc-1", day_of_week="Monday",
                      start_time="09:00:00", end_time="17:00:00", employee_id="E1", version=1),
        ShiftTemplate(id="t2", location_id="loc-1", day_of_week="Wednesday",
                      start_time="12:00", end_time="20:00", employee_id="E2", version=1),
        ShiftTemplate(id="t3", location_id="loc-1", day_of_week="Saturday",
                      start_time="10:00", end_time="14:00", employee_id=None, version=1),
    ]


@pytest.fixture
def existing_shifts():
    return [
        Shift(id="s1", date=MONDAY, start_time="09:00", end_time="17:00",
              location_id="loc-1", employee_id="E1"),
    ]


@pytest.fixture
def store(locations, staff, templates, existing_shifts):
    return InMemoryStore(
        locations=locations, staff=staff, templates=templates, shifts=existing_shifts,
    )


@pytest.fixture
def service(store, clock):
    return ShiftService(store, cache=TTLCache(ttl_seconds=60, clock=clock))
