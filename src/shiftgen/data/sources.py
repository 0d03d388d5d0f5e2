"""
Data Sources
============
Contracts for the external data layer and an in-memory implementation.

The hosted backend is reached through these protocols only; the
in-memory store backs the CLI (loaded from CSV) and the test suite.
"""
import uuid
from dataclasses import replace
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence

from shiftgen.engine.expansion import sort_templates
from shiftgen.errors import PersistenceError, ValidationError
from shiftgen.models.rules import RULES
from shiftgen.models.schedule import Shift
from shiftgen.models.template import (
    Location,
    ShiftTemplate,
    StaffMember,
    TemplateMaster,
    default_template_name,
)
from shiftgen.utils.logging_setup import get_logger

logger = get_logger("shiftgen.data.sources")

REQUIRED_ROW_FIELDS = ("date", "start_time", "end_time", "location_id")


class TemplateSource(Protocol):
    def fetch_template_masters(self) -> List[TemplateMaster]: ...

    def fetch_templates(self, location_id: str, version: int) -> List[ShiftTemplate]: ...


class ShiftSource(Protocol):
    def fetch_shifts(
        self,
        start: date,
        end: Optional[date] = None,
        location_id: Optional[str] = None,
    ) -> List[Shift]: ...


class ShiftSink(Protocol):
    def create_shifts(self, rows: Sequence[Dict[str, Any]]) -> List[Shift]: ...


class ReferenceData(Protocol):
    def fetch_locations(self) -> List[Location]: ...

    def fetch_staff(self) -> List[StaffMember]: ...


def _new_id() -> str:
    return str(uuid.uuid4())


class InMemoryStore:
    """Implements every data-layer protocol over plain lists."""

    def __init__(
        self,
        locations: Iterable[Location] = (),
        staff: Iterable[StaffMember] = (),
        templates: Iterable[ShiftTemplate] = (),
        shifts: Iterable[Shift] = (),
    ):
        self.locations: Dict[str, Location] = {loc.id: loc for loc in locations}
        self.staff: Dict[str, StaffMember] = {s.id: s for s in staff}
        self.templates: List[ShiftTemplate] = list(templates)
        self.shifts: List[Shift] = list(shifts)

    # -- reference data ---------------------------------------------------

    def fetch_locations(self) -> List[Location]:
        return sorted(self.locations.values(), key=lambda loc: loc.name)

    def fetch_staff(self, roles: Optional[Sequence[str]] = None) -> List[StaffMember]:
        """Staff whose role may be put on the rota, ordered by first name."""
        allowed = set(RULES.schedulable_roles if roles is None else roles)
        members = [s for s in self.staff.values() if s.role in allowed]
        return sorted(members, key=lambda s: s.first_name)

    # -- templates ----------------------------------------------------------

    def fetch_template_masters(self) -> List[TemplateMaster]:
        """Distinct (location, version) sets, newest version first per location."""
        seen = {}
        for t in self.templates:
            key = (t.location_id, t.version)
            if key not in seen:
                location = self.locations.get(t.location_id)
                seen[key] = TemplateMaster(
                    location_id=t.location_id,
                    version=t.version,
                    location_name=location.name if location else "",
                )
        return sorted(seen.values(), key=lambda m: (m.location_id, -m.version))

    def fetch_templates(self, location_id: str, version: int) -> List[ShiftTemplate]:
        """Templates of one set, Monday first, with employee names joined in."""
        if not location_id or version is None:
            raise ValidationError("Invalid location ID or version")
        matching = []
        for t in self.templates:
            if t.location_id != location_id or t.version != int(version):
                continue
            member = self.staff.get(t.employee_id) if t.employee_id else None
            if member and not t.employee_name:
                t = replace(t, employee_name=member.full_name)
            matching.append(t)
        logger.debug("Fetched %d templates for %s v%s", len(matching), location_id, version)
        return sort_templates(matching)

    def next_version(self, location_id: str) -> int:
        versions = [t.version for t in self.templates if t.location_id == location_id]
        return max(versions, default=0) + 1

    def new_template_version(self, location_id: str) -> int:
        """Reserve the next version number; the set appears once a template is added."""
        self._check_location(location_id)
        return self.next_version(location_id)

    def _check_location(self, location_id: str) -> None:
        if not location_id:
            raise ValidationError("Please select a location.")
        if self.locations and location_id not in self.locations:
            raise ValidationError(f"Unknown location: {location_id}")

    def _template_index(self, template_id: str) -> int:
        for i, t in enumerate(self.templates):
            if t.id == template_id:
                return i
        raise ValidationError(f"Unknown shift template: {template_id}")

    def get_template(self, template_id: str) -> ShiftTemplate:
        return self.templates[self._template_index(template_id)]

    def create_template(self, template: ShiftTemplate) -> ShiftTemplate:
        """Add one template to its set, naming it after its day and hours when unnamed."""
        self._check_location(template.location_id)
        if template.end_time <= template.start_time:
            raise ValidationError("End time must be after start time")
        created = replace(
            template,
            id=template.id or _new_id(),
            name=template.name or default_template_name(template),
        )
        if any(t.id == created.id for t in self.templates):
            raise ValidationError(f"Shift template already exists: {created.id}")
        self.templates.append(created)
        logger.info(
            "Added template %s to %s v%d", created.id, created.location_id, created.version
        )
        return created

    def update_template(self, template_id: str, **changes: Any) -> ShiftTemplate:
        """Edit fields of one template; its id and set membership stay fixed."""
        fixed = {"id", "version"} & set(changes)
        if fixed:
            raise ValidationError(f"Cannot change {', '.join(sorted(fixed))} of a template")
        index = self._template_index(template_id)
        if "location_id" in changes:
            self._check_location(changes["location_id"])
        values = {**self.templates[index].to_dict(), **changes}
        updated = ShiftTemplate.from_dict(values)
        if updated.end_time <= updated.start_time:
            raise ValidationError("End time must be after start time")
        self.templates[index] = updated
        logger.info("Updated template %s", template_id)
        return updated

    def delete_template(self, template_id: str) -> None:
        del self.templates[self._template_index(template_id)]
        logger.info("Deleted template %s", template_id)

    def clone_template(self, template_id: str) -> ShiftTemplate:
        """Copy one template within its own set."""
        source = self.get_template(template_id)
        copy = replace(
            source,
            id=_new_id(),
            name=f"Copy of {source.name or default_template_name(source)}",
        )
        self.templates.append(copy)
        return copy

    def delete_template_set(self, location_id: str, version: int) -> int:
        """Remove every template of one (location, version) set."""
        kept = [
            t for t in self.templates
            if not (t.location_id == location_id and t.version == int(version))
        ]
        removed = len(self.templates) - len(kept)
        if not removed:
            raise ValidationError(f"No templates in version {version} of {location_id}")
        self.templates = kept
        logger.info("Deleted %s v%s (%d templates)", location_id, version, removed)
        return removed

    def clone_template_version(
        self, source_location_id: str, version: int, target_location_id: Optional[str] = None
    ) -> int:
        """
        Copy a template set, possibly to another location.

        The copy becomes the next free version at the target location.
        Returns that version number.
        """
        target = target_location_id or source_location_id
        self._check_location(target)
        source = self.fetch_templates(source_location_id, version)
        if not source:
            raise ValidationError(f"No templates in version {version} of {source_location_id}")
        new_version = self.next_version(target)
        self.templates.extend(
            replace(t, id=_new_id(), location_id=target, version=new_version)
            for t in source
        )
        logger.info(
            "Cloned %d templates %s v%d -> %s v%d",
            len(source), source_location_id, version, target, new_version,
        )
        return new_version

    # -- shifts ---------------------------------------------------------------

    def fetch_shifts(
        self,
        start: date,
        end: Optional[date] = None,
        location_id: Optional[str] = None,
    ) -> List[Shift]:
        """Shifts on ``start`` (or within ``start``..``end``), ordered by date."""
        end = end or start
        found = [
            s for s in self.shifts
            if start <= s.date <= end and (location_id is None or s.location_id == location_id)
        ]
        return sorted(found, key=lambda s: (s.date, s.start_time))

    def _check_row(self, index: int, row: Dict[str, Any]) -> Shift:
        missing = [f for f in REQUIRED_ROW_FIELDS if not row.get(f)]
        if missing:
            raise PersistenceError(f"Row {index}: missing {', '.join(missing)}")
        if self.locations and row["location_id"] not in self.locations:
            raise PersistenceError(f"Row {index}: unknown location {row['location_id']}")
        try:
            shift = Shift.from_dict({**row, "id": row.get("id") or _new_id()})
        except (ValidationError, KeyError) as exc:
            raise PersistenceError(f"Row {index}: {exc}") from exc
        if shift.end_time <= shift.start_time:
            raise PersistenceError(f"Row {index}: end_time must be after start_time")
        return shift

    def create_shifts(self, rows: Sequence[Dict[str, Any]]) -> List[Shift]:
        """Insert all rows or none of them."""
        created = [self._check_row(i, row) for i, row in enumerate(rows)]
        self.shifts.extend(created)
        logger.info("Inserted %d shifts", len(created))
        return created
