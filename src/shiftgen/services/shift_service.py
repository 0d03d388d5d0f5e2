"""
Shift Service
=============
Composes the data layer with the expansion engine.

The service owns the cache of reference lists; anything that writes
through it invalidates the affected entries.
"""
from datetime import date
from typing import Any, Callable, List, Optional, Sequence, TypeVar

from shiftgen.data.cache import TTLCache
from shiftgen.data.sources import InMemoryStore
from shiftgen.engine.conflicts import detect_conflicts
from shiftgen.engine.date_range import expansion_range
from shiftgen.engine.expansion import expand, map_to_preview
from shiftgen.engine.formatting import format_for_persistence
from shiftgen.errors import PersistenceError, ShiftgenError, ValidationError
from shiftgen.models.config import GenerationConfig
from shiftgen.models.schedule import Shift, ShiftInstance, ShiftPreview
from shiftgen.models.template import Location, ShiftTemplate, StaffMember, TemplateMaster
from shiftgen.models.validated import GenerateShiftsRequest
from shiftgen.utils.logging_setup import PhaseLogger, get_logger

logger = get_logger("shiftgen.services.shift_service")

T = TypeVar("T")

MASTERS_KEY = "template_masters"
LOCATIONS_KEY = "locations"
STAFF_KEY = "staff"


class ShiftService:
    """Fetches, previews and persists generated shifts."""

    def __init__(
        self,
        store: InMemoryStore,
        cache: Optional[TTLCache] = None,
        config: Optional[GenerationConfig] = None,
    ):
        self.store = store
        self.config = config if config is not None else GenerationConfig()
        if cache is None:
            cache = TTLCache(ttl_seconds=self.config.cache_ttl_seconds)
        self.cache = cache
        self.log = PhaseLogger("shiftgen.services")

    def _call(self, what: str, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run a data-layer call, reporting backend failures as PersistenceError."""
        try:
            return fn(*args, **kwargs)
        except ShiftgenError:
            raise
        except Exception as exc:
            logger.error("Error %s: %s", what, exc)
            raise PersistenceError(f"Error {what}: {exc}") from exc

    # -- reference lists (cached) ------------------------------------------

    def locations(self) -> List[Location]:
        return self.cache.get_or_load(
            LOCATIONS_KEY, lambda: self._call("fetching locations", self.store.fetch_locations)
        )

    def staff(self) -> List[StaffMember]:
        return self.cache.get_or_load(
            STAFF_KEY, lambda: self._call("fetching staff members", self.store.fetch_staff)
        )

    def template_masters(self) -> List[TemplateMaster]:
        return self.cache.get_or_load(
            MASTERS_KEY,
            lambda: self._call("fetching template masters", self.store.fetch_template_masters),
        )

    def versions_for_location(self, location_id: str) -> List[int]:
        return [m.version for m in self.template_masters() if m.location_id == location_id]

    # -- templates -------------------------------------------------------------

    def templates_for(self, location_id: str, version: int) -> List[ShiftTemplate]:
        return self._call(
            "fetching templates", self.store.fetch_templates, location_id, version
        )

    def clone_template_version(
        self, source_location_id: str, version: int, target_location_id: Optional[str] = None
    ) -> int:
        new_version = self._call(
            "cloning template version",
            self.store.clone_template_version,
            source_location_id, version, target_location_id,
        )
        self.cache.invalidate(MASTERS_KEY)
        return new_version

    def new_template_version(self, location_id: str) -> int:
        return self._call("creating template version", self.store.new_template_version, location_id)

    def delete_template_set(self, location_id: str, version: int) -> int:
        removed = self._call(
            "deleting template version", self.store.delete_template_set, location_id, version
        )
        self.cache.invalidate(MASTERS_KEY)
        return removed

    def create_template(self, template: ShiftTemplate) -> ShiftTemplate:
        created = self._call("adding shift template", self.store.create_template, template)
        self.cache.invalidate(MASTERS_KEY)
        return created

    def update_template(self, template_id: str, **changes: Any) -> ShiftTemplate:
        updated = self._call(
            "updating shift template", self.store.update_template, template_id, **changes
        )
        self.cache.invalidate(MASTERS_KEY)
        return updated

    def delete_template(self, template_id: str) -> None:
        self._call("deleting shift template", self.store.delete_template, template_id)
        self.cache.invalidate(MASTERS_KEY)

    def clone_template(self, template_id: str) -> ShiftTemplate:
        return self._call("cloning shift template", self.store.clone_template, template_id)

    # -- shifts ------------------------------------------------------------------

    def existing_shifts(
        self, start: date, end: Optional[date] = None, location_id: Optional[str] = None
    ) -> List[Shift]:
        return self._call("fetching shifts", self.store.fetch_shifts, start, end, location_id)

    def generate_preview(
        self,
        request: GenerateShiftsRequest,
        templates: Optional[Sequence[ShiftTemplate]] = None,
    ) -> ShiftPreview:
        """Expand the requested template set and flag conflicts with the rota."""
        self.log.phase("Preview")
        if templates is None:
            templates = self.templates_for(request.location_id, request.version)
        if not templates:
            raise ValidationError("No templates found for the selected version.")

        self.log.step(f"Expanding {len(templates)} templates over {request.weeks} weeks")
        instances = expand(templates, request.start_date, request.weeks)

        start, end = expansion_range(request.start_date, request.weeks)
        # Every location: an employee booked elsewhere that day still conflicts
        existing = self.existing_shifts(start, end)
        self.log.detail("existing shifts", len(existing))

        rows = detect_conflicts(instances, existing)
        rows = map_to_preview(rows, self.locations(), self.staff())
        preview = ShiftPreview(
            rows=rows,
            location_id=request.location_id,
            version=request.version,
            start_date=request.start_date,
            weeks=request.weeks,
        )
        self.log.step(f"Preview ready: {len(rows)} shifts, {preview.conflict_count} conflicts")
        return preview

    def recheck(self, instance: ShiftInstance) -> ShiftInstance:
        """Re-run conflict detection for a single edited row."""
        existing = self.existing_shifts(instance.date, instance.date)
        checked = detect_conflicts([instance], existing)
        return map_to_preview(checked, self.locations(), self.staff())[0]

    def create_shifts(self, instances: Sequence[ShiftInstance]) -> List[Shift]:
        """Persist previewed instances in a single bulk insert."""
        if not instances:
            raise ValidationError("There are no shifts to create.")
        rows = format_for_persistence(instances)
        self.log.step(f"Creating {len(rows)} shifts")
        created = self._call("creating shifts", self.store.create_shifts, rows)
        self.cache.invalidate()
        return created
