"""
Generation Flow
===============
The three-step "add shifts from template" workflow::

    FORM -> DATE_RANGE -> PREVIEW

FORM picks a template set, DATE_RANGE picks the start date and number of
weeks, PREVIEW holds editable rows until a single bulk confirm. Errors
are recorded as notifications for the caller to display; the flow never
lets them escape.
"""
from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import List, Optional

from shiftgen.data.requests import RequestGeneration, RequestToken
from shiftgen.engine.expansion import start_date_options
from shiftgen.errors import ShiftgenError
from shiftgen.models.schedule import ShiftInstance, ShiftPreview, parse_date
from shiftgen.models.shift import DayOfWeek, parse_time
from shiftgen.models.template import ShiftTemplate
from shiftgen.models.validated import GenerateShiftsRequest, TemplateSetSelection
from shiftgen.utils.logging_setup import get_logger

from .shift_service import ShiftService

logger = get_logger("shiftgen.services.generation_flow")

EDITABLE_FIELDS = ("date", "start_time", "end_time", "employee_id", "employee_name")


class Step(str, Enum):
    FORM = "form"
    DATE_RANGE = "date-range"
    PREVIEW = "preview"


@dataclass(frozen=True)
class Notification:
    level: str  # info, success, warning, error
    title: str
    message: str = ""


class GenerationFlow:
    """State holder for one user's pass through the workflow."""

    def __init__(self, service: ShiftService):
        self.service = service
        self.step = Step.FORM
        self.selection: Optional[TemplateSetSelection] = None
        self.templates: List[ShiftTemplate] = []
        self.request: Optional[GenerateShiftsRequest] = None
        self.preview: Optional[ShiftPreview] = None
        self.notifications: List[Notification] = []
        self.requests = RequestGeneration()

    # -- notifications ----------------------------------------------------

    def _notify(self, level: str, title: str, message: str = "") -> None:
        self.notifications.append(Notification(level, title, message))
        log = logger.error if level == "error" else logger.info
        log("%s: %s %s", level, title, message)

    def pop_notifications(self) -> List[Notification]:
        pending, self.notifications = self.notifications, []
        return pending

    # -- step transitions ---------------------------------------------------

    def select_template_set(self, location_id: str, version: int) -> bool:
        """FORM -> DATE_RANGE once the set exists and has templates."""
        try:
            selection = TemplateSetSelection.parse(location_id=location_id, version=version)
            templates = self.service.templates_for(selection.location_id, selection.version)
        except ShiftgenError as exc:
            self._notify("error", "Could not load templates", str(exc))
            return False
        if not templates:
            self._notify("error", "No templates found", "The selected version has no templates.")
            return False

        self.selection = selection
        self.templates = templates
        self.step = Step.DATE_RANGE
        return True

    def select_dates(self, start_date, weeks: int) -> bool:
        """Record the horizon; stays in DATE_RANGE until a preview is built."""
        if self.step is Step.FORM or self.selection is None:
            self._notify("error", "Select a template set first")
            return False
        try:
            self.request = GenerateShiftsRequest.parse(
                location_id=self.selection.location_id,
                version=self.selection.version,
                start_date=start_date,
                weeks=weeks,
            )
        except ShiftgenError as exc:
            self._notify("error", "Invalid date range", str(exc))
            return False
        return True

    def request_preview(self) -> RequestToken:
        """Start a preview request; any earlier outstanding one becomes stale."""
        return self.requests.begin("preview")

    def complete_preview(self, token: RequestToken, preview: ShiftPreview) -> bool:
        """Apply a preview response unless a newer request superseded it."""
        if not self.requests.is_current(token):
            logger.debug("Dropping stale preview response (generation %d)", token.generation)
            return False
        self.preview = preview
        self.step = Step.PREVIEW
        return True

    def build_preview(self) -> bool:
        """DATE_RANGE -> PREVIEW."""
        if self.request is None:
            self._notify("error", "Select a start date and number of weeks")
            return False
        token = self.request_preview()
        try:
            preview = self.service.generate_preview(self.request, self.templates)
        except ShiftgenError as exc:
            self._notify("error", "Failed to generate shifts preview", str(exc))
            return False
        if not self.complete_preview(token, preview):
            return False
        if preview.has_conflicts:
            self._notify(
                "warning", "Conflicts found",
                f"{preview.conflict_count} shifts overlap existing shifts",
            )
        return True

    def back(self) -> None:
        """Step back one stage, discarding the preview when leaving it."""
        self.requests.cancel()
        if self.step is Step.PREVIEW:
            self.preview = None
            self.step = Step.DATE_RANGE
        elif self.step is Step.DATE_RANGE:
            self.request = None
            self.step = Step.FORM

    def reset(self) -> None:
        self.requests.cancel()
        self.step = Step.FORM
        self.selection = None
        self.templates = []
        self.request = None
        self.preview = None

    # -- preview rows ---------------------------------------------------------

    def _rows(self) -> List[ShiftInstance]:
        if self.step is not Step.PREVIEW or self.preview is None:
            raise ShiftgenError("No preview to edit")
        return self.preview.rows

    def _row_error(self, title: str, exc: Exception) -> bool:
        if isinstance(exc, IndexError):
            exc = ShiftgenError("No such shift in the preview")
        self._notify("error", title, str(exc))
        return False

    def edit_row(self, index: int, **changes) -> bool:
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            self._notify("error", "Cannot edit shift", f"Unknown fields: {', '.join(sorted(unknown))}")
            return False
        try:
            rows = self._rows()
            current = rows[index]
            if "date" in changes:
                changes["date"] = parse_date(changes["date"])
                changes["day_of_week"] = DayOfWeek.from_date(changes["date"])
            for key in ("start_time", "end_time"):
                if key in changes:
                    changes[key] = parse_time(changes[key])
            if "employee_id" in changes:
                changes["employee_id"] = changes["employee_id"] or None
                changes.setdefault("employee_name", "")
            edited = self.service.recheck(replace(current, **changes))
        except (ShiftgenError, IndexError) as exc:
            return self._row_error("Cannot edit shift", exc)
        rows[index] = edited
        return True

    def delete_row(self, index: int) -> bool:
        try:
            rows = self._rows()
            del rows[index]
        except (ShiftgenError, IndexError) as exc:
            return self._row_error("Cannot delete shift", exc)
        return True

    def duplicate_row(self, index: int) -> bool:
        try:
            rows = self._rows()
            rows.insert(index + 1, rows[index])
        except (ShiftgenError, IndexError) as exc:
            return self._row_error("Cannot duplicate shift", exc)
        return True

    # -- commit ------------------------------------------------------------------

    def confirm(self) -> bool:
        """Bulk-insert every previewed row; stays in PREVIEW on failure."""
        try:
            rows = self._rows()
            created = self.service.create_shifts(rows)
        except ShiftgenError as exc:
            self._notify("error", "Failed to create shifts", str(exc))
            return False
        self._notify("success", "Shifts created", f"{len(created)} shifts have been created")
        self.reset()
        return True

    def available_start_dates(self, today: Optional[date] = None) -> List[date]:
        return start_date_options(self.templates, today or date.today())
