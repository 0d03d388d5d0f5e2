"""
Pydantic Validated Models
=========================
Strict validation for requests arriving at the generation boundary.

Usage:
    from shiftgen.models.validated import GenerateShiftsRequest

    request = GenerateShiftsRequest.parse(
        location_id="loc-1", version=2, start_date="2024-06-05", weeks=2
    )
"""
from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from shiftgen.errors import ValidationError

from .rules import RULES


def _to_validation_error(exc: PydanticValidationError) -> ValidationError:
    messages = [
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    ]
    return ValidationError("; ".join(messages))


class _ParsedModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    @classmethod
    def parse(cls, **values):
        """Build the model, raising shiftgen's ValidationError on bad input."""
        try:
            return cls(**values)
        except PydanticValidationError as exc:
            raise _to_validation_error(exc) from exc


class TemplateSetSelection(_ParsedModel):
    """First workflow step: which (location, version) to expand."""

    location_id: str = Field(min_length=1, description="Location of the template set")
    version: int = Field(gt=0, description="Template set version")

    @field_validator("location_id")
    @classmethod
    def validate_location(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Please select a location.")
        return v


class GenerateShiftsRequest(TemplateSetSelection):
    """Template set, start date and horizon chosen by the user."""

    start_date: date = Field(description="Week-0 anchor date")
    weeks: int = Field(default=RULES.default_weeks, ge=1, le=RULES.max_weeks)
