"""
Form Submission Values
======================
Submitted values are typed by the field's declared type when they are
written, so readers never have to guess whether a string is a URL or a
date.
"""
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, Union
from urllib.parse import urlparse

from shiftgen.errors import ValidationError
from shiftgen.models.schedule import parse_date


class FieldType(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    URL = "url"
    CHECKBOX = "checkbox"
    FILE = "file"


@dataclass(frozen=True)
class TextValue:
    value: str
    kind = FieldType.TEXT

    def to_storage(self) -> Any:
        return self.value


@dataclass(frozen=True)
class NumberValue:
    value: float
    kind = FieldType.NUMBER

    def to_storage(self) -> Any:
        return int(self.value) if float(self.value).is_integer() else self.value


@dataclass(frozen=True)
class DateValue:
    value: date
    kind = FieldType.DATE

    def to_storage(self) -> Any:
        return self.value.isoformat()


@dataclass(frozen=True)
class UrlValue:
    value: str
    kind = FieldType.URL

    def to_storage(self) -> Any:
        return self.value


@dataclass(frozen=True)
class BooleanValue:
    value: bool
    kind = FieldType.CHECKBOX

    def to_storage(self) -> Any:
        return self.value


@dataclass(frozen=True)
class FileValue:
    """Reference to an uploaded file (its storage path or URL)."""
    path: str
    kind = FieldType.FILE

    def to_storage(self) -> Any:
        return self.path


FieldValue = Union[TextValue, NumberValue, DateValue, UrlValue, BooleanValue, FileValue]


def _text(raw: Any) -> TextValue:
    return TextValue("" if raw is None else str(raw))


def _number(raw: Any) -> NumberValue:
    if isinstance(raw, bool):
        raise ValidationError(f"Expected a number, got {raw!r}")
    try:
        return NumberValue(float(raw))
    except (TypeError, ValueError):
        raise ValidationError(f"Expected a number, got {raw!r}") from None


def _date(raw: Any) -> DateValue:
    return DateValue(parse_date(raw))


def _url(raw: Any) -> UrlValue:
    text = str(raw or "").strip()
    parsed = urlparse(text)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError(f"Expected an http(s) URL, got {raw!r}")
    return UrlValue(text)


def _boolean(raw: Any) -> BooleanValue:
    if isinstance(raw, bool):
        return BooleanValue(raw)
    if isinstance(raw, (int, float)):
        return BooleanValue(raw != 0)
    if isinstance(raw, str) and raw.strip().lower() in ("1", "true", "yes", "on", "0", "false", "no", "off", ""):
        return BooleanValue(raw.strip().lower() in ("1", "true", "yes", "on"))
    raise ValidationError(f"Expected a checkbox value, got {raw!r}")


def _file(raw: Any) -> FileValue:
    text = str(raw or "").strip()
    if not text:
        raise ValidationError("Expected an uploaded file reference")
    return FileValue(text)


_RESOLVERS = {
    FieldType.TEXT: _text,
    FieldType.NUMBER: _number,
    FieldType.DATE: _date,
    FieldType.URL: _url,
    FieldType.CHECKBOX: _boolean,
    FieldType.FILE: _file,
}


def resolve_value(field_type: Union[str, FieldType], raw: Any) -> FieldValue:
    """Type ``raw`` according to the declared ``field_type``."""
    try:
        kind = FieldType(field_type)
    except ValueError:
        raise ValidationError(f"Unknown field type: {field_type!r}") from None
    return _RESOLVERS[kind](raw)


def resolve_submission(fields: Dict[str, Union[str, FieldType]], values: Dict[str, Any]) -> Dict[str, FieldValue]:
    """Type every submitted value by its field declaration; unknown fields are rejected."""
    unknown = set(values) - set(fields)
    if unknown:
        raise ValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")
    return {name: resolve_value(fields[name], raw) for name, raw in values.items()}
