# shiftgen/forms - Typed form submission values
from .values import FieldType, FieldValue, resolve_submission, resolve_value

__all__ = ["FieldType", "FieldValue", "resolve_value", "resolve_submission"]
