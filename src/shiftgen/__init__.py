"""shiftgen - weekly shift templates expanded into dated rota shifts."""
from .engine import detect_conflicts, expand, format_for_persistence
from .errors import PersistenceError, ShiftgenError, ValidationError

__version__ = "0.1.0"

__all__ = [
    "expand",
    "detect_conflicts",
    "format_for_persistence",
    "ShiftgenError",
    "ValidationError",
    "PersistenceError",
]
