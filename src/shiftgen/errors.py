"""Exception hierarchy for shift generation."""


class ShiftgenError(Exception):
    """Base class for all shiftgen errors."""


class ValidationError(ShiftgenError, ValueError):
    """Raised when input records or request parameters are invalid."""


class PersistenceError(ShiftgenError):
    """Raised when a data source or sink fails."""
