"""Utilities package for shiftgen."""
from .logging_setup import (
    TRACE,
    PhaseLogger,
    get_logger,
    log_function_call,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "log_function_call",
    "PhaseLogger",
    "TRACE",
]
