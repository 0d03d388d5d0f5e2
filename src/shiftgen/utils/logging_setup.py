"""
Shiftgen Logging Infrastructure
===============================
Multi-level logging with file rotation and function tracing.

Levels:
    TRACE (5): Function entry/exit with arguments
    DEBUG (10): Per-instance details, lookups
    INFO (20): Progress, counts
    WARNING (30): Conflicts, rejected input
    ERROR (40): Persistence failures, exceptions
"""
import logging
import functools
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional, Any, Callable


# Custom TRACE level (below DEBUG)
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

ROOT_LOGGER = "shiftgen"


class ColoredFormatter(logging.Formatter):
    """Formatter with ANSI colors for console output."""

    COLORS = {
        TRACE: "\033[90m",      # Gray
        logging.DEBUG: "\033[36m",     # Cyan
        logging.INFO: "\033[32m",      # Green
        logging.WARNING: "\033[33m",   # Yellow
        logging.ERROR: "\033[31m",     # Red
        logging.CRITICAL: "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, fmt=None, datefmt=None, stream=None):
        super().__init__(fmt, datefmt)
        self.stream = stream if stream is not None else sys.stderr

    def format(self, record):
        color = self.COLORS.get(record.levelno, "")
        message = super().format(record)
        isatty = getattr(self.stream, "isatty", None)
        if color and isatty is not None and isatty():
            return f"{color}{message}{self.RESET}"
        return message


def _parse_level(level: str) -> int:
    if level.upper() == "TRACE":
        return TRACE
    return getattr(logging, level.upper(), logging.INFO)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = "logs/shiftgen.log",
    console_level: Optional[str] = None,
    max_bytes: int = 5 * 1024 * 1024,  # 5 MB
    backup_count: int = 3,
) -> logging.Logger:
    """
    Configure application logging.

    Args:
        level: Minimum log level for file output
        log_file: Path to log file (None = no file logging)
        console_level: Console log level (defaults to level)
        max_bytes: Max size before rotation
        backup_count: Number of backup files to keep

    Returns:
        Root logger for the application
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(TRACE)  # Capture everything, handlers filter

    logger.handlers.clear()

    file_level = _parse_level(level)
    cons_level = _parse_level(console_level or level)

    # Console on stderr so JSON output on stdout stays clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(cons_level)
    console_handler.setFormatter(ColoredFormatter(
        "[%(asctime)s] %(levelname)-7s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=console_handler.stream,
    ))
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8"
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
        logger.addHandler(file_handler)

    logger.debug(
        "Logging initialized: console=%s, file=%s",
        logging.getLevelName(cons_level),
        logging.getLevelName(file_level) if log_file else "disabled",
    )
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Args:
        name: Module name (e.g., "shiftgen.engine")
    """
    return logging.getLogger(name)


def log_function_call(func: Callable) -> Callable:
    """
    Decorator to log function entry and exit with arguments.

    Usage:
        @log_function_call
        def expand(templates, start_date, weeks):
            ...
    """
    logger = logging.getLogger(f"{ROOT_LOGGER}.trace.{func.__module__}")

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        func_name = func.__name__

        args_str = ", ".join([repr(a)[:50] for a in args[:3]])
        kwargs_str = ", ".join([f"{k}={repr(v)[:30]}" for k, v in list(kwargs.items())[:3]])
        call_str = f"{args_str}, {kwargs_str}" if kwargs_str else args_str
        logger.log(TRACE, "-> %s(%s)", func_name, call_str)

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error("%s raised: %s: %s", func_name, type(e).__name__, e)
            raise
        logger.log(TRACE, "<- %s returned: %s", func_name, repr(result)[:100])
        return result

    return wrapper


class PhaseLogger:
    """Structured logger for multi-step operations (preview, confirm)."""

    def __init__(self, name: str = "shiftgen.services"):
        self.logger = logging.getLogger(name)

    def phase(self, name: str):
        """Log start of a major phase."""
        self.logger.info("%s %s %s", "=" * 10, name, "=" * 10)

    def step(self, description: str):
        """Log a step within a phase."""
        self.logger.info("> %s", description)

    def detail(self, key: str, value: Any):
        """Log a detail at DEBUG level."""
        self.logger.debug("  %s: %s", key, value)
