"""Environment and logging helpers."""

import logging
import os
import sys

from ..config import ENV_PREFIX, LOG_DATE_FORMAT, LOG_FORMAT

LOG_LEVEL_KEY = f"{ENV_PREFIX}LOG_LEVEL"
LOG_FILE_KEY = f"{ENV_PREFIX}LOG_FILE"


def setup_logging(level: int = logging.INFO, log_file: str | None = None) -> None:
    """Set up logging configuration.

    Logs go to stderr and, when ``log_file`` is given, to that file as well.

    Args:
        level: Logging level
        log_file: Path to log file (None to disable file logging)
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
            handlers.append(file_handler)
        except (OSError, PermissionError) as e:
            # Fall back to console-only if file logging fails
            print(f"Warning: Could not open log file '{log_file}': {e}", file=sys.stderr)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=handlers,
        force=True  # Replace any existing handlers
    )


def log_level_from_env(default: int = logging.INFO) -> int:
    """Read ``INSPECTION_COMPOSITE_LOG_LEVEL`` (name or number)."""
    value = os.getenv(LOG_LEVEL_KEY)
    if not value:
        return default
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else default


def setup_logging_from_env() -> None:
    """Configure logging from ``INSPECTION_COMPOSITE_LOG_*`` variables."""
    setup_logging(log_level_from_env(), os.getenv(LOG_FILE_KEY))
