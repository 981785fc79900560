"""Logging setup for the agentstory CLI.

Key Components:
    - StoryLogFormatter: human-readable console lines
    - JsonLinesFormatter: one JSON object per line, for log files
    - setup_cli_logging: attach handlers to the ``agentstory`` logger
    - reset_cli_logging: detach them again (used by tests)

Console Format:
    [2026-10-18 10:15:32] [DEBUG] [VALIDATOR] Validated story: valid=True errors=0 warnings=1

JSON Lines Format:
    {"timestamp":"2026-10-18T10:15:32.123456+00:00","level":"DEBUG","component":"VALIDATOR","logger":"agentstory.validation.validator","message":"..."}
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union


# =============================================================================
# Constants
# =============================================================================

ROOT_LOGGER_NAME = "agentstory"

# Max log file size (10MB)
CLI_LOG_MAX_BYTES = 10 * 1024 * 1024

# Number of backup files to keep
CLI_LOG_BACKUP_COUNT = 5

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


# =============================================================================
# Formatters
# =============================================================================


class StoryLogFormatter(logging.Formatter):
    """Console formatter with a component column.

    Format:
        [TIMESTAMP] [LEVEL] [COMPONENT] Message

    The component defaults to the last segment of the logger name, upper
    cased, and can be overridden with ``extra={"component": ...}``.
    """

    STANDARD_FORMAT = "[%(asctime)s] [%(levelname)s] [%(component)s] %(message)s"
    DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

    def __init__(self) -> None:
        super().__init__(fmt=self.STANDARD_FORMAT, datefmt=self.DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "component"):
            record.component = record.name.split(".")[-1].upper()
        return super().format(record)


class JsonLinesFormatter(logging.Formatter):
    """JSON Lines formatter for machine parsing.

    Example:
        >>> handler = logging.FileHandler("agentstory.log")
        >>> handler.setFormatter(JsonLinesFormatter())
        >>> logger.info("Exported", extra={"command": "export", "adapter_ids": ["claude"]})
    """

    OPTIONAL_FIELDS = ("command", "path", "adapter_ids", "error_count", "warning_count", "duration_ms")

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "component": getattr(record, "component", record.name.split(".")[-1].upper()),
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field_name in self.OPTIONAL_FIELDS:
            value = getattr(record, field_name, None)
            if value is not None:
                if isinstance(value, float):
                    value = round(value, 2)
                entry[field_name] = value

        if record.exc_info:
            entry["error_type"] = record.exc_info[0].__name__ if record.exc_info[0] else None
            entry["error"] = self.formatException(record.exc_info)

        return json.dumps(entry, separators=(",", ":"), default=str)


# =============================================================================
# Setup
# =============================================================================

_cli_logger: Optional[logging.Logger] = None


def setup_cli_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Path] = None,
    max_bytes: int = CLI_LOG_MAX_BYTES,
    backup_count: int = CLI_LOG_BACKUP_COUNT,
) -> logging.Logger:
    """Configure the ``agentstory`` logger for a CLI run.

    Creates a logger with:
    - a stderr handler using StoryLogFormatter
    - when ``log_file`` is given, a RotatingFileHandler with JSON Lines
      output (10MB, 5 backups by default)

    Calling it again returns the already configured logger.

    Args:
        level: Logging level, as int or name ("DEBUG").
        log_file: Optional JSON Lines log file.
        max_bytes: Max size before rotation.
        backup_count: Number of rotated files to keep.

    Returns:
        The configured ``agentstory`` logger.
    """
    global _cli_logger

    if _cli_logger is not None:
        return _cli_logger

    if isinstance(level, str):
        level = LOG_LEVELS.get(level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(StoryLogFormatter())
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            filename=log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(JsonLinesFormatter())
        logger.addHandler(file_handler)

    logger.propagate = False

    _cli_logger = logger
    return logger


def reset_cli_logging() -> None:
    """Reset CLI logging (for testing)."""
    global _cli_logger
    if _cli_logger:
        for handler in _cli_logger.handlers:
            handler.close()
        _cli_logger.handlers.clear()
        _cli_logger.propagate = True
    _cli_logger = None


__all__ = [
    "CLI_LOG_MAX_BYTES",
    "CLI_LOG_BACKUP_COUNT",
    "StoryLogFormatter",
    "JsonLinesFormatter",
    "setup_cli_logging",
    "reset_cli_logging",
]
