"""Logging for feedwatch.

Every module logs through a child of the ``feedwatch`` logger. Records go to
stderr (stdout carries command output) as either a readable line or one JSON
object per line, selected by ``LOG_FORMAT``. Structured fields such as the
feed URL or article count are attached with :func:`log_fields` and appear as
top-level keys in JSON output.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, TextIO

from feedwatch.config import get_config

ROOT_LOGGER = "feedwatch"

# Attribute carrying structured fields on a LogRecord
FIELDS_ATTR = "fields"


class JSONFormatter(logging.Formatter):
    """One JSON object per record, structured fields merged at top level."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Structured fields never overwrite the core keys
        fields = getattr(record, FIELDS_ATTR, None) or {}
        for key, value in fields.items():
            log_data.setdefault(key, value)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class SimpleFormatter(logging.Formatter):
    """Readable line; structured fields appended as key=value."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = getattr(record, FIELDS_ATTR, None)
        if fields:
            line += " | " + " ".join(f"{k}={v}" for k, v in fields.items())
        return line


_initialized = False


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    stream: TextIO | None = None,
) -> None:
    """Attach a single handler to the ``feedwatch`` logger.

    Args:
        level: Log level name. Defaults to ``LOG_LEVEL`` (WARNING).
        format_type: 'json' or 'simple'. Defaults to ``LOG_FORMAT``.
        stream: Where records are written. Defaults to stderr.
    """
    global _initialized
    if _initialized:
        return

    config = get_config()
    level = level or config.logging.level
    format_type = format_type or config.logging.format
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(JSONFormatter() if format_type == "json" else SimpleFormatter())
    root_logger.addHandler(handler)

    # Propagate so pytest's caplog sees records
    root_logger.propagate = True

    _initialized = True


def get_logger(name: str) -> logging.Logger:
    """Child logger ``feedwatch.<name>``; already-prefixed names pass through."""
    setup_logging()

    if name == ROOT_LOGGER or name.startswith(f"{ROOT_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def log_fields(
    logger: logging.Logger, level: int, msg: str, *args: Any, **fields: Any
) -> None:
    """Log ``msg`` with structured fields attached to the record.

    Example::

        log_fields(logger, logging.INFO, "Fetched feed", url=url, articles=10)
    """
    logger.log(level, msg, *args, extra={FIELDS_ATTR: fields})


def reset_logging() -> None:
    """Drop the handler so the next setup_logging() call reconfigures."""
    global _initialized
    _initialized = False
    logging.getLogger(ROOT_LOGGER).handlers.clear()
