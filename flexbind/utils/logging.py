"""Logging for flexbind.

Every library logger lives under the ``flexbind`` namespace. Nothing is
emitted above DEBUG during normal operation, so applications only see
flexbind output after calling :func:`configure_logging` or enabling the
namespace themselves.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any, Final

from flexbind._serialization import encode_json

if TYPE_CHECKING:
    from logging import LogRecord

__all__ = ("ROOT_LOGGER_NAME", "StructuredFormatter", "configure_logging", "get_logger", "log_with_context")

ROOT_LOGGER_NAME: Final = "flexbind"
SIMPLE_FORMAT: Final = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, including fields passed to :func:`log_with_context`."""

    def format(self, record: LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(getattr(record, "extra_fields", {}))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return encode_json(entry)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``flexbind.<name>``, or the ``flexbind`` logger itself when ``name`` is None."""
    if name is None:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(
    level: str = "INFO",
    format_style: str = "structured",
    log_to_file: str | None = None,
    extra_handlers: list[logging.Handler] | None = None,
) -> logging.Logger:
    """Send flexbind records to stdout (and optionally a file) instead of the root logger.

    Args:
        level: Level name for the ``flexbind`` namespace.
        format_style: ``"structured"`` for JSON lines, anything else for plain text.
        log_to_file: Path of a file that receives JSON lines as well.
        extra_handlers: Handlers attached as given.

    Returns:
        The ``flexbind`` logger.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level.upper())
    logger.handlers.clear()

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(StructuredFormatter() if format_style == "structured" else logging.Formatter(SIMPLE_FORMAT))
    logger.addHandler(console)

    if log_to_file:
        file_handler = logging.FileHandler(log_to_file)
        file_handler.setFormatter(StructuredFormatter())
        logger.addHandler(file_handler)

    for handler in extra_handlers or ():
        logger.addHandler(handler)

    logger.propagate = False
    return logger


def log_with_context(logger: logging.Logger, level: int, message: str, **extra_fields: Any) -> None:
    """Log ``message`` with ``extra_fields`` attached for :class:`StructuredFormatter`."""
    if logger.isEnabledFor(level):
        logger.log(level, message, extra={"extra_fields": extra_fields}, stacklevel=2)
