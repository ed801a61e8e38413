"""Root logging setup for the CLI and structured log fields."""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, TextIO

from infomodels.constants.reporting import ANSI_RESET, LOG_LEVEL_COLORS

FIELDS_ATTR = "fields"
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def log_fields(**fields: Any) -> dict[str, dict[str, Any]]:
    """Build an ``extra`` mapping carrying structured fields for one record."""
    return {FIELDS_ATTR: fields}


def _record_fields(record: logging.LogRecord) -> dict[str, Any]:
    return getattr(record, FIELDS_ATTR, None) or {}


class JsonFormatter(logging.Formatter):
    """One compact JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
            **_record_fields(record),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, sort_keys=True)


class TextFormatter(logging.Formatter):
    """Plain text with ``key=value`` fields appended."""

    def __init__(self) -> None:
        super().__init__(_TEXT_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = _record_fields(record)
        if fields:
            line += " " + " ".join(f"{key}={value}" for key, value in sorted(fields.items()))
        return line


class TtyFormatter(TextFormatter):
    """Text output with the level name coloured for terminals."""

    def format(self, record: logging.LogRecord) -> str:
        color = LOG_LEVEL_COLORS.get(record.levelname)
        if color is None:
            return super().format(record)
        original = record.levelname
        record.levelname = f"{color}{original}{ANSI_RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


_FORMATTERS: dict[str, type[logging.Formatter]] = {
    "json": JsonFormatter,
    "text": TextFormatter,
    "tty": TtyFormatter,
}


def default_log_format(stream: TextIO | None = None) -> str:
    stream = stream or sys.stderr
    return "tty" if stream.isatty() else "json"


def configure_logging(level: str, fmt: str = "", stream: TextIO | None = None) -> logging.Handler:
    """Install one stderr handler on the root logger, replacing earlier ones."""
    stream = stream or sys.stderr
    handler = logging.StreamHandler(stream)
    handler.setFormatter(_FORMATTERS[fmt or default_log_format(stream)]())
    logging.basicConfig(level=level, handlers=[handler], force=True)
    return handler
