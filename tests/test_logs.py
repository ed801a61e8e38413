"""Tests for logging setup and formatters."""

from __future__ import annotations

import io
import json
import logging

from infomodels.constants.reporting import ANSI_RESET, ANSI_YELLOW
from infomodels.logs import JsonFormatter, TextFormatter, TtyFormatter, configure_logging, log_fields


def _record(level: int = logging.INFO, **extra: object) -> logging.LogRecord:
    record = logging.LogRecord("infomodels.test", level, __file__, 1, "loaded %d rows", (3,), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_fields() -> None:
    payload = json.loads(JsonFormatter().format(_record(**log_fields(table="person"))))

    assert payload["message"] == "loaded 3 rows"
    assert payload["level"] == "info"
    assert payload["logger"] == "infomodels.test"
    assert payload["table"] == "person"
    assert "time" in payload


def test_text_formatter_appends_sorted_fields() -> None:
    line = TextFormatter().format(_record(**log_fields(z="1", a="2")))

    assert line.endswith("INFO infomodels.test: loaded 3 rows a=2 z=1")


def test_tty_formatter_colors_level_without_mutating_record() -> None:
    record = _record(logging.WARNING)

    line = TtyFormatter().format(record)

    assert f"{ANSI_YELLOW}WARNING{ANSI_RESET}" in line
    assert record.levelname == "WARNING"


def test_configure_logging_defaults_to_json_off_terminal() -> None:
    stream = io.StringIO()

    handler = configure_logging("DEBUG", stream=stream)
    logging.getLogger("infomodels.test").debug("hello", extra=log_fields(step=1))

    assert isinstance(handler.formatter, JsonFormatter)
    assert logging.getLogger().level == logging.DEBUG
    payload = json.loads(stream.getvalue().strip())
    assert payload["message"] == "hello"
    assert payload["step"] == 1


def test_configure_logging_honours_explicit_format() -> None:
    stream = io.StringIO()

    handler = configure_logging("INFO", "text", stream=stream)
    logging.getLogger("infomodels.test").debug("hidden")

    assert isinstance(handler.formatter, TextFormatter)
    assert stream.getvalue() == ""
