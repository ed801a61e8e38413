"""Per-value checks and coercion for model field types."""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import TypeAlias

from infomodels.constants.models import BOOLEAN_FALSE_VALUES, BOOLEAN_TRUE_VALUES
from infomodels.constants.validation import (
    LENGTH_EXCEEDED,
    NOT_BOOLEAN,
    NOT_DATE,
    NOT_DATETIME,
    NOT_INTEGER,
    NOT_NUMBER,
    PADDED_VALUE,
    VALUE_REQUIRED,
)
from infomodels.datamodels import FieldDefinition
from infomodels.model import ErrorCode

_INTEGER_PATTERN = re.compile(r"[+-]?\d+")
_NUMBER_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

Coerced: TypeAlias = str | int | Decimal | bool | date | datetime | None

_TYPE_ERRORS: dict[str, ErrorCode] = {
    "integer": NOT_INTEGER,
    "number": NOT_NUMBER,
    "boolean": NOT_BOOLEAN,
    "date": NOT_DATE,
    "datetime": NOT_DATETIME,
}


def _parse_boolean(value: str) -> bool:
    lowered = value.lower()
    if lowered in BOOLEAN_TRUE_VALUES:
        return True
    if lowered in BOOLEAN_FALSE_VALUES:
        return False
    raise ValueError(f"not a boolean: {value!r}")


def _parse_integer(value: str) -> int:
    if not _INTEGER_PATTERN.fullmatch(value):
        raise ValueError(f"not an integer: {value!r}")
    return int(value)


def _parse_number(value: str) -> Decimal:
    if not _NUMBER_PATTERN.fullmatch(value):
        raise ValueError(f"not a number: {value!r}")
    try:
        return Decimal(value)
    except InvalidOperation as exc:
        raise ValueError(f"not a number: {value!r}") from exc


def coerce_value(value: str, field: FieldDefinition) -> Coerced:
    """Convert a raw CSV string to the Python value for ``field``.

    Empty strings become ``None``. Raises ``ValueError`` when the value does
    not parse as the field type.
    """
    if value == "":
        return None
    match field.type:
        case "integer":
            return _parse_integer(value)
        case "number":
            return _parse_number(value)
        case "boolean":
            return _parse_boolean(value)
        case "date":
            return date.fromisoformat(value)
        case "datetime":
            return datetime.fromisoformat(value)
        case _:
            return value


def check_value(value: str, field: FieldDefinition) -> tuple[ErrorCode, str | None] | None:
    """Return the error code and context for an invalid value, or ``None``."""
    if value == "":
        return (VALUE_REQUIRED, None) if field.required else None
    if value != value.strip():
        return PADDED_VALUE, None
    if field.type == "string":
        if field.length is not None and len(value) > field.length:
            return LENGTH_EXCEEDED, f"(max length {field.length}, got {len(value)})"
        return None
    try:
        coerce_value(value, field)
    except ValueError:
        return _TYPE_ERRORS[field.type], None
    return None
