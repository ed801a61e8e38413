"""Data model definition file layout and JSON Schema."""

from __future__ import annotations

from typing import Any

MODEL_FILE_GLOBS: tuple[str, ...] = ("*.yaml", "*.yml")

FIELD_TYPES: tuple[str, ...] = ("string", "integer", "number", "boolean", "date", "datetime")

BOOLEAN_TRUE_VALUES: frozenset[str] = frozenset({"true", "t", "yes", "y", "1"})
BOOLEAN_FALSE_VALUES: frozenset[str] = frozenset({"false", "f", "no", "n", "0"})

MODEL_DEFINITION_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "additionalProperties": False,
    "required": ["name", "version", "tables"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "version": {"type": ["string", "number"]},
        "description": {"type": "string"},
        "tables": {
            "type": "object",
            "minProperties": 1,
            "additionalProperties": {
                "type": "object",
                "additionalProperties": False,
                "required": ["fields"],
                "properties": {
                    "description": {"type": "string"},
                    "fields": {
                        "type": "object",
                        "minProperties": 1,
                        "additionalProperties": {
                            "type": "object",
                            "additionalProperties": False,
                            "required": ["type"],
                            "properties": {
                                "type": {"enum": list(FIELD_TYPES)},
                                "required": {"type": "boolean"},
                                "primary_key": {"type": "boolean"},
                                "length": {"type": "integer", "minimum": 1},
                                "references": {
                                    "type": "string",
                                    "pattern": r"^[A-Za-z_][A-Za-z0-9_]*\.[A-Za-z_][A-Za-z0-9_]*$",
                                },
                                "description": {"type": "string"},
                            },
                        },
                    },
                },
            },
        },
    },
}
