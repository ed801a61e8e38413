"""Data model definitions and their on-disk registry."""

from __future__ import annotations

from .definition import FieldDefinition, ModelDefinition, TableDefinition
from .registry import ModelRegistry, load_model_file, version_sort_key

__all__ = [
    "FieldDefinition",
    "ModelDefinition",
    "ModelRegistry",
    "TableDefinition",
    "load_model_file",
    "version_sort_key",
]
