"""Shared exception hierarchy for infomodels."""

from __future__ import annotations

from .base import InfomodelsError
from .config import ConfigError
from .data import DatabaseError, DataDirectoryError, ModelDefinitionError, PackagingError
from .schema_state import NoActiveSchemaError, NoPriorSchemaError, SchemaStateError
from .structural import StructuralError

__all__ = [
    "ConfigError",
    "DataDirectoryError",
    "DatabaseError",
    "InfomodelsError",
    "ModelDefinitionError",
    "NoActiveSchemaError",
    "NoPriorSchemaError",
    "PackagingError",
    "SchemaStateError",
    "StructuralError",
]
