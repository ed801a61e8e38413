"""Database access: operation log, schema state resolution and model materialization."""

from __future__ import annotations

from .backend import ModelDatabase, build_metadata
from .engine import ensure_schema, open_engine, primary_schema
from .history import OperationLog, VersionHistoryLog, version_history
from .state import SchemaStateResolver, resolve_schema_state

__all__ = [
    "ModelDatabase",
    "OperationLog",
    "SchemaStateResolver",
    "VersionHistoryLog",
    "build_metadata",
    "ensure_schema",
    "open_engine",
    "primary_schema",
    "resolve_schema_state",
    "version_history",
]
