"""Failures to resolve the active data model of a database schema."""

from __future__ import annotations

from infomodels.exceptions.base import InfomodelsError


class SchemaStateError(InfomodelsError):
    """Raised when no active (model, model_version) can be determined."""

    def __init__(self, message: str, *, search_path: str | None = None) -> None:
        super().__init__(message)
        self.search_path = search_path


class NoPriorSchemaError(SchemaStateError):
    """The operation log records no 'create tables' operation at all."""


class NoActiveSchemaError(SchemaStateError):
    """The latest 'create tables' was superseded by a later 'drop tables'."""
