"""Setup failures raised by the data directory, model, packaging and database layers."""

from __future__ import annotations

from infomodels.exceptions.base import InfomodelsError


class DataDirectoryError(InfomodelsError):
    """Raised when a data directory or its metadata file is unusable."""


class ModelDefinitionError(InfomodelsError):
    """Raised when a data model definition is missing or invalid."""


class PackagingError(InfomodelsError):
    """Raised when a dataset package cannot be created or expanded."""


class DatabaseError(InfomodelsError):
    """Raised when a database operation fails."""
