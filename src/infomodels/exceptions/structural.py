"""Per-file structural failures that abort a single validation session."""

from __future__ import annotations

from pathlib import Path

from infomodels.exceptions.base import InfomodelsError


class StructuralError(InfomodelsError):
    """Raised when a data file cannot be scanned at all.

    Covers unreadable files, missing or malformed headers, and tables that the
    data model does not define. The file is skipped; other files continue.
    """

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path
