"""Contracts between the validation core and a record validator."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from types import TracebackType
from typing import Protocol, Self

from infomodels.datamodels import TableDefinition
from infomodels.model import ValidationError


class ValidationSession(Protocol):
    """One pass over one data file.

    Iterating yields errors lazily and exactly once. Iteration may raise
    ``StructuralError`` when the file becomes unreadable mid-scan.
    """

    @property
    def header(self) -> tuple[str, ...]: ...

    def __iter__(self) -> Iterator[ValidationError]: ...

    def __enter__(self) -> Self: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...


class RecordValidator(Protocol):
    """Opens validation sessions for data files against model tables."""

    def open(self, path: Path, table: TableDefinition) -> ValidationSession:
        """Open ``path`` and check its header, raising ``StructuralError`` on failure."""
        ...
