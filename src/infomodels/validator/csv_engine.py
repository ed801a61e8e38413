"""CSV record validator checking data files against model tables."""

from __future__ import annotations

import csv
import logging
from collections import Counter
from collections.abc import Iterator
from pathlib import Path
from types import TracebackType
from typing import IO, Self

from infomodels.constants.validation import BLANK_LINE, EXTRA_COLUMNS, MISSING_COLUMNS
from infomodels.datamodels import FieldDefinition, TableDefinition
from infomodels.exceptions import StructuralError
from infomodels.model import ValidationError
from infomodels.validator.fields import check_value

logger = logging.getLogger(__name__)

_ROW_PREVIEW_CHARS = 60


def _preview(row: list[str]) -> str:
    joined = ",".join(row)
    if len(joined) <= _ROW_PREVIEW_CHARS:
        return joined
    return joined[: _ROW_PREVIEW_CHARS - 3] + "..."


def check_header(header: list[str], table: TableDefinition) -> None:
    """Raise ``StructuralError`` when a header cannot be validated against ``table``."""
    if not header or all(not name.strip() for name in header):
        raise StructuralError("header row is empty")

    counts = Counter(header)
    duplicates = sorted(name for name, count in counts.items() if count > 1)
    if duplicates:
        raise StructuralError(f"duplicate header fields: {', '.join(duplicates)}")

    unknown = [name for name in header if table.field(name) is None]
    if unknown:
        raise StructuralError(
            f"unknown fields for table '{table.name}': {', '.join(unknown)}. "
            f"Choices are: {', '.join(table.field_names)}"
        )

    missing = [field.name for field in table.fields if field.required and field.name not in counts]
    if missing:
        raise StructuralError(f"missing required fields for table '{table.name}': {', '.join(missing)}")


class CsvValidationSession:
    """Validates the data rows of one open CSV file."""

    def __init__(self, path: Path, handle: IO[str], table: TableDefinition) -> None:
        self._path = path
        self._handle = handle
        self._table = table
        self._reader = csv.reader(handle)
        try:
            header = next(self._reader)
        except StopIteration:
            header = []
        except (csv.Error, UnicodeDecodeError) as exc:
            raise StructuralError(f"cannot parse header: {exc}", path=path) from exc

        try:
            check_header(header, table)
        except StructuralError as exc:
            raise StructuralError(str(exc), path=path) from exc

        self._header = tuple(header)
        self._fields: tuple[FieldDefinition, ...] = tuple(
            field for name in header if (field := table.field(name)) is not None
        )

    @property
    def header(self) -> tuple[str, ...]:
        return self._header

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self._handle.close()

    def __iter__(self) -> Iterator[ValidationError]:
        """Yield errors per record, located at the record's first physical line."""
        try:
            while True:
                line = self._reader.line_num + 1
                row = next(self._reader, None)
                if row is None:
                    return
                yield from self._check_row(row, line)
        except (csv.Error, UnicodeDecodeError) as exc:
            raise StructuralError(
                f"cannot parse data at line {self._reader.line_num}: {exc}",
                path=self._path,
            ) from exc

    def _check_row(self, row: list[str], line: int) -> Iterator[ValidationError]:
        if not row:
            yield ValidationError(code=BLANK_LINE, line=line, value="")
            return

        expected = len(self._header)
        if len(row) != expected:
            code = EXTRA_COLUMNS if len(row) > expected else MISSING_COLUMNS
            yield ValidationError(
                code=code,
                line=line,
                value=_preview(row),
                context=f"(expected {expected} columns, got {len(row)})",
            )
            return

        for field, value in zip(self._fields, row, strict=True):
            problem = check_value(value, field)
            if problem is None:
                continue
            code, context = problem
            yield ValidationError(code=code, line=line, value=value, field=field.name, context=context)


class CsvValidator:
    """Default :class:`~infomodels.validator.base.RecordValidator` for CSV files."""

    def __init__(self, *, encoding: str = "utf-8-sig") -> None:
        self._encoding = encoding

    def open(self, path: Path, table: TableDefinition) -> CsvValidationSession:
        try:
            handle = path.open(encoding=self._encoding, newline="")
        except OSError as exc:
            raise StructuralError(f"could not open file: {exc}", path=path) from exc

        try:
            session = CsvValidationSession(path, handle, table)
        except StructuralError:
            handle.close()
            raise
        logger.debug("Opened %s for table '%s' (%d fields)", path, table.name, len(session.header))
        return session
