"""Core data models for validation reporting and schema state."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from infomodels.types import Classification


@dataclass(frozen=True)
class ErrorCode:
    """A stable validation error code and its human-readable description."""

    code: int
    description: str


@dataclass(frozen=True)
class ValidationError:
    """One problem detected by the validator on one line of a data file.

    A ``field`` of ``None`` marks the error as row-level.
    """

    code: ErrorCode
    line: int
    value: str
    field: str | None = None
    context: str | None = None

    def __post_init__(self) -> None:
        if self.line < 1:
            raise ValueError(f"line must be >= 1, got {self.line}")

    @property
    def description(self) -> str:
        return self.code.description

    @property
    def classification(self) -> Classification:
        return "row" if self.field is None else "field"

    def format(self) -> str:
        """Format as the example string shown in report tables."""
        example = f"line {self.line}: `{self.value}`"
        if self.context:
            example = f"{example} {self.context}"
        return example


@dataclass(frozen=True)
class AggregationKey:
    """Identifies one report group: classification, field and error code."""

    classification: Classification
    field: str | None
    code: int

    @classmethod
    def for_error(cls, error: ValidationError) -> AggregationKey:
        return cls(classification=error.classification, field=error.field, code=error.code.code)


@dataclass
class AggregatedGroup:
    """Errors sharing one aggregation key, accumulated during a scan."""

    key: AggregationKey
    description: str
    count: int = 0
    lines: dict[int, None] = field(default_factory=dict)
    instances: list[ValidationError] = field(default_factory=list)

    def add(self, error: ValidationError) -> None:
        """Count one more matching error and remember its line."""
        self.count += 1
        self.lines.setdefault(error.line, None)
        self.instances.append(error)

    @property
    def first(self) -> ValidationError:
        return self.instances[0]


@dataclass(frozen=True)
class RowIssue:
    """A finalized row-level group ready for display."""

    code: int
    description: str
    occurrences: int
    line_ranges: tuple[str, ...]
    example: ValidationError


@dataclass(frozen=True)
class FieldIssue:
    """A finalized field-level group ready for display."""

    field: str
    code: int
    description: str
    occurrences: int
    line_ranges: tuple[str, ...]
    samples: tuple[ValidationError, ...]


@dataclass(frozen=True)
class FileReport:
    """Validation outcome of one data file."""

    table: str
    path: Path
    row_issues: tuple[RowIssue, ...] = ()
    field_issues: tuple[FieldIssue, ...] = ()
    complete: bool = True

    @property
    def has_errors(self) -> bool:
        return bool(self.row_issues or self.field_issues)


@dataclass(frozen=True)
class SkippedFile:
    """A data file whose session was aborted by a structural failure."""

    filename: str
    table: str
    reason: str


@dataclass(frozen=True)
class ValidationRun:
    """Validation outcome of one data directory."""

    directory: Path
    model: str
    model_version: str
    reports: tuple[FileReport, ...] = ()
    skipped: tuple[SkippedFile, ...] = ()
    structural_failures_as_errors: bool = False

    @property
    def has_errors(self) -> bool:
        if any(report.has_errors for report in self.reports):
            return True
        return self.structural_failures_as_errors and bool(self.skipped)


@dataclass(frozen=True)
class OperationLogEntry:
    """One immutable row of the schema operation log."""

    operation: str
    model: str
    model_version: str
    timestamp: datetime
    sequence: int = 0


@dataclass(frozen=True)
class SchemaState:
    """The data model currently materialized in a database schema."""

    model: str
    model_version: str
