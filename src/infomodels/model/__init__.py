"""Core data models for infomodels."""

from .entities import (
    AggregatedGroup,
    AggregationKey,
    ErrorCode,
    FieldIssue,
    FileReport,
    OperationLogEntry,
    RowIssue,
    SchemaState,
    SkippedFile,
    ValidationError,
    ValidationRun,
)

__all__ = [
    "AggregatedGroup",
    "AggregationKey",
    "ErrorCode",
    "FieldIssue",
    "FileReport",
    "OperationLogEntry",
    "RowIssue",
    "SchemaState",
    "SkippedFile",
    "ValidationError",
    "ValidationRun",
]
