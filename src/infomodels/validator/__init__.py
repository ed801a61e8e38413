"""Record validators producing per-line validation errors."""

from __future__ import annotations

from .base import RecordValidator, ValidationSession
from .csv_engine import CsvValidationSession, CsvValidator, check_header
from .fields import check_value, coerce_value

__all__ = [
    "CsvValidationSession",
    "CsvValidator",
    "RecordValidator",
    "ValidationSession",
    "check_header",
    "check_value",
    "coerce_value",
]
