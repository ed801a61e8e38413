"""Stable validation error codes reported by the CSV validator.

2xx codes are row-level problems; 3xx codes are attributable to a single
field value.
"""

from __future__ import annotations

from infomodels.model import ErrorCode

EXTRA_COLUMNS = ErrorCode(200, "Row has more columns than the header")
MISSING_COLUMNS = ErrorCode(201, "Row has fewer columns than the header")
BLANK_LINE = ErrorCode(202, "Blank line")

VALUE_REQUIRED = ErrorCode(300, "Value is required")
LENGTH_EXCEEDED = ErrorCode(301, "Value exceeds the maximum length")
NOT_INTEGER = ErrorCode(302, "Value is not an integer")
NOT_NUMBER = ErrorCode(303, "Value is not a number")
NOT_BOOLEAN = ErrorCode(304, "Value is not a boolean")
NOT_DATE = ErrorCode(305, "Value is not a date (YYYY-MM-DD)")
NOT_DATETIME = ErrorCode(306, "Value is not an ISO 8601 datetime")
PADDED_VALUE = ErrorCode(307, "Value has leading or trailing whitespace")

ALL_ERROR_CODES: tuple[ErrorCode, ...] = (
    EXTRA_COLUMNS,
    MISSING_COLUMNS,
    BLANK_LINE,
    VALUE_REQUIRED,
    LENGTH_EXCEEDED,
    NOT_INTEGER,
    NOT_NUMBER,
    NOT_BOOLEAN,
    NOT_DATE,
    NOT_DATETIME,
    PADDED_VALUE,
)
