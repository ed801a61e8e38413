"""Tests for core report data models."""

from __future__ import annotations

from pathlib import Path

import pytest

from infomodels.constants.validation import ALL_ERROR_CODES, BLANK_LINE, NOT_DATE
from infomodels.model import AggregationKey, SkippedFile, ValidationError, ValidationRun


def test_validation_error_requires_positive_line() -> None:
    with pytest.raises(ValueError, match="line must be >= 1"):
        ValidationError(code=BLANK_LINE, line=0, value="")


def test_classification_depends_on_field() -> None:
    assert ValidationError(code=BLANK_LINE, line=3, value="").classification == "row"
    assert ValidationError(code=NOT_DATE, line=3, value="x", field="birth_date").classification == "field"


def test_format_includes_context_only_when_present() -> None:
    plain = ValidationError(code=NOT_DATE, line=4, value="2020-13-01", field="birth_date")
    with_context = ValidationError(code=NOT_DATE, line=4, value="2020-13-01", field="birth_date", context="(bad)")

    assert plain.format() == "line 4: `2020-13-01`"
    assert with_context.format() == "line 4: `2020-13-01` (bad)"


def test_aggregation_key_for_error() -> None:
    error = ValidationError(code=NOT_DATE, line=4, value="x", field="birth_date")

    assert AggregationKey.for_error(error) == AggregationKey("field", "birth_date", NOT_DATE.code)


def test_skipped_files_alone_are_not_errors_by_default() -> None:
    skipped = (SkippedFile(filename="x.csv", table="x", reason="unknown table"),)

    assert not ValidationRun(directory=Path("d"), model="m", model_version="1", skipped=skipped).has_errors
    assert ValidationRun(
        directory=Path("d"),
        model="m",
        model_version="1",
        skipped=skipped,
        structural_failures_as_errors=True,
    ).has_errors


def test_error_codes_are_unique_and_grouped_by_scope() -> None:
    codes = [error_code.code for error_code in ALL_ERROR_CODES]

    assert len(codes) == len(set(codes))
    assert all(200 <= code < 400 for code in codes)
