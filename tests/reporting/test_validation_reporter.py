"""Tests for stdout validation tables."""

from __future__ import annotations

from pathlib import Path

from infomodels.constants.reporting import ANSI_RESET, ANSI_YELLOW, FIELD_TABLE_TITLE, ROW_TABLE_TITLE
from infomodels.constants.validation import EXTRA_COLUMNS, NOT_INTEGER
from infomodels.model import FieldIssue, FileReport, RowIssue, ValidationError, ValidationRun
from infomodels.reporting import ValidationReporter, render_table


def _row_issue() -> RowIssue:
    return RowIssue(
        code=EXTRA_COLUMNS.code,
        description=EXTRA_COLUMNS.description,
        occurrences=2,
        line_ranges=("4", "6"),
        example=ValidationError(code=EXTRA_COLUMNS, line=4, value="1,F,x", context="(expected 2 columns, got 3)"),
    )


def _field_issue(line_ranges: tuple[str, ...] = ("2-3",)) -> FieldIssue:
    return FieldIssue(
        field="person_id",
        code=NOT_INTEGER.code,
        description=NOT_INTEGER.description,
        occurrences=2,
        line_ranges=line_ranges,
        samples=(
            ValidationError(code=NOT_INTEGER, line=2, value="abc", field="person_id"),
            ValidationError(code=NOT_INTEGER, line=3, value="x1", field="person_id"),
        ),
    )


def test_render_table_draws_box_with_header_and_rows() -> None:
    rendered = render_table(("a", "bb"), [("1", "two")])

    lines = rendered.splitlines()
    assert lines[0] == "  ┌───┬─────┐"
    assert lines[1] == "  │ a │ bb  │"
    assert lines[3] == "  │ 1 │ two │"
    assert lines[-1] == "  └───┴─────┘"


def test_render_table_splits_multiline_cells() -> None:
    rendered = render_table(("samples",), [("first\nsecond",)])

    assert "│ first   │" in rendered
    assert "│ second  │" in rendered


def test_clean_report_renders_nothing() -> None:
    report = FileReport(table="person", path=Path("person.csv"))

    assert ValidationReporter(color=False).render_report(report) == ""


def test_report_renders_row_and_field_tables() -> None:
    report = FileReport(
        table="person",
        path=Path("/data/person.csv"),
        row_issues=(_row_issue(),),
        field_issues=(_field_issue(),),
    )

    rendered = ValidationReporter(color=False).render_report(report)

    assert "person (person.csv)" in rendered
    assert ROW_TABLE_TITLE in rendered
    assert FIELD_TABLE_TITLE in rendered
    assert "line 4: `1,F,x` (expected 2 columns, got 3)" in rendered
    assert "line 2: `abc`" in rendered
    assert "line 3: `x1`" in rendered
    assert "4, 6" in rendered
    assert "\033[" not in rendered


def test_line_ranges_are_truncated_for_display() -> None:
    report = FileReport(
        table="person",
        path=Path("person.csv"),
        field_issues=(_field_issue(line_ranges=("2", "4", "6", "8", "10")),),
    )

    rendered = ValidationReporter(color=False, line_display_limit=3).render_report(report)

    assert "2, 4, 6, +2 more" in rendered


def test_incomplete_report_is_marked() -> None:
    report = FileReport(
        table="person",
        path=Path("person.csv"),
        field_issues=(_field_issue(),),
        complete=False,
    )

    assert "[incomplete: scan stopped early]" in ValidationReporter(color=False).render_report(report)


def test_color_output_highlights_section_titles() -> None:
    report = FileReport(table="person", path=Path("person.csv"), field_issues=(_field_issue(),))

    rendered = ValidationReporter(color=True).render_report(report)

    assert f"{ANSI_YELLOW}{FIELD_TABLE_TITLE}{ANSI_RESET}" in rendered


def test_render_run_skips_clean_files() -> None:
    run = ValidationRun(
        directory=Path("data"),
        model="pedsnet",
        model_version="2.0.0",
        reports=(
            FileReport(table="person", path=Path("person.csv")),
            FileReport(table="visit", path=Path("visit.csv"), row_issues=(_row_issue(),)),
        ),
    )

    rendered = ValidationReporter(color=False).render_run(run)

    assert "visit (visit.csv)" in rendered
    assert "person (person.csv)" not in rendered
