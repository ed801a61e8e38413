"""Console tables for per-file validation results."""

from __future__ import annotations

import textwrap
from collections.abc import Sequence

from infomodels.constants.config import DEFAULT_LINE_DISPLAY_LIMIT
from infomodels.constants.reporting import (
    ANSI_BOLD,
    ANSI_RESET,
    ANSI_YELLOW,
    FIELD_TABLE_COLUMNS,
    FIELD_TABLE_TITLE,
    MAX_COLUMN_WIDTH,
    ROW_TABLE_COLUMNS,
    ROW_TABLE_TITLE,
)
from infomodels.model import FieldIssue, FileReport, RowIssue, ValidationRun
from infomodels.reporting.ranges import format_line_ranges


def _colorize(text: str, color: str) -> str:
    return f"{color}{text}{ANSI_RESET}"


def _cell_lines(value: str, width: int) -> list[str]:
    """Split a cell on newlines and wrap each piece to ``width``."""
    lines: list[str] = []
    for part in value.split("\n"):
        lines.extend(textwrap.wrap(part, width=width, break_on_hyphens=False) or [""])
    return lines


def render_table(columns: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """Render a box-drawn table; cells may span several lines."""
    widths = [len(column) for column in columns]
    for row in rows:
        for index, value in enumerate(row):
            longest = max((len(part) for part in value.split("\n")), default=0)
            widths[index] = max(widths[index], min(longest, MAX_COLUMN_WIDTH))

    def _hline(left: str, mid: str, right: str) -> str:
        return "  " + left + mid.join("─" * (width + 2) for width in widths) + right

    def _row_lines(values: Sequence[str]) -> list[str]:
        wrapped = [_cell_lines(value, width) for value, width in zip(values, widths, strict=True)]
        height = max(len(cell) for cell in wrapped)
        out: list[str] = []
        for line_index in range(height):
            parts = [
                f" {(cell[line_index] if line_index < len(cell) else ''):<{width}} "
                for cell, width in zip(wrapped, widths, strict=True)
            ]
            out.append("  │" + "│".join(parts) + "│")
        return out

    lines = [_hline("┌", "┬", "┐"), *_row_lines(columns), _hline("├", "┼", "┤")]
    for row in rows:
        lines.extend(_row_lines(row))
    lines.append(_hline("└", "┴", "┘"))
    return "\n".join(lines)


class ValidationReporter:
    """Formats validation results as human-readable stdout tables."""

    def __init__(
        self,
        *,
        color: bool = True,
        line_display_limit: int = DEFAULT_LINE_DISPLAY_LIMIT,
    ) -> None:
        self._color = color
        self._line_display_limit = line_display_limit

    def render_report(self, report: FileReport) -> str:
        """Render one file's tables, or an empty string when it is clean."""
        if not report.has_errors:
            return ""

        title = f"{report.table} ({report.path.name})"
        if not report.complete:
            title = f"{title} [incomplete: scan stopped early]"
        sections = [f"  {self._style(title, ANSI_BOLD)}"]
        if report.row_issues:
            sections.append(self._render_row_table(report.row_issues))
        if report.field_issues:
            sections.append(self._render_field_table(report.field_issues))
        return "\n".join(sections)

    def render_run(self, run: ValidationRun) -> str:
        """Render every file with issues in a directory run."""
        sections = [self.render_report(report) for report in run.reports]
        return "\n\n".join(section for section in sections if section)

    def _render_row_table(self, issues: Sequence[RowIssue]) -> str:
        rows = [
            (
                str(issue.code),
                issue.description,
                str(issue.occurrences),
                format_line_ranges(issue.line_ranges, self._line_display_limit),
                issue.example.format(),
            )
            for issue in issues
        ]
        return "\n".join([f"  {self._style(ROW_TABLE_TITLE, ANSI_YELLOW)}", render_table(ROW_TABLE_COLUMNS, rows)])

    def _render_field_table(self, issues: Sequence[FieldIssue]) -> str:
        rows = [
            (
                issue.field,
                str(issue.code),
                issue.description,
                str(issue.occurrences),
                format_line_ranges(issue.line_ranges, self._line_display_limit),
                "\n".join(sample.format() for sample in issue.samples),
            )
            for issue in issues
        ]
        return "\n".join(
            [f"  {self._style(FIELD_TABLE_TITLE, ANSI_YELLOW)}", render_table(FIELD_TABLE_COLUMNS, rows)]
        )

    def _style(self, text: str, color: str) -> str:
        return _colorize(text, color) if self._color else text
