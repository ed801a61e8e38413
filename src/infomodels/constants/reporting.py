"""Constants for stdout tables and terminal colouring."""

from __future__ import annotations

ROW_TABLE_TITLE: str = "Row-level issues"
FIELD_TABLE_TITLE: str = "Field-level issues"

ROW_TABLE_COLUMNS: tuple[str, ...] = ("code", "error", "occurrences", "lines", "example")
FIELD_TABLE_COLUMNS: tuple[str, ...] = ("field", "code", "error", "occurrences", "lines", "samples")

# Cells wider than this are wrapped onto continuation lines.
MAX_COLUMN_WIDTH: int = 48

# ANSI escape codes for terminal colouring.
ANSI_RESET: str = "\033[0m"
ANSI_BOLD: str = "\033[1m"
ANSI_RED: str = "\033[31;1m"
ANSI_YELLOW: str = "\033[33;1m"
ANSI_GREEN: str = "\033[32;1m"
ANSI_DIM: str = "\033[2m"

LOG_LEVEL_COLORS: dict[str, str] = {
    "DEBUG": ANSI_DIM,
    "INFO": ANSI_GREEN,
    "WARNING": ANSI_YELLOW,
    "ERROR": ANSI_RED,
    "CRITICAL": ANSI_RED,
}
