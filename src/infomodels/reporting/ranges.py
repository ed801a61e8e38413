"""Compact display of line numbers as contiguous ranges."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from infomodels.constants.config import DEFAULT_LINE_DISPLAY_LIMIT


def _format_run(start: int, end: int) -> str:
    return str(start) if start == end else f"{start}-{end}"


def compress_line_ranges(lines: Iterable[int]) -> list[str]:
    """Collapse ascending, duplicate-free line numbers into ``N`` / ``A-B`` runs.

    The input is not sorted here; callers pass lines already in ascending
    order. ``compress_line_ranges([1, 2, 3, 5])`` gives ``["1-3", "5"]``.
    """
    ranges: list[str] = []
    run_start: int | None = None
    run_end = 0

    for line in lines:
        if run_start is None:
            run_start = run_end = line
            continue
        if line == run_end + 1:
            run_end = line
            continue
        ranges.append(_format_run(run_start, run_end))
        run_start = run_end = line

    if run_start is not None:
        ranges.append(_format_run(run_start, run_end))
    return ranges


def expand_line_ranges(ranges: Iterable[str]) -> list[int]:
    """Expand ``N`` / ``A-B`` strings back into the line numbers they cover."""
    lines: list[int] = []
    for entry in ranges:
        start, sep, end = entry.partition("-")
        if not sep:
            lines.append(int(start))
            continue
        lines.extend(range(int(start), int(end) + 1))
    return lines


def format_line_ranges(ranges: Sequence[str], limit: int = DEFAULT_LINE_DISPLAY_LIMIT) -> str:
    """Join ranges for display, truncating after ``limit`` entries."""
    if len(ranges) <= limit:
        return ", ".join(ranges)
    shown = ", ".join(ranges[:limit])
    return f"{shown}, +{len(ranges) - limit} more"
