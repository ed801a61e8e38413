"""Validation reporting core: grouping, range compression, sampling and tables."""

from __future__ import annotations

from .aggregator import ErrorAggregator
from .ranges import compress_line_ranges, expand_line_ranges, format_line_ranges
from .sampler import Sampler
from .stdout import ValidationReporter, render_table

__all__ = [
    "ErrorAggregator",
    "Sampler",
    "ValidationReporter",
    "compress_line_ranges",
    "expand_line_ranges",
    "format_line_ranges",
    "render_table",
]
