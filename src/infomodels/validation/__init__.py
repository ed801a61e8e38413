"""Directory- and file-level validation runs."""

from __future__ import annotations

from .orchestrator import build_sampler, resolve_model, validate_directory, validate_file

__all__ = ["build_sampler", "resolve_model", "validate_directory", "validate_file"]
