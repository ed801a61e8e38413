"""Config data model for infomodels commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from infomodels.constants.config import (
    DEFAULT_LINE_DISPLAY_LIMIT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_SAMPLE_SIZE,
)


@dataclass(frozen=True)
class InfomodelsConfig:
    """Resolved settings after layering file, environment and flags.

    An empty ``logfmt`` means "pick by terminal": ``tty`` when stderr is a
    terminal, ``json`` otherwise.
    """

    models_dir: Path = Path("models")
    model: str = ""
    model_version: str = ""
    loglvl: str = DEFAULT_LOG_LEVEL
    logfmt: str = ""
    dburi: str = ""
    dbpass: str = ""
    schema: str = ""
    search_path: str = ""
    sample_size: int = DEFAULT_SAMPLE_SIZE
    line_display_limit: int = DEFAULT_LINE_DISPLAY_LIMIT
    sample_with_replacement: bool = False
    sample_seed: int | None = None
    structural_failures_as_errors: bool = False
