"""Configuration-related exceptions."""

from __future__ import annotations

from infomodels.exceptions.base import InfomodelsError


class ConfigError(InfomodelsError, ValueError):
    """Raised when configuration or required arguments are invalid."""
