"""Configuration loading and normalization for infomodels commands."""

from __future__ import annotations

from infomodels.config.loader import load_config
from infomodels.config.model import InfomodelsConfig

__all__ = ["InfomodelsConfig", "load_config"]
