"""Base exception for infomodels."""

from __future__ import annotations


class InfomodelsError(Exception):
    """Root of every error raised deliberately by infomodels."""
