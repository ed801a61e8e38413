"""infomodels: a healthcare informatics ETL utility."""

from __future__ import annotations

__version__ = "0.1.0a0"

__all__ = ["__version__"]
