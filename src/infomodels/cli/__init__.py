"""Command-line interface for infomodels."""
