"""Branding constants for help text and terminal output."""

from __future__ import annotations

BRAND_NAME: str = "infomodels"
CLI_SHORT_DESCRIPTION: str = "a healthcare informatics ETL utility"
CLI_DESCRIPTION: str = "\n".join(
    (
        f"{BRAND_NAME}: {CLI_SHORT_DESCRIPTION}",
        "",
        "For datasets that conform to a versioned data model, this CLI exposes an",
        "easy-to-use interface for accomplishing various ETL-type tasks common to",
        "many informatics workflows.",
    )
)
EVERYTHING_OK_MESSAGE: str = "Everything looks good!"
