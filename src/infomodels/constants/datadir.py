"""Data directory layout and metadata file columns."""

from __future__ import annotations

METADATA_FILENAME: str = "metadata.csv"
DATA_FILE_SUFFIX: str = ".csv"
FILE_HASH_CHUNK_SIZE: int = 1024 * 1024
METADATA_TEMP_PREFIX: str = ".tmp-metadata-"
METADATA_TEMP_SUFFIX: str = ".csv"

METADATA_COLUMNS: tuple[str, ...] = (
    "filename",
    "table",
    "checksum",
    "cdm",
    "cdm-version",
    "data-version",
    "etl",
    "site",
)
REQUIRED_METADATA_COLUMNS: frozenset[str] = frozenset({"filename", "table", "checksum"})

PACKAGE_SUFFIX: str = ".tar.gz"
