"""Dataset directories described by a ``metadata.csv`` file."""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path

from infomodels.constants.datadir import (
    DATA_FILE_SUFFIX,
    METADATA_COLUMNS,
    METADATA_FILENAME,
    METADATA_TEMP_PREFIX,
    METADATA_TEMP_SUFFIX,
    REQUIRED_METADATA_COLUMNS,
)
from infomodels.exceptions import DataDirectoryError
from infomodels.io import file_sha256, write_text_atomic
from infomodels.types import MetadataRecord

logger = logging.getLogger(__name__)


def render_metadata(records: list[MetadataRecord]) -> str:
    """Render metadata records as CSV text with the standard column order."""
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=METADATA_COLUMNS, extrasaction="ignore", lineterminator="\n")
    writer.writeheader()
    for record in records:
        writer.writerow({column: record.get(column, "") for column in METADATA_COLUMNS})
    return buf.getvalue()


class DataDirectory:
    """A directory of per-table CSV files plus their metadata descriptor.

    Each metadata record names one data file, the model table it holds, its
    SHA-256 checksum, and dataset-level attributes (model, versions, site).
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._records: list[MetadataRecord] = []

    @property
    def path(self) -> Path:
        return self._path

    @property
    def metadata_path(self) -> Path:
        return self._path / METADATA_FILENAME

    @property
    def records(self) -> list[MetadataRecord]:
        return list(self._records)

    @property
    def model(self) -> str:
        return self._records[0].get("cdm", "") if self._records else ""

    @property
    def model_version(self) -> str:
        return self._records[0].get("cdm-version", "") if self._records else ""

    def data_files(self) -> list[Path]:
        """Return the data files directly inside the directory, sorted by name."""
        if not self._path.is_dir():
            raise DataDirectoryError(f"Data directory does not exist: {self._path}")
        return sorted(
            path
            for path in self._path.iterdir()
            if path.is_file() and path.suffix == DATA_FILE_SUFFIX and path.name != METADATA_FILENAME
        )

    def populate_from_data(
        self,
        *,
        model: str = "",
        model_version: str = "",
        data_version: str = "",
        etl: str = "",
        site: str = "",
    ) -> list[MetadataRecord]:
        """Build one metadata record per data file, checksumming each file."""
        files = self.data_files()
        if not files:
            raise DataDirectoryError(f"No {DATA_FILE_SUFFIX} data files found in {self._path}")

        self._records = [
            {
                "filename": path.name,
                "table": path.stem,
                "checksum": file_sha256(path),
                "cdm": model,
                "cdm-version": model_version,
                "data-version": data_version,
                "etl": etl,
                "site": site,
            }
            for path in files
        ]
        logger.info("Populated metadata for %d files in %s", len(self._records), self._path)
        return self.records

    def write_metadata(self) -> Path:
        if not self._records:
            raise DataDirectoryError("No metadata records to write; populate them first")
        write_text_atomic(
            path=self.metadata_path,
            content=render_metadata(self._records),
            temp_prefix=METADATA_TEMP_PREFIX,
            temp_suffix=METADATA_TEMP_SUFFIX,
        )
        return self.metadata_path

    def read_metadata(self) -> list[MetadataRecord]:
        """Load records from ``metadata.csv``."""
        try:
            text = self.metadata_path.read_text(encoding="utf-8-sig")
        except FileNotFoundError as exc:
            raise DataDirectoryError(f"Metadata file not found: {self.metadata_path}") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise DataDirectoryError(f"Cannot read metadata file {self.metadata_path}: {exc}") from exc

        reader = csv.DictReader(io.StringIO(text))
        try:
            rows = list(reader)
        except csv.Error as exc:
            raise DataDirectoryError(f"Malformed metadata file {self.metadata_path}: {exc}") from exc

        missing = REQUIRED_METADATA_COLUMNS - set(reader.fieldnames or ())
        if missing:
            raise DataDirectoryError(
                f"Metadata file {self.metadata_path} is missing columns: {', '.join(sorted(missing))}"
            )
        if not rows:
            raise DataDirectoryError(f"Metadata file {self.metadata_path} contains no records")

        self._records = [
            {key: (value or "").strip() for key, value in row.items() if key is not None} for row in rows
        ]
        return self.records

    def verify(self) -> None:
        """Check that every listed file exists and matches its checksum."""
        problems: list[str] = []
        for record in self._records:
            path = self._path / record["filename"]
            if not path.is_file():
                problems.append(f"{record['filename']}: file not found")
                continue
            if record["checksum"] and file_sha256(path) != record["checksum"]:
                problems.append(f"{record['filename']}: checksum mismatch")
        if problems:
            raise DataDirectoryError(f"Metadata does not match {self._path}: " + "; ".join(problems))
