"""Checksums and atomic writes for dataset files."""

from __future__ import annotations

import hashlib
import os
import tempfile
from contextlib import suppress
from pathlib import Path

from infomodels.constants.datadir import FILE_HASH_CHUNK_SIZE


def file_sha256(path: Path, *, chunk_size: int = FILE_HASH_CHUNK_SIZE) -> str:
    """Return the SHA-256 hex digest of a data file, read in chunks."""
    digest = hashlib.sha256()
    with path.open("rb") as handle:
        while chunk := handle.read(chunk_size):
            digest.update(chunk)
    return digest.hexdigest()


def write_text_atomic(
    *,
    path: Path,
    content: str,
    temp_prefix: str,
    temp_suffix: str,
) -> None:
    """Write ``content`` next to ``path`` and rename it into place.

    Line endings are written exactly as given.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    temp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            newline="",
            dir=path.parent,
            prefix=temp_prefix,
            suffix=temp_suffix,
            delete=False,
        ) as handle:
            temp_name = handle.name
            handle.write(content)
        os.replace(temp_name, path)
    except OSError:
        if temp_name:
            with suppress(FileNotFoundError):
                Path(temp_name).unlink()
        raise
