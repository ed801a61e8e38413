"""Packing data directories into gzip tarballs and expanding them again."""

from __future__ import annotations

import logging
import tarfile
from pathlib import Path

from infomodels.constants.datadir import PACKAGE_SUFFIX
from infomodels.exceptions import PackagingError

logger = logging.getLogger(__name__)


def default_package_path(directory: Path) -> Path:
    return directory.parent / f"{directory.name}{PACKAGE_SUFFIX}"


def default_expand_path(package: Path) -> Path:
    return package.parent


def pack(directory: Path, output: Path | None = None) -> Path:
    """Write ``directory`` into a gzip tarball and return its path.

    Members are stored relative to the directory's own name, so expanding
    the package recreates the directory.
    """
    if not directory.is_dir():
        raise PackagingError(f"Not a directory: {directory}")
    target = output or default_package_path(directory)
    if target.resolve().is_relative_to(directory.resolve()):
        raise PackagingError(f"Package path {target} must be outside {directory}")

    try:
        with tarfile.open(target, "w:gz") as archive:
            archive.add(directory, arcname=directory.name)
    except (OSError, tarfile.TarError) as exc:
        raise PackagingError(f"Cannot write package {target}: {exc}") from exc

    logger.info("Packed %s into %s", directory, target)
    return target


def unpack(package: Path, output: Path | None = None) -> Path:
    """Expand a package under ``output`` (default: the package's directory)."""
    if not package.is_file():
        raise PackagingError(f"Package not found: {package}")
    target = output or default_expand_path(package)

    try:
        with tarfile.open(package, "r:*") as archive:
            archive.extractall(target, filter="data")
    except tarfile.FilterError as exc:
        raise PackagingError(f"Refusing unsafe member in {package}: {exc}") from exc
    except (OSError, tarfile.TarError) as exc:
        raise PackagingError(f"Cannot expand package {package}: {exc}") from exc

    logger.info("Expanded %s into %s", package, target)
    return target
