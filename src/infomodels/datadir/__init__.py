"""Dataset directories: metadata descriptors and packaging."""

from __future__ import annotations

from .metadata import DataDirectory, render_metadata
from .package import default_expand_path, default_package_path, pack, unpack

__all__ = [
    "DataDirectory",
    "default_expand_path",
    "default_package_path",
    "pack",
    "render_metadata",
    "unpack",
]
