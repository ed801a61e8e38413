"""Tests for dataset packaging."""

from __future__ import annotations

import io
import tarfile
from pathlib import Path

import pytest

from infomodels.datadir import DataDirectory, default_package_path, pack, unpack
from infomodels.exceptions import PackagingError


def test_pack_then_unpack_recreates_directory(data_dir: Path, tmp_path: Path) -> None:
    package = pack(data_dir)
    target = tmp_path / "restored"

    unpack(package, target)

    assert package == default_package_path(data_dir)
    assert package.name == "data.tar.gz"
    restored = target / data_dir.name
    assert (restored / "person.csv").read_bytes() == (data_dir / "person.csv").read_bytes()
    directory = DataDirectory(restored)
    directory.read_metadata()
    directory.verify()


def test_pack_to_explicit_output(data_dir: Path, tmp_path: Path) -> None:
    output = tmp_path / "out" / "dataset.tar.gz"
    output.parent.mkdir()

    assert pack(data_dir, output) == output
    with tarfile.open(output) as archive:
        assert "data/metadata.csv" in archive.getnames()


def test_pack_rejects_output_inside_directory(data_dir: Path) -> None:
    with pytest.raises(PackagingError, match="must be outside"):
        pack(data_dir, data_dir / "self.tar.gz")


def test_pack_requires_directory(tmp_path: Path) -> None:
    with pytest.raises(PackagingError, match="Not a directory"):
        pack(tmp_path / "missing")


def test_unpack_missing_package(tmp_path: Path) -> None:
    with pytest.raises(PackagingError, match="Package not found"):
        unpack(tmp_path / "missing.tar.gz")


def test_unpack_refuses_members_outside_target(tmp_path: Path) -> None:
    package = tmp_path / "evil.tar.gz"
    payload = b"owned"
    with tarfile.open(package, "w:gz") as archive:
        member = tarfile.TarInfo("../escape.txt")
        member.size = len(payload)
        archive.addfile(member, io.BytesIO(payload))
    target = tmp_path / "target"
    target.mkdir()

    with pytest.raises(PackagingError, match="unsafe member"):
        unpack(package, target)

    assert not (tmp_path / "escape.txt").exists()


def test_unpack_rejects_corrupt_package(tmp_path: Path) -> None:
    package = tmp_path / "broken.tar.gz"
    package.write_bytes(b"not a tarball")

    with pytest.raises(PackagingError, match="Cannot expand package"):
        unpack(package)
