"""Shared pytest fixtures: model definitions, data directories and isolation."""

from __future__ import annotations

import csv
import logging
import os
from collections.abc import Callable, Iterator, Sequence
from pathlib import Path
from typing import TypeAlias

import pytest

from infomodels.datadir import DataDirectory
from infomodels.logs import JsonFormatter, TextFormatter

PEDSNET_2_YAML = """\
name: pedsnet
version: "2.0.0"
tables:
  person:
    fields:
      person_id: {type: integer, required: true, primary_key: true}
      gender: {type: string, required: true, length: 1}
      birth_date: {type: date}
      weight: {type: number}
  visit:
    fields:
      visit_id: {type: integer, required: true, primary_key: true}
      person_id: {type: integer, required: true, references: person.person_id}
      start_time: {type: datetime}
      inpatient: {type: boolean}
"""

PEDSNET_1_YAML = """\
name: pedsnet
version: "1.0.0"
tables:
  person:
    fields:
      person_id: {type: integer, required: true, primary_key: true}
      gender: {type: string, required: true, length: 1}
"""

PERSON_ROWS: list[list[str]] = [
    ["person_id", "gender", "birth_date", "weight"],
    ["1", "F", "2010-04-01", "21.5"],
    ["2", "M", "2012-11-30", ""],
]

VISIT_ROWS: list[list[str]] = [
    ["visit_id", "person_id", "start_time", "inpatient"],
    ["10", "1", "2020-01-01T08:30:00", "true"],
    ["11", "2", "2020-02-03T12:00:00", "false"],
    ["12", "2", "", ""],
]

CsvWriter: TypeAlias = Callable[[Path, Sequence[Sequence[str]]], Path]
Annotator: TypeAlias = Callable[..., None]


def write_rows(path: Path, rows: Sequence[Sequence[str]]) -> Path:
    """Write rows as a CSV file and return its path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as handle:
        csv.writer(handle, lineterminator="\n").writerows(rows)
    return path


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop INFOMODELS_* variables and restore root logging after each test."""
    for name in list(os.environ):
        if name.startswith("INFOMODELS_"):
            monkeypatch.delenv(name)

    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if isinstance(handler.formatter, (JsonFormatter, TextFormatter)):
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def csv_writer() -> CsvWriter:
    return write_rows


@pytest.fixture
def models_dir(tmp_path: Path) -> Path:
    """Directory holding two revisions of the ``pedsnet`` model."""
    root = tmp_path / "models"
    root.mkdir()
    (root / "pedsnet-2.0.0.yaml").write_text(PEDSNET_2_YAML, encoding="utf-8")
    (root / "pedsnet-1.0.0.yaml").write_text(PEDSNET_1_YAML, encoding="utf-8")
    return root


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Annotated, valid ``pedsnet/2.0.0`` data directory."""
    root = tmp_path / "data"
    write_rows(root / "person.csv", PERSON_ROWS)
    write_rows(root / "visit.csv", VISIT_ROWS)
    directory = DataDirectory(root)
    directory.populate_from_data(model="pedsnet", model_version="2.0.0", data_version="1", site="chop")
    directory.write_metadata()
    return root


@pytest.fixture
def annotate_dir() -> Annotator:
    """Rewrite the metadata of a directory after its data files changed."""

    def _annotate(root: Path, *, model: str = "pedsnet", model_version: str = "2.0.0") -> None:
        directory = DataDirectory(root)
        directory.populate_from_data(model=model, model_version=model_version)
        directory.write_metadata()

    return _annotate
