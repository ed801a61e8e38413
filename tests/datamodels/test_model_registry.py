"""Tests for model definition files and the model registry."""

from __future__ import annotations

from pathlib import Path

import pytest

from infomodels.datamodels import ModelRegistry, load_model_file, version_sort_key
from infomodels.exceptions import ConfigError, ModelDefinitionError


def test_get_without_version_returns_latest(models_dir: Path) -> None:
    model = ModelRegistry(models_dir).get("pedsnet")

    assert model.version == "2.0.0"
    assert model.table_names == ("person", "visit")


def test_get_specific_version(models_dir: Path) -> None:
    model = ModelRegistry(models_dir).get("pedsnet", "1.0.0")

    assert model.version == "1.0.0"
    assert model.table("visit") is None


def test_invalid_version_lists_choices(models_dir: Path) -> None:
    with pytest.raises(ModelDefinitionError, match=r"Invalid version for 'pedsnet'. Choose from: 1.0.0, 2.0.0"):
        ModelRegistry(models_dir).get("pedsnet", "3.0.0")


def test_unknown_model_lists_known_models(models_dir: Path) -> None:
    with pytest.raises(ModelDefinitionError, match="Unknown model 'omop'. Choose from: pedsnet"):
        ModelRegistry(models_dir).get("omop")


def test_names_and_versions(models_dir: Path) -> None:
    registry = ModelRegistry(models_dir)

    assert registry.names() == ["pedsnet"]
    assert registry.versions("pedsnet") == ["1.0.0", "2.0.0"]


def test_missing_models_dir_is_a_config_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Models directory does not exist"):
        ModelRegistry(tmp_path / "nope").names()


def test_field_definitions_are_parsed(models_dir: Path) -> None:
    visit = ModelRegistry(models_dir).get("pedsnet").table("visit")

    assert visit is not None
    person_id = visit.field("person_id")
    assert person_id is not None
    assert person_id.type == "integer"
    assert person_id.required
    assert person_id.referenced_table == "person"
    assert person_id.referenced_field == "person_id"


def test_schema_violation_names_location(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text(
        "name: m\nversion: '1'\ntables:\n  t:\n    fields:\n      f: {type: blob}\n",
        encoding="utf-8",
    )

    with pytest.raises(ModelDefinitionError, match="tables/t/fields/f/type"):
        load_model_file(path)


def test_unknown_reference_target_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text(
        "name: m\nversion: '1'\ntables:\n  t:\n    fields:\n      f: {type: integer, references: other.id}\n",
        encoding="utf-8",
    )

    with pytest.raises(ModelDefinitionError, match="references unknown field 'other.id'"):
        load_model_file(path)


def test_invalid_yaml_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("name: [unclosed\n", encoding="utf-8")

    with pytest.raises(ModelDefinitionError, match="Invalid YAML"):
        load_model_file(path)


def test_duplicate_revision_is_rejected(models_dir: Path) -> None:
    (models_dir / "copy.yml").write_text((models_dir / "pedsnet-1.0.0.yaml").read_text(), encoding="utf-8")

    with pytest.raises(ModelDefinitionError, match="Duplicate definition of 'pedsnet/1.0.0'"):
        ModelRegistry(models_dir).names()


def test_version_sort_key_orders_naturally() -> None:
    versions = ["2.10.0", "2.9.0", "2.0.0", "10.0"]

    assert sorted(versions, key=version_sort_key) == ["2.0.0", "2.9.0", "2.10.0", "10.0"]


def test_undecodable_model_file_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "latin.yaml"
    path.write_bytes(b"name: p\xe9dsnet\nversion: '1'\n")

    with pytest.raises(ModelDefinitionError, match="Cannot read model definition"):
        load_model_file(path)
