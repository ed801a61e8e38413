"""Lookup of data model definitions stored as YAML files."""

from __future__ import annotations

import logging
import re
from pathlib import Path

import jsonschema
import yaml
from jsonschema.exceptions import best_match

from infomodels.constants.models import MODEL_DEFINITION_SCHEMA, MODEL_FILE_GLOBS
from infomodels.datamodels.definition import ModelDefinition
from infomodels.exceptions import ConfigError, ModelDefinitionError

logger = logging.getLogger(__name__)

_VERSION_PART = re.compile(r"(\d+)")


def version_sort_key(version: str) -> tuple[tuple[int, int | str], ...]:
    """Order versions naturally, so ``2.10.0`` sorts after ``2.9.0``."""
    parts: list[tuple[int, int | str]] = []
    for token in _VERSION_PART.split(version):
        if not token:
            continue
        parts.append((1, int(token)) if token.isdigit() else (0, token))
    return tuple(parts)


def load_model_file(path: Path) -> ModelDefinition:
    """Parse and schema-check one model definition file."""
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise ModelDefinitionError(f"Cannot read model definition {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ModelDefinitionError(f"Invalid YAML in model definition {path}: {exc}") from exc

    validator = jsonschema.Draft202012Validator(MODEL_DEFINITION_SCHEMA)
    error = best_match(validator.iter_errors(raw))
    if error is not None:
        location = "/".join(str(part) for part in error.absolute_path) or "<root>"
        raise ModelDefinitionError(f"{path}: {location}: {error.message}")

    definition = ModelDefinition.from_dict(raw)
    for table in definition.tables:
        for field in table.fields:
            if field.referenced_table is None:
                continue
            target = definition.table(field.referenced_table)
            if target is None or target.field(field.referenced_field or "") is None:
                raise ModelDefinitionError(
                    f"{path}: {table.name}.{field.name} references unknown field {field.references!r}"
                )
    return definition


class ModelRegistry:
    """All model revisions found under one directory."""

    def __init__(self, models_dir: Path) -> None:
        self._models_dir = models_dir
        self._revisions: dict[str, dict[str, ModelDefinition]] | None = None

    @property
    def models_dir(self) -> Path:
        return self._models_dir

    def names(self) -> list[str]:
        return sorted(self._load())

    def versions(self, name: str) -> list[str]:
        """Return the known versions of ``name``, oldest first."""
        return sorted(self._load().get(name, {}), key=version_sort_key)

    def get(self, name: str, version: str | None = None) -> ModelDefinition:
        """Return one model revision, or the latest when ``version`` is empty."""
        revisions = self._load().get(name)
        if not revisions:
            choices = ", ".join(self.names()) or "none"
            raise ModelDefinitionError(f"Unknown model '{name}'. Choose from: {choices}")

        if not version:
            latest = self.versions(name)[-1]
            model = revisions[latest]
        elif version in revisions:
            model = revisions[version]
        else:
            raise ModelDefinitionError(
                f"Invalid version for '{name}'. Choose from: {', '.join(self.versions(name))}"
            )

        logger.info("Using model '%s/%s'", model.name, model.version)
        return model

    def _load(self) -> dict[str, dict[str, ModelDefinition]]:
        if self._revisions is not None:
            return self._revisions
        if not self._models_dir.is_dir():
            raise ConfigError(f"Models directory does not exist: {self._models_dir}")

        revisions: dict[str, dict[str, ModelDefinition]] = {}
        paths = sorted({path for pattern in MODEL_FILE_GLOBS for path in self._models_dir.rglob(pattern)})
        for path in paths:
            definition = load_model_file(path)
            by_version = revisions.setdefault(definition.name, {})
            if definition.version in by_version:
                raise ModelDefinitionError(
                    f"Duplicate definition of '{definition.name}/{definition.version}' in {path}"
                )
            by_version[definition.version] = definition
            logger.debug("Loaded model '%s/%s' from %s", definition.name, definition.version, path)

        self._revisions = revisions
        return revisions
