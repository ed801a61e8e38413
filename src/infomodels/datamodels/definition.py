"""Typed data model definitions: models, tables and fields."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from infomodels.types import FieldType


@dataclass(frozen=True)
class FieldDefinition:
    """One column of a model table."""

    name: str
    type: FieldType = "string"
    required: bool = False
    primary_key: bool = False
    length: int | None = None
    references: str | None = None

    @property
    def referenced_table(self) -> str | None:
        return self.references.partition(".")[0] if self.references else None

    @property
    def referenced_field(self) -> str | None:
        return self.references.partition(".")[2] if self.references else None


@dataclass(frozen=True)
class TableDefinition:
    """A model table and its ordered fields."""

    name: str
    fields: tuple[FieldDefinition, ...]

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(field.name for field in self.fields)

    def field(self, name: str) -> FieldDefinition | None:
        for field in self.fields:
            if field.name == name:
                return field
        return None


@dataclass(frozen=True)
class ModelDefinition:
    """A named, versioned data model."""

    name: str
    version: str
    tables: tuple[TableDefinition, ...]

    @property
    def table_names(self) -> tuple[str, ...]:
        return tuple(table.name for table in self.tables)

    def table(self, name: str) -> TableDefinition | None:
        for table in self.tables:
            if table.name == name:
                return table
        return None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> ModelDefinition:
        """Build a definition from a mapping already checked against the model schema."""
        tables = tuple(
            TableDefinition(
                name=table_name,
                fields=tuple(
                    FieldDefinition(
                        name=field_name,
                        type=field_raw["type"],
                        required=field_raw.get("required", False),
                        primary_key=field_raw.get("primary_key", False),
                        length=field_raw.get("length"),
                        references=field_raw.get("references"),
                    )
                    for field_name, field_raw in table_raw["fields"].items()
                ),
            )
            for table_name, table_raw in raw["tables"].items()
        )
        return cls(name=raw["name"], version=str(raw["version"]), tables=tables)
