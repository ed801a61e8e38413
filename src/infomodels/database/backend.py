"""Materializing a data model in a database: tables, rows and foreign keys."""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterator
from pathlib import Path

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKeyConstraint,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
)
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.schema import AddConstraint, DropConstraint
from sqlalchemy.types import TypeEngine

from infomodels.constants.history import (
    LOAD_BATCH_SIZE,
    OP_CREATE_CONSTRAINTS,
    OP_CREATE_TABLES,
    OP_DROP_CONSTRAINTS,
    OP_DROP_TABLES,
)
from infomodels.database.history import VersionHistoryLog
from infomodels.datadir import DataDirectory
from infomodels.datamodels import FieldDefinition, ModelDefinition, TableDefinition
from infomodels.exceptions import DatabaseError
from infomodels.validator.fields import Coerced, coerce_value

_COLUMN_TYPES: dict[str, type[TypeEngine]] = {
    "integer": BigInteger,
    "number": Numeric,
    "boolean": Boolean,
    "date": Date,
    "datetime": DateTime,
}


def column_type(field: FieldDefinition) -> TypeEngine:
    if field.type == "string":
        return String(field.length) if field.length else Text()
    return _COLUMN_TYPES[field.type]()


def build_metadata(model: ModelDefinition, *, with_foreign_keys: bool = False) -> MetaData:
    """Describe every model table; foreign keys only when asked for."""
    metadata = MetaData()
    for table in model.tables:
        columns = [
            Column(
                field.name,
                column_type(field),
                primary_key=field.primary_key,
                nullable=not (field.required or field.primary_key),
            )
            for field in table.fields
        ]
        constraints = []
        if with_foreign_keys:
            constraints = [
                ForeignKeyConstraint(
                    [field.name],
                    [field.references],
                    name=f"fk_{table.name}_{field.name}",
                )
                for field in table.fields
                if field.references
            ]
        Table(table.name, metadata, *columns, *constraints)
    return metadata


def _read_rows(path: Path, table: TableDefinition) -> Iterator[dict[str, Coerced]]:
    with path.open(encoding="utf-8-sig", newline="") as handle:
        reader = csv.DictReader(handle)
        for row in reader:
            record: dict[str, Coerced] = {}
            for name, raw in row.items():
                field = table.field(name) if name is not None else None
                if field is None:
                    continue
                try:
                    record[name] = coerce_value(raw or "", field)
                except ValueError as exc:
                    raise DatabaseError(
                        f"{path.name} line {reader.line_num}: invalid {field.type} for '{name}': {raw!r}; "
                        "run 'infomodels validate' first"
                    ) from exc
            yield record


class ModelDatabase:
    """One data model materialized in the database behind ``engine``.

    Every schema-changing operation is recorded in the same transaction in
    ``version_history``.
    """

    def __init__(
        self,
        engine: Engine,
        model: ModelDefinition,
        *,
        history: VersionHistoryLog | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._engine = engine
        self._model = model
        self._history = history or VersionHistoryLog(engine)
        self._logger = logger or logging.getLogger(__name__)
        self._metadata = build_metadata(model)

    @property
    def model(self) -> ModelDefinition:
        return self._model

    def create_tables(self) -> None:
        try:
            with self._engine.begin() as conn:
                self._metadata.create_all(conn, checkfirst=False)
                self._record(OP_CREATE_TABLES, conn)
        except SQLAlchemyError as exc:
            raise DatabaseError(f"Cannot create tables (use --replace to drop existing ones): {exc}") from exc
        self._logger.info("Created %d tables", len(self._metadata.tables))

    def drop_tables(self) -> None:
        try:
            with self._engine.begin() as conn:
                self._metadata.drop_all(conn, checkfirst=True)
                self._record(OP_DROP_TABLES, conn)
        except SQLAlchemyError as exc:
            raise DatabaseError(f"Cannot drop tables: {exc}") from exc
        self._logger.info("Dropped model tables")

    def load(self, data_dir: DataDirectory) -> dict[str, int]:
        """Insert every data file listed in the directory metadata; return row counts per table."""
        counts: dict[str, int] = {}
        for record in data_dir.records:
            table_def = self._model.table(record["table"])
            if table_def is None:
                self._logger.warning(
                    "Unknown table '%s' for %s. Choices are: %s",
                    record["table"],
                    record["filename"],
                    ", ".join(self._model.table_names),
                )
                continue

            table = self._metadata.tables[table_def.name]
            path = data_dir.path / record["filename"]
            loaded = 0
            try:
                with self._engine.begin() as conn:
                    batch: list[dict[str, Coerced]] = []
                    for row in _read_rows(path, table_def):
                        batch.append(row)
                        if len(batch) >= LOAD_BATCH_SIZE:
                            conn.execute(table.insert(), batch)
                            loaded += len(batch)
                            batch = []
                    if batch:
                        conn.execute(table.insert(), batch)
                        loaded += len(batch)
            except (SQLAlchemyError, OSError, UnicodeDecodeError, csv.Error) as exc:
                raise DatabaseError(f"Cannot load {record['filename']} into '{table_def.name}': {exc}") from exc

            counts[table_def.name] = counts.get(table_def.name, 0) + loaded
            self._logger.info("Loaded %d rows from %s into '%s'", loaded, record["filename"], table_def.name)
        return counts

    def create_constraints(self) -> int:
        return self._alter_constraints(AddConstraint, OP_CREATE_CONSTRAINTS)

    def drop_constraints(self) -> int:
        return self._alter_constraints(DropConstraint, OP_DROP_CONSTRAINTS)

    def _alter_constraints(self, ddl: type[AddConstraint] | type[DropConstraint], operation: str) -> int:
        metadata = build_metadata(self._model, with_foreign_keys=True)
        constraints = [
            constraint
            for table in metadata.sorted_tables
            for constraint in sorted(table.foreign_key_constraints, key=lambda fk: str(fk.name))
        ]
        try:
            with self._engine.begin() as conn:
                for constraint in constraints:
                    conn.execute(ddl(constraint))
                self._record(operation, conn)
        except SQLAlchemyError as exc:
            raise DatabaseError(f"Cannot {operation}: {exc}") from exc
        return len(constraints)

    def _record(self, operation: str, conn: Connection) -> None:
        self._history.record(operation, self._model.name, self._model.version, connection=conn)
