"""Tests for resolving the active data model from the operation log."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta

import pytest

from infomodels.constants.history import (
    OP_CREATE_CONSTRAINTS,
    OP_CREATE_TABLES,
    OP_DROP_CONSTRAINTS,
    OP_DROP_TABLES,
)
from infomodels.database import SchemaStateResolver, resolve_schema_state
from infomodels.exceptions import NoActiveSchemaError, NoPriorSchemaError, SchemaStateError
from infomodels.model import OperationLogEntry, SchemaState

T0 = datetime(2024, 1, 1, 12, 0, 0)


def _entry(operation: str, minutes: int, version: str = "2.0.0", sequence: int = 0) -> OperationLogEntry:
    return OperationLogEntry(
        operation=operation,
        model="pedsnet",
        model_version=version,
        timestamp=T0 + timedelta(minutes=minutes),
        sequence=sequence,
    )


class _FakeLog:
    def __init__(self, entries: list[OperationLogEntry]) -> None:
        self._entries = entries
        self.requested: tuple[str, ...] | None = None

    def entries(self, operations: Iterable[str] | None = None) -> list[OperationLogEntry]:
        self.requested = tuple(operations) if operations is not None else None
        return list(self._entries)


def test_create_without_drop_is_active() -> None:
    state = resolve_schema_state([_entry(OP_CREATE_TABLES, 0)])

    assert state == SchemaState(model="pedsnet", model_version="2.0.0")


def test_create_followed_by_drop_is_not_active() -> None:
    entries = [_entry(OP_CREATE_TABLES, 0), _entry(OP_DROP_TABLES, 5)]

    with pytest.raises(NoActiveSchemaError):
        resolve_schema_state(entries)


def test_no_create_is_distinct_failure() -> None:
    with pytest.raises(NoPriorSchemaError):
        resolve_schema_state([_entry(OP_DROP_TABLES, 0)])


def test_empty_log_has_no_prior_schema() -> None:
    with pytest.raises(NoPriorSchemaError, match="no 'create tables' operation"):
        resolve_schema_state([], search_path="dcc_2")


def test_create_after_drop_is_active() -> None:
    entries = [
        _entry(OP_CREATE_TABLES, 0, version="1.0.0"),
        _entry(OP_DROP_TABLES, 5, version="1.0.0"),
        _entry(OP_CREATE_TABLES, 10, version="2.0.0"),
    ]

    assert resolve_schema_state(entries).model_version == "2.0.0"


def test_latest_create_wins_regardless_of_input_order() -> None:
    entries = [_entry(OP_CREATE_TABLES, 30, version="2.0.0"), _entry(OP_CREATE_TABLES, 10, version="1.0.0")]

    assert resolve_schema_state(entries).model_version == "2.0.0"


def test_create_and_drop_at_same_timestamp_is_not_active() -> None:
    entries = [_entry(OP_CREATE_TABLES, 0, sequence=2), _entry(OP_DROP_TABLES, 0, sequence=1)]

    with pytest.raises(NoActiveSchemaError):
        resolve_schema_state(entries)


def test_sequence_breaks_ties_between_creates() -> None:
    entries = [
        _entry(OP_CREATE_TABLES, 0, version="1.0.0", sequence=1),
        _entry(OP_CREATE_TABLES, 0, version="2.0.0", sequence=2),
    ]

    assert resolve_schema_state(entries).model_version == "2.0.0"
    assert resolve_schema_state(reversed(entries)).model_version == "2.0.0"


def test_constraint_operations_are_ignored() -> None:
    entries = [
        _entry(OP_CREATE_TABLES, 0),
        _entry(OP_CREATE_CONSTRAINTS, 1),
        _entry(OP_DROP_CONSTRAINTS, 2),
    ]

    assert resolve_schema_state(entries).model == "pedsnet"


def test_failures_carry_search_path() -> None:
    with pytest.raises(SchemaStateError) as excinfo:
        resolve_schema_state([], search_path="dcc_2,vocabulary")

    assert excinfo.value.search_path == "dcc_2,vocabulary"
    assert "dcc_2,vocabulary" in str(excinfo.value)


def test_resolver_reads_only_table_operations() -> None:
    log = _FakeLog([_entry(OP_CREATE_TABLES, 0)])

    state = SchemaStateResolver(log, search_path="dcc_2").resolve()

    assert state.model_version == "2.0.0"
    assert log.requested == (OP_CREATE_TABLES, OP_DROP_TABLES)


def test_resolver_propagates_failure_without_retry() -> None:
    log = _FakeLog([_entry(OP_CREATE_TABLES, 0), _entry(OP_DROP_TABLES, 1)])

    with pytest.raises(NoActiveSchemaError):
        SchemaStateResolver(log).resolve()
