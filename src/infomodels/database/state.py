"""Resolution of the active data model from the operation log."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from infomodels.constants.history import OP_CREATE_TABLES, OP_DROP_TABLES
from infomodels.database.history import OperationLog
from infomodels.exceptions import NoActiveSchemaError, NoPriorSchemaError
from infomodels.model import OperationLogEntry, SchemaState


def _later(current: OperationLogEntry | None, candidate: OperationLogEntry) -> OperationLogEntry:
    if current is None:
        return candidate
    if (candidate.timestamp, candidate.sequence) > (current.timestamp, current.sequence):
        return candidate
    return current


def resolve_schema_state(entries: Iterable[OperationLogEntry], *, search_path: str = "") -> SchemaState:
    """Return the model and version of the latest 'create tables' still in effect.

    The create is in effect when no 'drop tables' exists or the create is
    strictly newer than the latest drop; a create and drop sharing a
    timestamp leave nothing active. Entries of one operation type are
    ordered by ``(timestamp, sequence)``.
    """
    latest_create: OperationLogEntry | None = None
    latest_drop: OperationLogEntry | None = None
    for entry in entries:
        if entry.operation == OP_CREATE_TABLES:
            latest_create = _later(latest_create, entry)
        elif entry.operation == OP_DROP_TABLES:
            latest_drop = _later(latest_drop, entry)

    location = f" (search_path {search_path})" if search_path else ""
    if latest_create is None:
        raise NoPriorSchemaError(
            f"Can't determine model and version because no '{OP_CREATE_TABLES}' operation "
            f"is recorded in version_history{location}",
            search_path=search_path,
        )
    if latest_drop is not None and not latest_create.timestamp > latest_drop.timestamp:
        raise NoActiveSchemaError(
            f"Can't determine model and version because the last '{OP_CREATE_TABLES}' "
            f"({latest_create.model}/{latest_create.model_version}) was followed by "
            f"'{OP_DROP_TABLES}'{location}",
            search_path=search_path,
        )
    return SchemaState(model=latest_create.model, model_version=latest_create.model_version)


class SchemaStateResolver:
    """Reads the operation log once per call and resolves the active schema state."""

    def __init__(
        self,
        log: OperationLog,
        *,
        search_path: str = "",
        logger: logging.Logger | None = None,
    ) -> None:
        self._log = log
        self._search_path = search_path
        self._logger = logger or logging.getLogger(__name__)

    def resolve(self) -> SchemaState:
        entries = self._log.entries((OP_CREATE_TABLES, OP_DROP_TABLES))
        state = resolve_schema_state(entries, search_path=self._search_path)
        self._logger.info(
            "Resolved active model '%s/%s' from version_history",
            state.model,
            state.model_version,
        )
        return state
