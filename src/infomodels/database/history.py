"""Append-only ``version_history`` operation log."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta
from typing import Protocol

from sqlalchemy import Column, DateTime, Integer, MetaData, String, Table, func, inspect, select
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from infomodels.constants.history import VALID_OPERATIONS, VERSION_HISTORY_TABLE
from infomodels.exceptions import DatabaseError
from infomodels.model import OperationLogEntry

logger = logging.getLogger(__name__)

_metadata = MetaData()

_CLOCK_STEP = timedelta(microseconds=1)

version_history = Table(
    VERSION_HISTORY_TABLE,
    _metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("datetime", DateTime, nullable=False),
    Column("operation", String(64), nullable=False),
    Column("model", String(128), nullable=False),
    Column("model_version", String(64), nullable=False),
)


def utc_now() -> datetime:
    """Naive UTC timestamp, as stored in the log."""
    return datetime.now(UTC).replace(tzinfo=None)


class OperationLog(Protocol):
    """Read access to schema operation entries."""

    def entries(self, operations: Iterable[str] | None = None) -> list[OperationLogEntry]: ...


class VersionHistoryLog:
    """The operation log stored in the ``version_history`` table of one schema."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def exists(self) -> bool:
        try:
            return inspect(self._engine).has_table(VERSION_HISTORY_TABLE)
        except SQLAlchemyError as exc:
            raise DatabaseError(f"Cannot inspect {VERSION_HISTORY_TABLE}: {exc}") from exc

    def ensure(self, connection: Connection | None = None) -> None:
        """Create the log table when it does not exist yet."""
        try:
            if connection is not None:
                version_history.create(connection, checkfirst=True)
                return
            with self._engine.begin() as conn:
                version_history.create(conn, checkfirst=True)
        except SQLAlchemyError as exc:
            raise DatabaseError(f"Cannot create {VERSION_HISTORY_TABLE}: {exc}") from exc

    def entries(self, operations: Iterable[str] | None = None) -> list[OperationLogEntry]:
        """Return log entries, newest first; an absent table reads as empty."""
        if not self.exists():
            return []

        stmt = select(version_history)
        if operations is not None:
            stmt = stmt.where(version_history.c.operation.in_(list(operations)))
        stmt = stmt.order_by(version_history.c.datetime.desc(), version_history.c.id.desc())

        try:
            with self._engine.connect() as conn:
                rows = conn.execute(stmt).mappings().all()
        except SQLAlchemyError as exc:
            raise DatabaseError(f"Cannot read {VERSION_HISTORY_TABLE}: {exc}") from exc

        return [
            OperationLogEntry(
                operation=row["operation"],
                model=row["model"],
                model_version=row["model_version"],
                timestamp=row["datetime"],
                sequence=row["id"],
            )
            for row in rows
        ]

    def record(
        self,
        operation: str,
        model: str,
        model_version: str,
        *,
        when: datetime | None = None,
        connection: Connection | None = None,
    ) -> None:
        """Append one entry, inside ``connection``'s transaction when given.

        Without an explicit ``when`` the entry is stamped strictly after every
        earlier entry, so a drop followed by a create never shares a timestamp.
        """
        if operation not in VALID_OPERATIONS:
            raise ValueError(f"unknown operation {operation!r}")
        try:
            if connection is not None:
                self._insert(connection, operation, model, model_version, when)
            else:
                with self._engine.begin() as conn:
                    self._insert(conn, operation, model, model_version, when)
        except SQLAlchemyError as exc:
            raise DatabaseError(f"Cannot record '{operation}' in {VERSION_HISTORY_TABLE}: {exc}") from exc
        logger.info("Recorded '%s' for model '%s/%s'", operation, model, model_version)

    def _insert(
        self,
        conn: Connection,
        operation: str,
        model: str,
        model_version: str,
        when: datetime | None,
    ) -> None:
        self.ensure(conn)
        if when is None:
            when = utc_now()
            latest = conn.execute(select(func.max(version_history.c.datetime))).scalar()
            if latest is not None and latest >= when:
                when = latest + _CLOCK_STEP
        conn.execute(
            version_history.insert().values(
                datetime=when,
                operation=operation,
                model=model,
                model_version=model_version,
            )
        )
