"""SQLAlchemy engine construction scoped to a schema search path."""

from __future__ import annotations

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.schema import CreateSchema

from infomodels.exceptions import ConfigError, DatabaseError

logger = logging.getLogger(__name__)

_SEARCH_PATH_BACKENDS: frozenset[str] = frozenset({"postgresql"})


def primary_schema(search_path: str) -> str:
    """Return the first schema of a comma-separated search path."""
    return search_path.split(",")[0].strip()


def open_engine(dburi: str, *, password: str = "", search_path: str = "") -> Engine:
    """Create an engine whose connections resolve unqualified names via ``search_path``.

    The search path only applies to backends with schemas (PostgreSQL);
    elsewhere it is ignored.
    """
    if not dburi:
        raise ConfigError("a database URI is required (--dburi or INFOMODELS_DBURI)")

    try:
        url = make_url(dburi)
        if password:
            url = url.set(password=password)
        connect_args: dict[str, str] = {}
        if search_path:
            if url.get_backend_name() in _SEARCH_PATH_BACKENDS:
                connect_args["options"] = f"-csearch_path={search_path}"
            else:
                logger.debug("Ignoring search path %r for backend %s", search_path, url.get_backend_name())
        return create_engine(url, connect_args=connect_args, pool_pre_ping=True)
    except ArgumentError as exc:
        raise ConfigError(f"Invalid database URI: {exc}") from exc
    except ImportError as exc:
        raise ConfigError(f"Database driver for {dburi.split(':', 1)[0]!r} is not installed: {exc}") from exc


def ensure_schema(engine: Engine, schema: str) -> None:
    """Create ``schema`` if the backend supports schemas and it is missing."""
    if not schema or engine.dialect.name not in _SEARCH_PATH_BACKENDS:
        return
    try:
        with engine.begin() as conn:
            conn.execute(CreateSchema(schema, if_not_exists=True))
    except SQLAlchemyError as exc:
        raise DatabaseError(f"Cannot create schema {schema!r}: {exc}") from exc
