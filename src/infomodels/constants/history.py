"""Operation log table name and recorded operation labels."""

from __future__ import annotations

VERSION_HISTORY_TABLE: str = "version_history"

OP_CREATE_TABLES: str = "create tables"
OP_DROP_TABLES: str = "drop tables"
OP_CREATE_CONSTRAINTS: str = "create constraints"
OP_DROP_CONSTRAINTS: str = "drop constraints"

VALID_OPERATIONS: frozenset[str] = frozenset(
    {OP_CREATE_TABLES, OP_DROP_TABLES, OP_CREATE_CONSTRAINTS, OP_DROP_CONSTRAINTS}
)

LOAD_BATCH_SIZE: int = 1000
