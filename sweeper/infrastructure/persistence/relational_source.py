"""Relational sweep adapter: oldest-first batch selection and physical deletes.

There is no explicit cursor. Each fetch re-queries
`ORDER BY <retention column> LIMIT n` below a frozen cutoff; rows removed by
the previous batch are gone, so the next query returns the next-oldest
survivors. Table and column names come from configuration and are rendered
through SQLAlchemy Core constructs (quoted identifiers, bound values).
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import DateTime, Delete, column, delete, select, table
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.sql.expression import TableClause

from sweeper.application.services.retention_policy import RetentionPolicy
from sweeper.core.constants import STORE_HISTORY, STORE_PRIMARY
from sweeper.domain.exceptions import StoreOperationException
from sweeper.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def sweep_table(name: str, id_column: str, retention_column: str | None = None) -> TableClause:
    """Lightweight table construct with the id (and optional retention) column.

    The id column is untyped so no cast is rendered on its binds; Postgres
    infers uuid or text from the column itself.
    """
    columns = [column(id_column)]
    if retention_column is not None:
        columns.append(column(retention_column, DateTime(timezone=True)))
    return table(name, *columns)


class RelationalBatchSource:
    """Selects ids of rows older than the policy cutoff, oldest first."""

    def __init__(
        self,
        engine: AsyncEngine,
        policy: RetentionPolicy,
        *,
        table_name: str,
        id_column: str = "id",
        retention_column: str = "lastUpdated",
    ) -> None:
        self.engine = engine
        self.policy = policy
        self.table_name = table_name
        self._table = sweep_table(table_name, id_column, retention_column)
        self._id = self._table.c[id_column]
        self._retention = self._table.c[retention_column]

    async def fetch_batch(self, limit: int) -> list[str]:
        """Return up to limit ids with retention key < cutoff, ascending by retention key."""
        stmt = (
            select(self._id)
            .where(self._retention < self.policy.cutoff)
            .order_by(self._retention)
            .limit(limit)
        )
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(stmt)
                return [str(row[0]) for row in result]
        except SQLAlchemyError as e:
            raise StoreOperationException(STORE_PRIMARY, "fetch_batch", str(e)) from e


class TableDeletionTarget:
    """Deletes rows by id from one table, each call in its own transaction.

    Used for the primary table and its history shadow table, which share
    the same id space.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        *,
        table_name: str,
        id_column: str = "id",
        name: str = STORE_PRIMARY,
    ) -> None:
        self.engine = engine
        self.table_name = table_name
        self.name = name
        self._table = sweep_table(table_name, id_column)
        self._id = self._table.c[id_column]

    def delete_statement(self, ids: Sequence[str]) -> Delete:
        """DELETE ... WHERE id IN (...) for the distinct ids, in first-seen order."""
        return delete(self._table).where(self._id.in_(list(dict.fromkeys(ids))))

    async def delete(self, ids: Sequence[str]) -> int:
        """Physically delete rows whose id is in ids; return rows removed.

        Raises:
            ValueError: If ids is empty.
            StoreOperationException: On any database error (transaction rolled back).
        """
        if not ids:
            raise ValueError("ids must be non-empty")
        stmt = self.delete_statement(ids)
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(stmt)
                removed = result.rowcount or 0
        except SQLAlchemyError as e:
            raise StoreOperationException(self.name, "delete", str(e)) from e
        logger.debug("DELETE %s: %s row(s)", self.table_name, removed)
        return removed


def audit_deletion_targets(
    engine: AsyncEngine,
    *,
    table_name: str,
    history_table_name: str | None,
    id_column: str = "id",
) -> list[TableDeletionTarget]:
    """Primary table target, then the history table target when configured."""
    targets = [
        TableDeletionTarget(engine, table_name=table_name, id_column=id_column, name=STORE_PRIMARY)
    ]
    if history_table_name:
        targets.append(
            TableDeletionTarget(
                engine, table_name=history_table_name, id_column=id_column, name=STORE_HISTORY
            )
        )
    return targets
