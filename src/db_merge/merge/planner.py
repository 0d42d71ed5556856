"""Merge planning between two structurally equal databases.

For every table that owns an auto-increment primary key with a known
high-water mark, the planner emits one statement copying all source rows
into the target with the primary key shifted by the *target* table's
high-water mark.  Shifted keys land strictly above every key already in
the target, so they cannot collide.  Tables without such a key are
skipped.

Statements come out in the target schema's table order.  Foreign keys
referencing a shifted primary key are not rewritten by the emitted SQL;
``MergePlanner.record_key_mappings`` fills a ``PrimaryKeyRemapper`` with
the old -> new translations as the starting point for that rewrite.

Usage:
    from db_merge.merge.planner import MergePlanner

    planner = MergePlanner()
    plan = planner.plan(source_schema, target_schema)
    print(plan.render())
"""

import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection

from db_merge.errors import MergePlanningError, SchemaMismatchError
from db_merge.merge.models import MergePlan, MigrationStatement
from db_merge.merge.remapper import PrimaryKeyRemapper
from db_merge.schema.comparator import compare_schemas
from db_merge.schema.models import DatabaseSchema, TableSchema
from db_merge.sql import build_offset_insert, build_select

logger = logging.getLogger(__name__)


class MergePlanner:
    """Plans a merge and owns the primary key remapper for that merge."""

    def __init__(self, remapper: PrimaryKeyRemapper | None = None) -> None:
        self.remapper = remapper if remapper is not None else PrimaryKeyRemapper()

    def plan(self, source: DatabaseSchema, target: DatabaseSchema) -> MergePlan:
        """Build the merge plan copying *source* rows into *target*.

        Args:
            source: Schema of the database rows are read from.
            target: Schema of the database rows are written to.  Its
                high-water marks provide the offsets.

        Returns:
            MergePlan with one statement per offsettable table.

        Raises:
            MergePlanningError: If the schemas are not structurally equal.
                The ``SchemaMismatchError`` is chained as ``__cause__``.
        """
        try:
            compare_schemas(source, target)
        except SchemaMismatchError as e:
            raise MergePlanningError(f"schemas are not equal: {e}") from e

        plan = MergePlan(source_database=source.name, target_database=target.name)
        for table in target.tables.values():
            statement = self._plan_table(source.name, target.name, table)
            if statement is None:
                logger.debug("Skipping table %s: no offsettable primary key", table.name)
                plan.skipped_tables.append(table.name)
            else:
                plan.statements.append(statement)

        logger.debug(
            "Planned %d statements, skipped %d tables",
            len(plan.statements),
            len(plan.skipped_tables),
        )
        return plan

    def _plan_table(
        self,
        source_database: str,
        target_database: str,
        table: TableSchema,
    ) -> MigrationStatement | None:
        offset_columns = table.offset_columns
        if not offset_columns:
            return None

        offsets = {c.name: c.auto_increment_offset for c in offset_columns}
        sql = build_offset_insert(
            source_database,
            target_database,
            table.name,
            list(offsets.items()),
            [c.name for c in table.remaining_columns],
        )
        return MigrationStatement(table=table.name, sql=sql, offsets=offsets)

    async def record_key_mappings(
        self,
        conn: AsyncConnection,
        plan: MergePlan,
    ) -> int:
        """Record the old -> new primary key of every source row the plan copies.

        Reads the offset columns of each planned table from the source
        database and stores ``value -> value + offset`` in ``self.remapper``.
        The emitted statements are not changed.

        Args:
            conn: Connection able to read the plan's source database.
            plan: Plan returned by ``plan()``.

        Returns:
            Number of mappings recorded.

        Raises:
            MergePlanningError: If reading a source table fails.
        """
        recorded = 0
        for statement in plan.statements:
            columns = list(statement.offsets)
            query = build_select(plan.source_database, statement.table, columns)
            try:
                result = await conn.execute(text(query))
                rows = result.fetchall()
            except SQLAlchemyError as e:
                raise MergePlanningError(
                    f"failed to read primary keys of {statement.table}",
                    details={"table": statement.table},
                ) from e

            for row in rows:
                for column, value in zip(columns, row):
                    self.remapper.set_mapping(
                        statement.table,
                        column,
                        value,
                        value + statement.offsets[column],
                    )
                    recorded += 1
        return recorded


def plan_merge(source: DatabaseSchema, target: DatabaseSchema) -> MergePlan:
    """Plan a merge of *source* into *target* with a fresh planner."""
    return MergePlanner().plan(source, target)
