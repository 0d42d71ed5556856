"""Structural comparison of two database schemas.

Pure logic -- no I/O, no database connections.

Two schemas are equal when they hold the same tables by name, and each
pair of tables holds the same columns by name with the same data type and
auto-increment flag.  Nullability, defaults, key kind and the ``extra``
attribute are not part of the comparison.

Usage:
    from db_merge.schema.comparator import compare_schemas, schemas_equal

    try:
        compare_schemas(source, target)
    except SchemaMismatchError as e:
        print(e.reason, e)
"""

from db_merge.errors import MismatchReason, SchemaMismatchError
from db_merge.schema.models import DatabaseSchema, TableSchema


def compare_schemas(a: DatabaseSchema, b: DatabaseSchema) -> None:
    """Check that two schemas are structurally equal.

    Checks run in order and stop at the first difference:

    1. Table counts are equal.
    2. Every table of *a* exists in *b* by name.
    3. For each table pair, column counts are equal and every column of
       *a* exists in *b* with the same ``data_type`` and ``auto_increment``.

    Counts are compared before names, so a table or column missing on
    either side is reported whichever way the arguments are passed.

    Args:
        a: First schema.
        b: Second schema.

    Raises:
        SchemaMismatchError: With ``reason`` set to the first failed check.

    Examples:
        >>> from db_merge.schema.models import ColumnSchema, TableSchema
        >>> users = TableSchema(name="users", columns={
        ...     "id": ColumnSchema(name="id", data_type="int"),
        ... })
        >>> s = DatabaseSchema(name="app", tables={"users": users})
        >>> compare_schemas(s, s) is None
        True
    """
    if len(a.tables) != len(b.tables):
        raise SchemaMismatchError(
            MismatchReason.TABLE_COUNT,
            f"table count mismatch: {len(a.tables)} != {len(b.tables)}",
            details={"left": len(a.tables), "right": len(b.tables)},
        )

    for name, table in a.tables.items():
        other = b.tables.get(name)
        if other is None:
            raise SchemaMismatchError(
                MismatchReason.TABLE_MISSING,
                f"table {name} not found in schema {b.name}",
                table=name,
            )
        _compare_tables(table, other)


def _compare_tables(table: TableSchema, other: TableSchema) -> None:
    if len(table.columns) != len(other.columns):
        raise SchemaMismatchError(
            MismatchReason.COLUMN_COUNT,
            f"column count mismatch in table {table.name}: "
            f"{len(table.columns)} != {len(other.columns)}",
            table=table.name,
            details={"left": len(table.columns), "right": len(other.columns)},
        )

    for name, column in table.columns.items():
        other_column = other.columns.get(name)
        if other_column is None:
            raise SchemaMismatchError(
                MismatchReason.COLUMN_MISSING,
                f"column {table.name}.{name} not found in other schema",
                table=table.name,
                column=name,
            )
        if column.data_type != other_column.data_type:
            raise SchemaMismatchError(
                MismatchReason.TYPE_MISMATCH,
                f"column type mismatch for {table.name}.{name}: "
                f"{column.data_type} != {other_column.data_type}",
                table=table.name,
                column=name,
                details={"left": column.data_type, "right": other_column.data_type},
            )
        if column.auto_increment != other_column.auto_increment:
            raise SchemaMismatchError(
                MismatchReason.AUTO_INCREMENT_MISMATCH,
                f"column auto increment mismatch for {table.name}.{name}: "
                f"{column.auto_increment} != {other_column.auto_increment}",
                table=table.name,
                column=name,
            )


def schemas_equal(a: DatabaseSchema, b: DatabaseSchema) -> bool:
    """Return ``True`` if *a* and *b* are structurally equal."""
    try:
        compare_schemas(a, b)
    except SchemaMismatchError:
        return False
    return True
