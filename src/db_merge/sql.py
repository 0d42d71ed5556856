"""SQL text building with dialect-quoted identifiers.

Table, column and database names come from introspection and are never
trusted as raw SQL: every identifier goes through the SQLAlchemy MySQL
dialect's identifier preparer, which wraps it in backticks and escapes
embedded backticks.  Values are passed as bound parameters elsewhere;
the only literal rendered here is an integer offset.
"""

from collections.abc import Iterable, Sequence

from sqlalchemy.dialects import mysql

_preparer = mysql.dialect().identifier_preparer


def quote_identifier(name: str) -> str:
    """Quote a single identifier.

    Example:
        >>> quote_identifier("order`s")
        '`order``s`'
    """
    return _preparer.quote_identifier(name)


def qualified_name(database: str, table: str) -> str:
    """Return ```database`.`table``` with both parts quoted."""
    return f"{quote_identifier(database)}.{quote_identifier(table)}"


def column_list(names: Iterable[str]) -> str:
    return ", ".join(quote_identifier(n) for n in names)


def build_offset_insert(
    source_database: str,
    target_database: str,
    table: str,
    offset_columns: Sequence[tuple[str, int]],
    remaining_columns: Sequence[str],
) -> str:
    """Build an ``INSERT INTO ... SELECT ...`` copying *table* from source to target.

    Offset columns come first in both the insert column list and the select
    list, followed by the remaining columns, so the two lists line up
    position by position.

    Args:
        source_database: Database rows are read from.
        target_database: Database rows are written to.
        table: Table name (identical in both databases).
        offset_columns: ``(column, offset)`` pairs; each is selected as
            ``column + offset``.
        remaining_columns: Columns copied unchanged.

    Returns:
        The statement text, without a trailing semicolon.

    Example:
        >>> build_offset_insert("src", "dst", "orders", [("id", 500)], ["total"])
        'INSERT INTO `dst`.`orders` (`id`, `total`) SELECT `id` + 500, `total` FROM `src`.`orders`'
    """
    insert_columns = [name for name, _ in offset_columns] + list(remaining_columns)
    select_items = [
        f"{quote_identifier(name)} + {int(offset)}" for name, offset in offset_columns
    ]
    select_items.extend(quote_identifier(name) for name in remaining_columns)

    return (
        f"INSERT INTO {qualified_name(target_database, table)} "
        f"({column_list(insert_columns)}) "
        f"SELECT {', '.join(select_items)} "
        f"FROM {qualified_name(source_database, table)}"
    )


def build_select(database: str, table: str, columns: Sequence[str]) -> str:
    """Build ``SELECT cols FROM db.table``."""
    return f"SELECT {column_list(columns)} FROM {qualified_name(database, table)}"
