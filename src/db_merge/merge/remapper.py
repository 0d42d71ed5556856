"""Thread-safe store of primary key translations made during a merge.

When a source row's primary key is shifted by an offset, the old and new
values are recorded here so that foreign-key columns referencing that row
can later be rewritten to the same new value.

The store is a nested ``table -> column -> old value -> new value`` dict
behind a single lock.  The lock covers one dict read or write and is never
held while a query runs.
"""

import threading

from db_merge.errors import KeyMappingNotFoundError


class PrimaryKeyRemapper:
    """In-memory map of shifted primary key values.

    One instance lives for one merge run; nothing is persisted.

    Example:
        >>> remapper = PrimaryKeyRemapper()
        >>> remapper.set_mapping("orders", "id", 1, 501)
        >>> remapper.get_mapping("orders", "id", 1)
        501
    """

    def __init__(self) -> None:
        self._mappings: dict[str, dict[str, dict[int, int]]] = {}
        self._lock = threading.Lock()

    def set_mapping(self, table: str, column: str, old_value: int, new_value: int) -> None:
        """Record that *old_value* of ``table.column`` became *new_value*."""
        with self._lock:
            columns = self._mappings.setdefault(table, {})
            columns.setdefault(column, {})[old_value] = new_value

    def get_mapping(self, table: str, column: str, old_value: int) -> int:
        """Return the new value recorded for *old_value* of ``table.column``.

        Raises:
            KeyMappingNotFoundError: ``missing`` tells whether the table,
                the column or the value had no entry.
        """
        with self._lock:
            columns = self._mappings.get(table)
            if columns is None:
                raise KeyMappingNotFoundError("table", table, column, old_value)
            values = columns.get(column)
            if values is None:
                raise KeyMappingNotFoundError("column", table, column, old_value)
            if old_value not in values:
                raise KeyMappingNotFoundError("value", table, column, old_value)
            return values[old_value]

    def tables(self) -> list[str]:
        """Tables with at least one recorded mapping."""
        with self._lock:
            return list(self._mappings)

    def __len__(self) -> int:
        with self._lock:
            return sum(
                len(values)
                for columns in self._mappings.values()
                for values in columns.values()
            )
