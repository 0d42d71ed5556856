"""Exception hierarchy for db-merge.

Every failure raised by the library derives from ``DatabaseMergeError`` so
the CLI can report it with a single ``except`` clause.  Lower-level errors
(driver exceptions, pydantic validation errors) are chained with
``raise ... from exc`` as they cross component boundaries.
"""

from enum import Enum
from typing import Any


class DatabaseMergeError(Exception):
    """Base exception for all db-merge errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        result = self.message
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            result += f" [{details_str}]"
        return result


class ConfigurationError(DatabaseMergeError):
    """Raised when the configuration file is missing or invalid."""

    pass


class DatabaseConnectionError(DatabaseMergeError):
    """Raised when a database URL is malformed or the server refuses the connection."""

    pass


class IntrospectionError(DatabaseMergeError):
    """Raised when listing tables or describing columns fails."""

    def __init__(
        self,
        message: str,
        table: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        if table is not None:
            details = {"table": table, **(details or {})}
        super().__init__(message, details)
        self.table = table


class MismatchReason(str, Enum):
    """Why two schemas were found structurally different."""

    TABLE_COUNT = "table_count"
    TABLE_MISSING = "table_missing"
    COLUMN_COUNT = "column_count"
    COLUMN_MISSING = "column_missing"
    TYPE_MISMATCH = "type_mismatch"
    AUTO_INCREMENT_MISMATCH = "auto_increment_mismatch"


class SchemaMismatchError(DatabaseMergeError):
    """Raised by the comparator on the first structural difference."""

    def __init__(
        self,
        reason: MismatchReason,
        message: str,
        table: str | None = None,
        column: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.reason = reason
        self.table = table
        self.column = column


class MergePlanningError(DatabaseMergeError):
    """Raised when a merge plan cannot be produced."""

    pass


class RemapLookupError(DatabaseMergeError, LookupError):
    """Base class for primary key remapper lookup failures."""

    pass


class KeyMappingNotFoundError(RemapLookupError):
    """Raised when no mapping exists for a (table, column, value) triple.

    ``missing`` is ``"table"``, ``"column"`` or ``"value"`` and names the
    first level of the lookup that had no entry.
    """

    def __init__(self, missing: str, table: str, column: str, value: int) -> None:
        if missing == "table":
            message = f"table {table} not found"
        elif missing == "column":
            message = f"column {column} not found in table {table}"
        else:
            message = f"value {value} not found for {table}.{column}"
        super().__init__(message)
        self.missing = missing
        self.table = table
        self.column = column
        self.value = value
