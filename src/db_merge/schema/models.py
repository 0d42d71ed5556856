"""Pydantic models for schema introspection.

This module contains schema-domain models:
- ColumnKey: the index kind MySQL reports in ``SHOW COLUMNS``
- Introspection models: ColumnSchema, TableSchema, DatabaseSchema

All introspection models are frozen: a ``DatabaseSchema`` returned by the
introspector is a snapshot that the comparator and planner only read.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ColumnKey(str, Enum):
    """Index kind of a column, as printed in the ``Key`` column of ``SHOW COLUMNS``."""

    NONE = ""
    PRIMARY = "PRI"
    UNIQUE = "UNI"
    INDEX = "MUL"


# ============================================================================
# Schema Introspection Models
# ============================================================================


class ColumnSchema(BaseModel):
    """Schema for a database column.

    ``auto_increment_offset`` is the table's ``AUTO_INCREMENT`` high-water
    mark at introspection time.  It is only allowed on an auto-increment
    primary-key column.

    Example:
        >>> col = ColumnSchema(name="id", data_type="int", key=ColumnKey.PRIMARY,
        ...                    auto_increment=True, auto_increment_offset=100)
        >>> col.is_offsettable
        True
    """

    model_config = ConfigDict(frozen=True)

    name: str
    data_type: str
    is_nullable: bool = True
    key: ColumnKey = ColumnKey.NONE
    default: str | None = None
    extra: str = ""
    auto_increment: bool = False
    auto_increment_offset: int | None = None

    @model_validator(mode="after")
    def _check_offset(self) -> "ColumnSchema":
        if self.auto_increment_offset is not None and not (
            self.auto_increment and self.key is ColumnKey.PRIMARY
        ):
            raise ValueError(
                f"auto_increment_offset set on column '{self.name}' which is "
                f"not an auto-increment primary key"
            )
        return self

    @property
    def is_offsettable(self) -> bool:
        """True for an auto-increment primary key whose high-water mark is known."""
        return (
            self.key is ColumnKey.PRIMARY
            and self.auto_increment
            and self.auto_increment_offset is not None
        )


class TableSchema(BaseModel):
    """Schema for a database table.

    ``columns`` keeps the ordinal order reported by the database.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    columns: dict[str, ColumnSchema] = Field(default_factory=dict)

    @property
    def offset_columns(self) -> list[ColumnSchema]:
        """Columns whose values get shifted during a merge."""
        return [c for c in self.columns.values() if c.is_offsettable]

    @property
    def remaining_columns(self) -> list[ColumnSchema]:
        """Columns copied unchanged during a merge."""
        return [c for c in self.columns.values() if not c.is_offsettable]

    def format_report(self) -> str:
        """Format the table as ``Table <name>`` followed by one ``<column> <type>`` line per column."""
        lines = [f"Table {self.name}"]
        lines.extend(f"{c.name} {c.data_type}" for c in self.columns.values())
        return "\n".join(lines)


class DatabaseSchema(BaseModel):
    """Complete database schema."""

    model_config = ConfigDict(frozen=True)

    name: str
    tables: dict[str, TableSchema] = Field(default_factory=dict)

    def format_report(self) -> str:
        """Format the schema as human-readable text, one block per table."""
        return "\n".join(table.format_report() for table in self.tables.values())
