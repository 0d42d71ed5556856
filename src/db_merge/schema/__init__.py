"""Schema introspection and structural comparison.

Usage:
    from db_merge.schema import SchemaIntrospector, compare_schemas
"""

from db_merge.schema.comparator import compare_schemas, schemas_equal
from db_merge.schema.introspector import SchemaIntrospector, fetch_schema
from db_merge.schema.models import (
    ColumnKey,
    ColumnSchema,
    DatabaseSchema,
    TableSchema,
)

__all__ = [
    "compare_schemas",
    "schemas_equal",
    "SchemaIntrospector",
    "fetch_schema",
    "ColumnKey",
    "ColumnSchema",
    "TableSchema",
    "DatabaseSchema",
]
