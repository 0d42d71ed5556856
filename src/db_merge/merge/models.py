"""Pydantic models for merge plans.

Usage:
    from db_merge.merge.models import MergePlan, MigrationStatement

    plan = MergePlan(source_database="shop_old", target_database="shop")
    print(plan.render())
"""

from pydantic import BaseModel, Field


class MigrationStatement(BaseModel):
    """One ``INSERT INTO ... SELECT ...`` copying a table from source to target."""

    table: str
    sql: str
    offsets: dict[str, int] = Field(default_factory=dict)  # column -> shift applied


class MergePlan(BaseModel):
    """Ordered statements for one merge, plus the tables left out of it.

    Example:
        >>> plan = MergePlan(source_database="a", target_database="b")
        >>> plan.render()
        ''
    """

    source_database: str
    target_database: str
    statements: list[MigrationStatement] = Field(default_factory=list)
    skipped_tables: list[str] = Field(default_factory=list)  # no offsettable primary key

    def render(self) -> str:
        """Render the statements as SQL text, one ``;``-terminated statement per paragraph."""
        return "\n\n".join(f"{s.sql};" for s in self.statements)
