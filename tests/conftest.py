"""Shared fixtures: an in-memory stand-in for a SQLAlchemy AsyncEngine.

``FakeEngine`` answers the handful of statements the introspector and the
planner issue (table listing, ``SHOW COLUMNS``, ``AUTO_INCREMENT`` lookup,
``SELECT 1`` and primary key reads) from plain dicts, and records what was
executed and how many connections were in use at once.
"""

import asyncio
import re
from contextlib import asynccontextmanager
from typing import Any

import pytest
from sqlalchemy.exc import OperationalError

SHOW_COLUMNS_RE = re.compile(r"SHOW COLUMNS FROM `([^`]+)`\.`([^`]+)`")
SELECT_RE = re.compile(r"SELECT (.+) FROM `([^`]+)`\.`([^`]+)`$")


class FakeResult:
    def __init__(self, rows: list[tuple]) -> None:
        self._rows = rows

    def fetchall(self) -> list[tuple]:
        return list(self._rows)

    def scalar_one_or_none(self) -> Any:
        return self._rows[0][0] if self._rows else None


class FakeConnection:
    def __init__(self, engine: "FakeEngine") -> None:
        self._engine = engine

    async def execute(self, statement: Any, params: dict | None = None) -> FakeResult:
        sql = str(statement).strip()
        self._engine.executed.append((sql, params))
        return await self._engine.respond(sql, params or {})


class FakeEngine:
    """Serves schema metadata for one or more databases.

    Args:
        databases: ``{database: {table: [SHOW COLUMNS rows]}}``.
        auto_increment: ``{(database, table): AUTO_INCREMENT value}``.
        rows: ``{(database, table): [row tuples]}`` for primary key reads.
        fail_tables: Tables whose ``SHOW COLUMNS`` raises.
        delays: Seconds ``SHOW COLUMNS`` sleeps, per table.
        fail_listing: Make the table listing query raise.
        fail_connect: Make ``SELECT 1`` raise.
    """

    def __init__(
        self,
        databases: dict[str, dict[str, list[tuple]]],
        auto_increment: dict[tuple[str, str], int | None] | None = None,
        rows: dict[tuple[str, str], list[tuple]] | None = None,
        fail_tables: set[str] | None = None,
        delays: dict[str, float] | None = None,
        fail_listing: bool = False,
        fail_connect: bool = False,
    ) -> None:
        self.databases = databases
        self.auto_increment = auto_increment or {}
        self.rows = rows or {}
        self.fail_tables = fail_tables or set()
        self.delays = delays or {}
        self.fail_listing = fail_listing
        self.fail_connect = fail_connect
        self.executed: list[tuple[str, dict | None]] = []
        self.described: list[str] = []
        self.active = 0
        self.max_active = 0
        self.disposed = False

    @asynccontextmanager
    async def connect(self):
        yield FakeConnection(self)

    async def dispose(self) -> None:
        self.disposed = True

    async def respond(self, sql: str, params: dict) -> FakeResult:
        if sql == "SELECT 1":
            if self.fail_connect:
                raise OperationalError(sql, params, Exception("Can't connect to MySQL server"))
            return FakeResult([(1,)])

        if "SELECT AUTO_INCREMENT" in sql:
            value = self.auto_increment.get((params["schema"], params["table"]))
            return FakeResult([(value,)])

        if "FROM information_schema.tables" in sql:
            if self.fail_listing:
                raise OperationalError(sql, params, Exception("access denied"))
            tables = sorted(self.databases.get(params["schema"], {}))
            return FakeResult([(name,) for name in tables])

        match = SHOW_COLUMNS_RE.match(sql)
        if match:
            database, table = match.groups()
            return await self._describe(sql, database, table)

        match = SELECT_RE.match(sql)
        if match:
            _, database, table = match.groups()
            return FakeResult(self.rows.get((database, table), []))

        raise AssertionError(f"unexpected SQL: {sql}")

    async def _describe(self, sql: str, database: str, table: str) -> FakeResult:
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            await asyncio.sleep(self.delays.get(table, 0))
            if table in self.fail_tables:
                raise OperationalError(sql, {}, Exception(f"Table '{table}' doesn't exist"))
            self.described.append(table)
            return FakeResult(self.databases[database][table])
        finally:
            self.active -= 1


@pytest.fixture
def orders_columns() -> list[tuple]:
    """``SHOW COLUMNS`` rows of ``orders(id PK auto_increment, total)``."""
    return [
        ("id", "int", "NO", "PRI", None, "auto_increment"),
        ("total", "decimal(10,2)", "YES", "", None, ""),
    ]


@pytest.fixture
def fake_engine_cls() -> type[FakeEngine]:
    return FakeEngine
