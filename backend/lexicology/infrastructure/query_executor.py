"""Query Executor — parameterized-statement facade the repositories build on.

Invariants:
    - Three shapes only: execute (mutations), fetch_one, fetch_all
    - Rows leave as plain dicts keyed by column label
    - Caller values travel as bound parameters; statement text is never formatted
    - An unbound executor runs each call in its own transaction (autocommit per statement)
    - A bound executor (from transaction()) shares one connection; the scope commits on
      normal exit and rolls back on any exception

Design Decisions:
    - Accepts SQLAlchemy Executable statements (Core constructs or text() with named
      binds) plus an optional params mapping
    - No retry: Store maps the failure and it propagates to the caller
"""

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncGenerator, Mapping

from sqlalchemy.sql.expression import Executable
from sqlalchemy.engine import CursorResult
from sqlalchemy.exc import InvalidRequestError
from sqlalchemy.ext.asyncio import AsyncConnection

from lexicology.infrastructure.database import Store


@dataclass(frozen=True)
class ExecuteResult:
    """Outcome of a mutation."""
    affected_count: int
    inserted_id: Any = None


def _inserted_id(result: CursorResult) -> Any:
    if not result.is_insert:
        return None
    try:
        key = result.inserted_primary_key
    except InvalidRequestError:
        # executemany and text() inserts carry no single primary key
        return None
    return key[0] if key else None


class QueryExecutor:
    """Runs statements against a Store, optionally pinned to one connection."""

    def __init__(self, store: Store, connection: AsyncConnection | None = None):
        self._store = store
        self._connection = connection

    @property
    def store(self) -> Store:
        return self._store

    @property
    def in_transaction(self) -> bool:
        return self._connection is not None

    @asynccontextmanager
    async def _checkout(self) -> AsyncGenerator[AsyncConnection, None]:
        if self._connection is not None:
            yield self._connection
            return
        async with self._store.begin() as conn:
            yield conn

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator["QueryExecutor", None]:
        """Scope several statements into one atomic unit.

        Nested calls reuse the enclosing transaction.
        """
        if self._connection is not None:
            yield self
            return
        async with self._store.begin() as conn:
            yield QueryExecutor(self._store, conn)

    async def execute(
        self, statement: Executable, params: Mapping[str, Any] | list | None = None,
    ) -> ExecuteResult:
        async with self._checkout() as conn:
            result = await conn.execute(statement, params)
            return ExecuteResult(
                affected_count=result.rowcount, inserted_id=_inserted_id(result),
            )

    async def fetch_one(
        self, statement: Executable, params: Mapping[str, Any] | None = None,
    ) -> dict | None:
        async with self._checkout() as conn:
            result = await conn.execute(statement, params)
            row = result.mappings().first()
            return dict(row) if row is not None else None

    async def fetch_all(
        self, statement: Executable, params: Mapping[str, Any] | None = None,
    ) -> list[dict]:
        async with self._checkout() as conn:
            result = await conn.execute(statement, params)
            return [dict(row) for row in result.mappings().all()]
