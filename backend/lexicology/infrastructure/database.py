"""Store — explicitly constructed async engine with error mapping and health checks.

Invariants:
    - Every connection checkout is a transaction: commit on exit, rollback on exception
    - SQLite connections always run with PRAGMA foreign_keys=ON (cascades depend on it)
    - IntegrityError → ConstraintViolationError; every other SQLAlchemyError → StoreError
    - Each begin() checks out its own pooled connection

Design Decisions:
    - Store is passed to whoever needs it (no module-level singleton); FastAPI keeps the
      instance on app.state
    - Pool sizing only applies to server databases; SQLite uses SQLAlchemy's default pool
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine

from lexicology.core.errors import ConstraintViolationError, ErrorContext, StoreError

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Store:
    """Owns the async engine every repository statement runs on."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 20,
        max_overflow: int = 10,
        echo: bool = False,
    ):
        url = make_url(database_url)
        engine_kwargs: dict = {"echo": echo, "pool_pre_ping": True}
        if url.get_backend_name() != "sqlite":
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        if self.dialect_name == "sqlite":
            event.listen(
                self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys,
            )

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    @asynccontextmanager
    async def begin(self) -> AsyncGenerator[AsyncConnection, None]:
        """Provide a connection inside a transaction, mapping driver failures."""
        try:
            async with self.engine.begin() as conn:
                yield conn
        except IntegrityError as e:
            logger.error(
                f"Store integrity error: {e.orig}",
                extra={"error_code": "CONSTRAINT_VIOLATION", "operation": "execute"},
            )
            raise ConstraintViolationError(
                "execute", ErrorContext(debug_info={"detail": str(e.orig)}),
            ) from e
        except OperationalError as e:
            logger.error(
                f"Store operational error: {e.orig}",
                extra={"error_code": "STORE_ERROR", "operation": "execute"},
            )
            raise StoreError("Connection or operational error", "execute") from e
        except DBAPIError as e:
            logger.error(
                f"Store driver error: {e.orig}",
                extra={"error_code": "STORE_ERROR", "operation": "query"},
            )
            raise StoreError("Database driver error", "query") from e
        except SQLAlchemyError as e:
            logger.error(
                f"SQLAlchemy error: {e}",
                extra={"error_code": "STORE_ERROR", "operation": "unknown"},
            )
            raise StoreError("Database operation failed", "unknown") from e

    async def health_check(self) -> bool:
        """Check store connectivity (for readiness probes)."""
        try:
            async with self.begin() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except StoreError as e:
            logger.error(f"Store health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()
