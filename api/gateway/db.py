"""Async PostgreSQL access for route handlers (psycopg3 pool, dict rows)."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional, Sequence, Union

import psycopg
from psycopg import sql
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

logger = logging.getLogger(__name__)

Query = Union[str, sql.Composable]
Params = Union[Sequence[Any], dict[str, Any], None]


class Database:
    """Thin wrapper over ``psycopg_pool.AsyncConnectionPool``.

    The pool is created by :meth:`open` (called from the application lifespan)
    and shared by all requests. Without a DSN every query fails with
    ``psycopg.OperationalError``, which handlers report as ``DatabaseError``.
    """

    def __init__(self, dsn: str, min_size: int = 1, max_size: int = 4) -> None:
        self.dsn = dsn
        self.min_size = min_size
        self.max_size = max_size
        self._pool: Optional[AsyncConnectionPool] = None

    async def open(self) -> None:
        if not self.dsn:
            logger.warning("No database DSN configured; handlers will return DatabaseError")
            return
        self._pool = AsyncConnectionPool(
            self.dsn,
            min_size=self.min_size,
            max_size=self.max_size,
            open=False,
            kwargs={"row_factory": dict_row},
        )
        await self._pool.open()
        logger.info("Database pool opened (max_size=%d)", self.max_size)

    async def close(self) -> None:
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            logger.info("Database pool closed")

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[psycopg.AsyncConnection]:
        if self._pool is None:
            raise psycopg.OperationalError("database pool is not open")
        async with self._pool.connection() as conn:
            yield conn

    async def fetch_all(self, query: Query, params: Params = None) -> list[dict[str, Any]]:
        async with self.connection() as conn:
            cur = await conn.execute(query, params)
            return await cur.fetchall()

    async def fetch_one(self, query: Query, params: Params = None) -> Optional[dict[str, Any]]:
        async with self.connection() as conn:
            cur = await conn.execute(query, params)
            return await cur.fetchone()

    async def execute(self, query: Query, params: Params = None) -> int:
        """Run a write statement and return the affected row count."""
        async with self.connection() as conn:
            cur = await conn.execute(query, params)
            return cur.rowcount
