"""PostgreSQL backends - execute statements through psycopg."""

import asyncio
from collections.abc import Sequence
from typing import Any

from psycopg import AsyncConnection
from psycopg_pool import AsyncConnectionPool


class PoolBackend:
    """
    Execute seed statements on connections borrowed from a pool.

    Each call holds one pooled connection for the duration of a single
    statement. The pool commits when the connection is returned cleanly
    and rolls back when the statement raised, so a failed batch never
    leaves a connection in an aborted transaction.
    """

    def __init__(self, pool: AsyncConnectionPool):
        """
        Initialize backend.

        Args:
            pool: Open psycopg connection pool (borrowed, not closed here)
        """
        self.pool = pool

    async def execute(self, statement: str) -> None:
        async with self.pool.connection() as conn:
            await conn.execute(statement)

    async def insert_many(self, statement: str, params: Sequence[Any]) -> int:
        async with self.pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(statement, params)
                return cur.rowcount

    async def fetch_scalar(self, statement: str) -> Any:
        async with self.pool.connection() as conn:
            cur = await conn.execute(statement)
            row = await cur.fetchone()
            return row[0] if row else None


class ConnectionBackend:
    """
    Execute seed statements on a single connection.

    A connection runs one transaction at a time, so concurrent batches
    queue on a lock and each one runs in its own transaction. Batches
    that commit stay committed when a later one fails. Pass a pool
    (PoolBackend) for statements that actually overlap.
    """

    def __init__(self, conn: AsyncConnection):
        """
        Initialize backend.

        Args:
            conn: Open psycopg async connection (borrowed, not closed here)
        """
        self.conn = conn
        self._lock = asyncio.Lock()

    async def execute(self, statement: str) -> None:
        async with self._lock:
            async with self.conn.transaction():
                await self.conn.execute(statement)

    async def insert_many(self, statement: str, params: Sequence[Any]) -> int:
        async with self._lock:
            async with self.conn.transaction():
                async with self.conn.cursor() as cur:
                    await cur.execute(statement, params)
                    return cur.rowcount

    async def fetch_scalar(self, statement: str) -> Any:
        async with self._lock:
            async with self.conn.transaction():
                cur = await self.conn.execute(statement)
                row = await cur.fetchone()
                return row[0] if row else None
