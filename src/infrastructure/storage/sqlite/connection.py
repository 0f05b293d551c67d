"""
aiosqlite connection pool for the stock history database.

Summary replays read on pooled connections while appends go through
``transaction()``, which takes the write lock when it begins so concurrent
appends receive their row ids (the replay tiebreak) in commit order.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from src.config import get_logger, get_settings
from src.core.exceptions import DatabaseError
from src.infrastructure.storage.sqlite.migrations.migrator import initialize_database

logger = get_logger(__name__)

# WAL keeps long history reads from blocking appends
CONNECTION_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
    "PRAGMA foreign_keys=ON",
)


class ConnectionPool:
    """Fixed-size pool of connections to one SQLite file, opened lazily."""

    def __init__(
        self,
        db_path: Path,
        pool_size: int = 5,
        busy_timeout: int = 30000,
    ):
        self.db_path = db_path
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout

        self._idle: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue(maxsize=pool_size)
        self._opened: list[aiosqlite.Connection] = []
        self._lock = asyncio.Lock()

    @property
    def initialized(self) -> bool:
        return bool(self._opened)

    async def initialize(self) -> None:
        """Open every connection up front."""
        async with self._lock:
            if self._opened:
                return

            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            for _ in range(self.pool_size):
                conn = await self._open()
                self._opened.append(conn)
                self._idle.put_nowait(conn)

        logger.info(
            "connection_pool_opened",
            db_path=str(self.db_path),
            pool_size=self.pool_size,
        )

    async def _open(self) -> aiosqlite.Connection:
        conn = await aiosqlite.connect(self.db_path)
        for pragma in CONNECTION_PRAGMAS:
            await conn.execute(pragma)
        await conn.execute(f"PRAGMA busy_timeout={int(self.busy_timeout)}")
        conn.row_factory = aiosqlite.Row
        return conn

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow a connection; waits while all of them are in use."""
        if not self._opened:
            await self.initialize()

        conn = await self._idle.get()
        try:
            yield conn
        finally:
            self._idle.put_nowait(conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow a connection inside BEGIN IMMEDIATE; commit on exit, roll back on error."""
        async with self.acquire() as conn:
            await conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except Exception:
                await conn.rollback()
                raise
            await conn.commit()

    async def close(self) -> None:
        async with self._lock:
            for conn in self._opened:
                await conn.close()
            self._opened.clear()
            self._idle = asyncio.Queue(maxsize=self.pool_size)
        logger.info("connection_pool_closed", db_path=str(self.db_path))


# Global connection pool
_pool: ConnectionPool | None = None


async def _migrate(db_path: Path) -> None:
    failed = [r for r in await initialize_database(db_path) if not r.success]
    if failed:
        raise DatabaseError("migrate", f"v{failed[0].version}_{failed[0].name}: {failed[0].error}")


async def get_pool() -> ConnectionPool:
    """
    Get or create the global pool.

    With ``STORAGE_MIGRATE_ON_CONNECT`` (the default) the schema is brought up
    to date before the first connection opens.
    """
    global _pool
    if _pool is None:
        storage = get_settings().storage
        if storage.migrate_on_connect:
            await _migrate(storage.db_path)
        pool = ConnectionPool(
            db_path=storage.db_path,
            pool_size=storage.pool_size,
            busy_timeout=storage.busy_timeout,
        )
        await pool.initialize()
        _pool = pool
    return _pool


async def close_pool() -> None:
    """Close the global connection pool."""
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None


@asynccontextmanager
async def get_connection() -> AsyncIterator[aiosqlite.Connection]:
    """Get a connection from the global pool."""
    pool = await get_pool()
    async with pool.acquire() as conn:
        yield conn


@asynccontextmanager
async def get_transaction() -> AsyncIterator[aiosqlite.Connection]:
    """Get a connection from the global pool inside a write transaction."""
    pool = await get_pool()
    async with pool.transaction() as conn:
        yield conn
