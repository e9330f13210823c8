"""Async relational store backed by SQLite.

Opens a short-lived connection per operation, so a single ``Database``
instance can be shared by every coroutine in the process. Driver errors are
re-raised as :class:`DataStoreError`.
"""

import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Iterable, List, Optional, Sequence

import aiosqlite

from infrastructure.logging import get_module_logger
from infrastructure.persistence.exceptions import DataStoreError

logger = get_module_logger()

SCHEMA = """
CREATE TABLE IF NOT EXISTS language (
    id TEXT PRIMARY KEY,
    code TEXT NOT NULL,
    name TEXT NOT NULL,
    is_default INTEGER NOT NULL DEFAULT 0,
    is_active INTEGER NOT NULL DEFAULT 1,
    sync_ui_language INTEGER NOT NULL DEFAULT 0,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE UNIQUE INDEX IF NOT EXISTS language_code_idx ON language (code);

CREATE TABLE IF NOT EXISTS translation_key (
    id TEXT PRIMARY KEY,
    key TEXT NOT NULL,
    default_text TEXT NOT NULL,
    description TEXT,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE UNIQUE INDEX IF NOT EXISTS translation_key_key_idx ON translation_key (key);

CREATE TABLE IF NOT EXISTS translation_value (
    id TEXT PRIMARY KEY,
    translation_key_id TEXT NOT NULL REFERENCES translation_key (id) ON DELETE CASCADE,
    language_id TEXT NOT NULL REFERENCES language (id) ON DELETE CASCADE,
    value TEXT NOT NULL,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE UNIQUE INDEX IF NOT EXISTS translation_value_key_lang_idx
    ON translation_value (translation_key_id, language_id);

CREATE TABLE IF NOT EXISTS app_setting (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""


class Database:
    """Connection factory and query helpers for the application database.

    Attributes:
        path: Filesystem path of the SQLite database.
    """

    def __init__(self, path: str):
        self.path = path
        self._initialized = False
        self._init_lock = asyncio.Lock()

    async def initialize(self) -> None:
        """Create the schema if it does not exist yet."""
        if self._initialized:
            return

        async with self._init_lock:
            # double-checked under the lock
            if self._initialized:
                return

            if self.path != ":memory:":
                Path(self.path).parent.mkdir(parents=True, exist_ok=True)

            async with self.connection() as conn:
                await conn.executescript(SCHEMA)
                await conn.commit()

            self._initialized = True
            logger.info("database_initialized", path=self.path)

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        """Open a connection with row access by column name."""
        try:
            async with aiosqlite.connect(self.path) as conn:
                conn.row_factory = aiosqlite.Row
                await conn.execute("PRAGMA foreign_keys = ON")
                yield conn
        except aiosqlite.Error as e:
            logger.error("database_operation_failed", path=self.path, error=str(e))
            raise DataStoreError(str(e)) from e

    async def fetch_all(
        self, query: str, params: Sequence[Any] = ()
    ) -> List[aiosqlite.Row]:
        async with self.connection() as conn:
            async with conn.execute(query, params) as cursor:
                return list(await cursor.fetchall())

    async def fetch_one(
        self, query: str, params: Sequence[Any] = ()
    ) -> Optional[aiosqlite.Row]:
        async with self.connection() as conn:
            async with conn.execute(query, params) as cursor:
                return await cursor.fetchone()

    async def execute(self, query: str, params: Sequence[Any] = ()) -> int:
        """Run a write statement and commit.

        Returns:
            Number of affected rows.
        """
        async with self.connection() as conn:
            cursor = await conn.execute(query, params)
            await conn.commit()
            return cursor.rowcount

    async def execute_many(
        self, query: str, params_seq: Iterable[Sequence[Any]]
    ) -> None:
        async with self.connection() as conn:
            await conn.executemany(query, params_seq)
            await conn.commit()
