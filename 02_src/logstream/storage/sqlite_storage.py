"""SQLite storage implementation."""

import asyncio
import sqlite3
from pathlib import Path

import aiosqlite

from ..config import PathLike, resolve_store_path
from ..errors import StorageUnavailable
from ..logging_config import get_logger
from ..models import LogEntry
from .storage import decode_collection, encode_collection

logger = get_logger(__name__)

_DECODE_ERRORS = (ValueError, KeyError, TypeError)


class SqliteStorage:
    """The collection as a single JSON row in SQLite.

    Appends run inside one ``BEGIN IMMEDIATE`` transaction. Reads share the
    append lock because all statements go through one connection, and an
    uncommitted row would otherwise be visible to them.
    """

    def __init__(self, db_path: PathLike | None = None):
        self._db_path = resolve_store_path(db_path)
        self._conn: aiosqlite.Connection | None = None
        self._lock = asyncio.Lock()

    async def init(self) -> None:
        """Open the database and create the collection row."""
        schema_path = Path(__file__).parent / "schema.sql"
        with open(schema_path, "r", encoding="utf-8") as f:
            schema_sql = f.read()

        try:
            if str(self._db_path) != ":memory:":
                Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)
            self._conn = await aiosqlite.connect(self._db_path, isolation_level=None)
            await self._conn.executescript(schema_sql)
        except (sqlite3.Error, OSError) as e:
            logger.exception("Cannot initialize log store at %s", self._db_path)
            await self.close()
            raise StorageUnavailable("initialize") from e

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    async def read_all(self) -> list[LogEntry]:
        async with self._lock:
            try:
                return await self._select()
            except (sqlite3.Error, *_DECODE_ERRORS) as e:
                logger.exception("Cannot read log store at %s", self._db_path)
                raise StorageUnavailable("read") from e

    async def append(self, entry: LogEntry) -> LogEntry:
        async with self._lock:
            conn = self._connection()
            try:
                await conn.execute("BEGIN IMMEDIATE")
            except sqlite3.Error as e:
                logger.exception("Cannot open transaction on %s", self._db_path)
                raise StorageUnavailable("write") from e

            try:
                entries = await self._select()
                entries.append(entry)
                await conn.execute(
                    """
                    UPDATE log_collection
                    SET entries = ?, updated_at = CURRENT_TIMESTAMP
                    WHERE id = 1
                    """,
                    (encode_collection(entries),),
                )
                await conn.execute("COMMIT")
            except (sqlite3.Error, *_DECODE_ERRORS) as e:
                logger.exception("Cannot append to log store at %s", self._db_path)
                await self._rollback()
                raise StorageUnavailable("write") from e

        return entry

    def _connection(self) -> aiosqlite.Connection:
        if not self._conn:
            raise RuntimeError("Storage not initialized")
        return self._conn

    async def _select(self) -> list[LogEntry]:
        cursor = await self._connection().execute(
            "SELECT entries FROM log_collection WHERE id = 1"
        )
        row = await cursor.fetchone()
        await cursor.close()
        if row is None:
            raise ValueError("Log collection row is missing")
        return decode_collection(row[0])

    async def _rollback(self) -> None:
        try:
            await self._connection().execute("ROLLBACK")
        except sqlite3.Error:
            logger.warning("Rollback failed on %s", self._db_path)
