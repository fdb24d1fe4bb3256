"""Log collection storage: protocol and JSON file implementation."""

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol

from ..config import PathLike, resolve_store_path
from ..errors import StorageUnavailable
from ..logging_config import get_logger
from ..models import LogEntry

logger = get_logger(__name__)

SQLITE_SUFFIXES = (".db", ".sqlite", ".sqlite3")


class IStorage(Protocol):
    """Durable, append-only collection of LogEntry records."""

    async def init(self) -> None:
        """Create the backing medium with an empty collection if missing."""
        ...

    async def close(self) -> None:
        """Release resources."""
        ...

    async def read_all(self) -> list[LogEntry]:
        """Every durable entry, in storage order."""
        ...

    async def append(self, entry: LogEntry) -> LogEntry:
        """Add one entry at the end of the collection."""
        ...


def decode_collection(raw: str) -> list[LogEntry]:
    """Decode a stored JSON array. Raises ValueError/KeyError/TypeError."""
    if not raw.strip():
        return []
    data: Any = json.loads(raw)
    if not isinstance(data, list):
        raise TypeError(f"Log collection must be an array, got {type(data).__name__}")
    return [LogEntry.from_dict(record) for record in data]


def encode_collection(entries: list[LogEntry]) -> str:
    return json.dumps([entry.to_dict() for entry in entries], indent=2)


class JsonFileStorage:
    """The collection as one JSON array in a file.

    Every append rewrites the whole file: the new content is written to a
    temporary sibling, fsynced and moved into place with ``os.replace``.
    Readers therefore see either the previous or the next collection.
    """

    def __init__(self, path: PathLike | None = None):
        self._path = Path(resolve_store_path(path))
        self._append_lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    async def init(self) -> None:
        """Create the data file with an empty array if it does not exist."""
        try:
            await asyncio.to_thread(self._ensure_file)
        except OSError as e:
            logger.exception("Cannot initialize log store at %s", self._path)
            raise StorageUnavailable("initialize") from e

    async def close(self) -> None:
        """Nothing to release; files are opened per operation."""
        return

    async def read_all(self) -> list[LogEntry]:
        try:
            return await asyncio.to_thread(self._load)
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.exception("Cannot read log store at %s", self._path)
            raise StorageUnavailable("read") from e

    async def append(self, entry: LogEntry) -> LogEntry:
        async with self._append_lock:
            try:
                entries = await asyncio.to_thread(self._load)
            except (OSError, ValueError, KeyError, TypeError) as e:
                logger.exception("Cannot read log store at %s", self._path)
                raise StorageUnavailable("read") from e

            entries.append(entry)

            try:
                await asyncio.to_thread(self._replace, encode_collection(entries))
            except (OSError, TypeError, ValueError) as e:
                logger.exception("Cannot write log store at %s", self._path)
                raise StorageUnavailable("write") from e

        return entry

    def _ensure_file(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        # Exclusive create; a half-created file is blank and reads as empty.
        try:
            with open(self._path, "x", encoding="utf-8") as f:
                f.write("[]")
        except FileExistsError:
            pass

    def _load(self) -> list[LogEntry]:
        self._ensure_file()
        raw = self._path.read_text(encoding="utf-8")
        return decode_collection(raw)

    def _replace(self, content: str) -> None:
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


def create_storage(path: PathLike | None = None) -> IStorage:
    """Pick a storage backend from the path: SQLite for .db files and :memory:."""
    resolved = resolve_store_path(path)
    if str(resolved) == ":memory:" or Path(resolved).suffix in SQLITE_SUFFIXES:
        from .sqlite_storage import SqliteStorage

        return SqliteStorage(resolved)
    return JsonFileStorage(resolved)
