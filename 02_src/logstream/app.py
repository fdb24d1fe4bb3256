"""Application bootstrap and lifecycle management."""

import os
from collections.abc import Mapping
from typing import Any, Protocol

from .config import PathLike, hub_queue_size, resolve_store_path
from .hub import Hub
from .logging_config import get_logger
from .models import LogEntry
from .pipelines import IngestionPipeline, SearchPipeline
from .storage import IStorage, create_storage

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap, lifecycle and the two core operations."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def ingest(self, raw: Any) -> LogEntry:
        """Validate, store and publish one log body."""
        ...

    async def query(self, filters: Mapping[str, object] | None = None) -> list[LogEntry]:
        """Matching entries, newest first."""
        ...

    @property
    def hub(self) -> Hub:
        """Live stream registry."""
        ...


class Application:
    """Main application bootstrap."""

    def __init__(
        self,
        store_path: PathLike | None = None,
        queue_size: int | None = None,
    ):
        env_store_path = os.getenv("LOG_STORE_PATH") if store_path is None else store_path
        self._store_path = resolve_store_path(env_store_path)
        self._queue_size = hub_queue_size() if queue_size is None else queue_size

        # Components (initialized in start())
        self._storage: IStorage | None = None
        self._hub: Hub | None = None
        self._ingestion: IngestionPipeline | None = None
        self._search: SearchPipeline | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")

        # 1. Storage (no dependencies)
        self._storage = create_storage(self._store_path)
        await self._storage.init()
        logger.info("Storage initialized at %s", self._store_path)

        # 2. Hub (no dependencies)
        self._hub = Hub(queue_size=self._queue_size)

        # 3. Pipelines (Storage + Hub)
        self._ingestion = IngestionPipeline(self._storage, self._hub)
        self._search = SearchPipeline(self._storage)
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._hub:
            self._hub.unsubscribe_all()
        if self._storage:
            await self._storage.close()
            logger.info("Storage closed")

    async def ingest(self, raw: Any) -> LogEntry:
        """Submit one log body."""
        if not self._ingestion:
            raise RuntimeError("Application not started")
        return await self._ingestion.ingest(raw)

    async def query(self, filters: Mapping[str, object] | None = None) -> list[LogEntry]:
        """Search stored entries."""
        if not self._search:
            raise RuntimeError("Application not started")
        return await self._search.query(filters)

    @property
    def storage(self) -> IStorage:
        """Get storage instance."""
        if not self._storage:
            raise RuntimeError("Application not started")
        return self._storage

    @property
    def hub(self) -> Hub:
        """Get hub instance."""
        if not self._hub:
            raise RuntimeError("Application not started")
        return self._hub
