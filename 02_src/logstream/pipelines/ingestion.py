"""Ingestion pipeline: validate, persist, then notify observers."""

import asyncio
from typing import Any

from ..hub import IHub
from ..logging_config import get_logger
from ..models import LogEntry
from ..storage import IStorage
from ..validation import validate_log_entry

logger = get_logger(__name__)


class IngestionPipeline:
    """The only path that mutates state."""

    def __init__(self, storage: IStorage, hub: IHub):
        self._storage = storage
        self._hub = hub
        # Append and publish together, so observers see append order.
        self._lock = asyncio.Lock()

    async def ingest(self, raw: Any) -> LogEntry:
        """Validate and store one log body, then publish it.

        Raises ValidationError before anything is touched, or
        StorageUnavailable before anything is published.
        """
        entry = validate_log_entry(raw)

        async with self._lock:
            stored = await self._storage.append(entry)
            self._hub.publish(stored)

        logger.info(
            "Ingested %s entry from %s",
            stored.level,
            stored.resource_id,
            extra={"context": {"traceId": stored.trace_id, "spanId": stored.span_id}},
        )
        return stored
