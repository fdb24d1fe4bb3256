"""Search pipeline: snapshot the store and run the query engine over it."""

from collections.abc import Mapping

from ..models import LogEntry
from ..query import evaluate
from ..storage import IStorage


class SearchPipeline:
    """The only read path."""

    def __init__(self, storage: IStorage):
        self._storage = storage

    async def query(self, filters: Mapping[str, object] | None = None) -> list[LogEntry]:
        """Matching entries, newest first. Raises StorageUnavailable."""
        snapshot = await self._storage.read_all()
        return evaluate(snapshot, filters)
