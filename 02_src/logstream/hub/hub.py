"""Hub implementation: live fan-out of newly ingested log entries."""

import asyncio
import itertools
from typing import Any, Protocol

from ..config import DEFAULT_HUB_QUEUE_SIZE
from ..logging_config import get_logger
from ..models import LogEntry

logger = get_logger(__name__)


# End-of-stream marker queued by close() to wake a waiting consumer.
_CLOSED = object()


class Subscription:
    """One observer's handle: a bounded FIFO of entry payloads."""

    def __init__(self, subscription_id: int, maxsize: int):
        self.id = subscription_id
        self._queue: asyncio.Queue[Any] = asyncio.Queue(maxsize=maxsize)
        self._closed = False
        self._marker_queued = False

    @property
    def closed(self) -> bool:
        return self._closed

    def offer(self, payload: dict[str, Any]) -> bool:
        """Deliver without waiting. False if closed or full."""
        if self._closed:
            return False
        try:
            self._queue.put_nowait(payload)
        except asyncio.QueueFull:
            return False
        return True

    async def get(self) -> dict[str, Any] | None:
        """Wait for the next delivered entry; None once closed and drained."""
        if self._closed and self.pending() == 0:
            return None
        item = await self._queue.get()
        if item is _CLOSED:
            self._marker_queued = False
            # Leave the marker for any other waiter on this handle.
            self._queue_marker()
            return None
        return item

    def pending(self) -> int:
        return self._queue.qsize() - int(self._marker_queued)

    def close(self) -> None:
        """Stop accepting entries and wake a consumer blocked in get()."""
        if self._closed:
            return
        self._closed = True
        self._queue_marker()

    def _queue_marker(self) -> None:
        # A full queue has no blocked consumer; draining it ends the stream.
        try:
            self._queue.put_nowait(_CLOSED)
        except asyncio.QueueFull:
            return
        self._marker_queued = True

    def __aiter__(self) -> "Subscription":
        return self

    async def __anext__(self) -> dict[str, Any]:
        payload = await self.get()
        if payload is None:
            raise StopAsyncIteration
        return payload


class IHub(Protocol):
    """In-memory fan-out to live observers. No history, no replay."""

    def subscribe(self) -> Subscription:
        """Register a new observer."""
        ...

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove an observer. Idempotent."""
        ...

    def publish(self, entry: LogEntry) -> None:
        """Send a copy of entry to every current observer."""
        ...


class Hub:
    """Registry of observers keyed by subscription id."""

    def __init__(self, queue_size: int = DEFAULT_HUB_QUEUE_SIZE):
        self._queue_size = queue_size
        self._ids = itertools.count(1)
        self._subscribers: dict[int, Subscription] = {}

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self) -> Subscription:
        """Register a new observer; it only sees entries published from now on."""
        subscription = Subscription(next(self._ids), self._queue_size)
        self._subscribers[subscription.id] = subscription
        logger.debug("Observer %s subscribed", subscription.id)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove an observer. Safe to call more than once."""
        subscription.close()
        if self._subscribers.pop(subscription.id, None) is not None:
            logger.debug("Observer %s unsubscribed", subscription.id)

    def unsubscribe_all(self) -> None:
        for subscription in list(self._subscribers.values()):
            self.unsubscribe(subscription)

    def publish(self, entry: LogEntry) -> None:
        """Offer a fresh copy of entry to every observer; never blocks or raises."""
        # Snapshot: an observer may unsubscribe while we iterate.
        for subscription in list(self._subscribers.values()):
            if not subscription.offer(entry.to_dict()):
                logger.debug(
                    "Dropped entry for observer %s (queue full or closed)",
                    subscription.id,
                )
