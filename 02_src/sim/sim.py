"""SIM implementation - random log traffic for manual testing."""

import asyncio
import random
import uuid
from datetime import datetime, timezone
from typing import Any, Protocol

import httpx

from logstream.logging_config import get_logger
from logstream.models import LogLevel

logger = get_logger(__name__)

RESOURCES = ["server-1234", "server-5678", "worker-0042", "gateway-0001"]
COMMITS = ["5e5342f", "a1b2c3d", "9f8e7d6"]
MESSAGES = {
    LogLevel.ERROR: ["Database connection failed", "Upstream timeout", "Unhandled exception"],
    LogLevel.WARN: ["High memory usage", "Slow query detected", "Retrying request"],
    LogLevel.INFO: ["Request processed", "User logged in", "Cache warmed"],
    LogLevel.DEBUG: ["Cache lookup", "Payload parsed", "Connection pool stats"],
}
# error/warn are rarer than info/debug
LEVEL_WEIGHTS = [1, 2, 5, 3]


def generate_log(level: LogLevel | None = None) -> dict[str, Any]:
    """Build one valid log payload stamped with the current time."""
    if level is None:
        level = random.choices(list(LogLevel), weights=LEVEL_WEIGHTS)[0]
    return {
        "level": level.value,
        "message": random.choice(MESSAGES[level]),
        "resourceId": random.choice(RESOURCES),
        "timestamp": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
        "traceId": f"trace-{uuid.uuid4().hex[:12]}",
        "spanId": f"span-{uuid.uuid4().hex[:8]}",
        "commit": random.choice(COMMITS),
        "metadata": {"parentResourceId": "server-0987", "source": "sim"},
    }


class ISim(Protocol):
    """Generate log traffic against a running API."""

    async def start(self) -> None:
        """Start posting logs in the background."""
        ...

    async def stop(self) -> None:
        """Stop posting logs."""
        ...


class Sim:
    """Posts randomized log entries to POST /logs."""

    def __init__(
        self,
        api_url: str = "http://localhost:3001",
        count: int = 50,
        min_delay: float = 0.5,
        max_delay: float = 2.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._api_url = api_url
        self._count = count
        self._min_delay = min_delay
        self._max_delay = max_delay
        self._transport = transport
        self._running = False
        self._task: asyncio.Task | None = None
        self._client: httpx.AsyncClient | None = None
        self.sent = 0

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start posting logs in the background."""
        if self._running:
            return
        # Release the client of a previous, finished run.
        await self.stop()

        self._running = True
        self._client = httpx.AsyncClient(
            base_url=self._api_url, transport=self._transport
        )
        self._task = asyncio.create_task(self._run_scenario())

    async def stop(self) -> None:
        """Stop posting logs."""
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        if self._client:
            await self._client.aclose()
            self._client = None

    async def _run_scenario(self) -> None:
        """Post `count` logs with random pauses in between."""
        logger.info("SIM started: %s logs to %s", self._count, self._api_url)
        try:
            for _ in range(self._count):
                if not self._running:
                    break
                await self._send_log(generate_log())
                await asyncio.sleep(random.uniform(self._min_delay, self._max_delay))
        except Exception:
            logger.exception("SIM scenario error")
        finally:
            self._running = False
            logger.info("SIM finished after %s logs", self.sent)

    async def _send_log(self, payload: dict[str, Any]) -> None:
        """Send a log via HTTP API."""
        if not self._client:
            return

        try:
            response = await self._client.post("/logs", json=payload, timeout=10.0)
        except httpx.HTTPError as e:
            logger.error("SIM: Failed to send log: %s", e)
            return

        if response.status_code == 201:
            self.sent += 1
            logger.debug("SIM: %s %s", payload["level"], payload["message"])
        else:
            logger.error(
                "SIM: Error sending log: %s %s",
                response.status_code,
                response.text,
            )
