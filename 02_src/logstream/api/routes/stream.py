"""Live stream of newly ingested log entries over WebSocket."""

import asyncio

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from ...app import IApplication
from ...hub import Subscription
from ...logging_config import get_logger

logger = get_logger(__name__)


async def _forward(websocket: WebSocket, subscription: Subscription) -> None:
    """Send each delivered entry as one JSON text frame."""
    try:
        async for payload in subscription:
            await websocket.send_json(payload)
    except (WebSocketDisconnect, RuntimeError, OSError) as e:
        # Socket went away mid-send; the receive loop will clean up.
        logger.debug("Stream %s send failed: %s", subscription.id, e)


def create_stream_router(app: IApplication) -> APIRouter:
    """Create stream router."""
    router = APIRouter(tags=["stream"])

    @router.websocket("/ws")
    async def stream_logs(websocket: WebSocket) -> None:
        """Push every entry ingested after connect. No backlog."""
        # Registered before accept, so anything ingested after the
        # handshake completes is delivered.
        subscription = app.hub.subscribe()
        forward: asyncio.Task | None = None
        try:
            await websocket.accept()
            logger.info("WebSocket client connected")
            forward = asyncio.create_task(_forward(websocket, subscription))

            # Clients are not expected to send; this only waits for the close.
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    break
        finally:
            app.hub.unsubscribe(subscription)
            if forward:
                forward.cancel()
            logger.info("WebSocket client disconnected")

    return router
