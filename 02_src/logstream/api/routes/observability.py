"""Observability API routes."""

from fastapi import APIRouter
from pydantic import BaseModel

from ...app import IApplication


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    subscribers: int


def create_observability_router(app: IApplication) -> APIRouter:
    """Create observability router."""
    router = APIRouter(tags=["observability"])

    @router.get("/health", response_model=HealthResponse)
    async def health() -> dict:
        """Liveness plus the number of connected live-stream observers."""
        return {"status": "ok", "subscribers": app.hub.subscriber_count}

    return router
