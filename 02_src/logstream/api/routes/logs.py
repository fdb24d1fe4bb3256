"""Log ingestion and search routes."""

import json
from typing import Any

from fastapi import APIRouter, Query, Request
from pydantic import BaseModel, Field

from ...app import IApplication
from ...errors import MalformedBody


class LogEntryResponse(BaseModel):
    """Response model for a stored log entry."""

    level: str
    message: str
    resourceId: str
    timestamp: str
    traceId: str
    spanId: str
    commit: str
    metadata: dict[str, Any] = Field(default_factory=dict)


def create_logs_router(app: IApplication) -> APIRouter:
    """Create logs router."""
    router = APIRouter(prefix="/logs", tags=["logs"])

    @router.post("", response_model=LogEntryResponse, status_code=201)
    async def ingest_log(request: Request) -> dict:
        """Validate and store a single log entry, then push it to live observers."""
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedBody() from e

        entry = await app.ingest(body)
        return entry.to_dict()

    @router.get("", response_model=list[LogEntryResponse])
    async def search_logs(
        level: str | None = Query(None, description="Exact level, any case"),
        message: str | None = Query(None, description="Substring of message"),
        resource_id: str | None = Query(None, alias="resourceId"),
        timestamp_start: str | None = Query(None, description="Inclusive lower bound"),
        timestamp_end: str | None = Query(None, description="Inclusive upper bound"),
        trace_id: str | None = Query(None, alias="traceId"),
        span_id: str | None = Query(None, alias="spanId"),
        commit: str | None = Query(None),
    ) -> list[dict]:
        """Search logs; all filters are combined with AND, newest first."""
        supplied = {
            "level": level,
            "message": message,
            "resourceId": resource_id,
            "timestamp_start": timestamp_start,
            "timestamp_end": timestamp_end,
            "traceId": trace_id,
            "spanId": span_id,
            "commit": commit,
        }
        filters = {
            key: value.strip()
            for key, value in supplied.items()
            if value is not None and value.strip()
        }

        entries = await app.query(filters)
        return [entry.to_dict() for entry in entries]

    return router
