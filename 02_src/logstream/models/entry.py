"""Log entry data model."""

import copy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class LogLevel(str, Enum):
    """Accepted log levels."""

    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"

    @classmethod
    def values(cls) -> tuple[str, ...]:
        return tuple(level.value for level in cls)


# Query parameters understood by the search path, in wire spelling.
FILTER_KEYS: tuple[str, ...] = (
    "level",
    "message",
    "resourceId",
    "timestamp_start",
    "timestamp_end",
    "traceId",
    "spanId",
    "commit",
)


def parse_instant(value: str) -> datetime | None:
    """Parse an ISO 8601 date-time; naive values are taken as UTC.

    Returns None when the value does not parse.
    """
    try:
        parsed = datetime.fromisoformat(value.strip())
    except (TypeError, ValueError, AttributeError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class LogEntry:
    """A single validated log record."""

    level: str
    message: str
    resource_id: str
    timestamp: str  # as submitted; compare through `epoch`
    trace_id: str
    span_id: str
    commit: str
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def instant(self) -> datetime:
        parsed = parse_instant(self.timestamp)
        if parsed is None:
            raise ValueError(f"Unparsable timestamp: {self.timestamp!r}")
        return parsed

    @property
    def epoch(self) -> float:
        """Timestamp as seconds since the Unix epoch."""
        return self.instant.timestamp()

    def to_dict(self) -> dict[str, Any]:
        """Wire representation; metadata is deep-copied."""
        return {
            "level": self.level,
            "message": self.message,
            "resourceId": self.resource_id,
            "timestamp": self.timestamp,
            "traceId": self.trace_id,
            "spanId": self.span_id,
            "commit": self.commit,
            "metadata": copy.deepcopy(self.metadata),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LogEntry":
        """Rebuild an entry from its stored wire representation.

        Raises KeyError, TypeError or ValueError on a malformed record.
        """
        if not isinstance(data, dict):
            raise TypeError(f"Log record must be an object, got {type(data).__name__}")
        metadata = data.get("metadata", {})
        if not isinstance(metadata, dict):
            raise TypeError("Log record metadata must be an object")
        entry = cls(
            level=str(data["level"]),
            message=str(data["message"]),
            resource_id=str(data["resourceId"]),
            timestamp=str(data["timestamp"]),
            trace_id=str(data["traceId"]),
            span_id=str(data["spanId"]),
            commit=str(data["commit"]),
            metadata=metadata,
        )
        # Surface a bad timestamp at load time, not during sorting.
        if parse_instant(entry.timestamp) is None:
            raise ValueError(f"Unparsable timestamp: {entry.timestamp!r}")
        return entry
