"""Schema validation for inbound log bodies."""

import copy
from typing import Any

from ..errors import (
    InvalidEnum,
    InvalidMetadataShape,
    InvalidTimestamp,
    MalformedBody,
    MissingField,
    WrongType,
)
from ..models import LogEntry, LogLevel, parse_instant

# Checked in this order; the first failure wins.
REQUIRED_STRING_FIELDS = (
    "level",
    "message",
    "resourceId",
    "timestamp",
    "traceId",
    "spanId",
    "commit",
)


# Leaf values that survive a JSON round trip unchanged.
_JSON_SCALARS = (str, int, float, bool, type(None))


def _is_json_value(value: Any) -> bool:
    """True for plain JSON data: str-keyed dicts, lists and scalars."""
    if isinstance(value, dict):
        return all(
            isinstance(key, str) and _is_json_value(item)
            for key, item in value.items()
        )
    if isinstance(value, list):
        return all(_is_json_value(item) for item in value)
    return isinstance(value, _JSON_SCALARS)


def validate_log_entry(raw: Any) -> LogEntry:
    """Validate a decoded JSON body and build a normalized LogEntry.

    Raises a ValidationError subclass naming the first rule that failed.
    """
    if not isinstance(raw, dict):
        raise MalformedBody()

    for name in REQUIRED_STRING_FIELDS:
        value = raw.get(name)
        if value is None:
            raise MissingField(name)
        if not isinstance(value, str):
            raise WrongType(name)

    if raw["message"] == "":
        raise MissingField("message")

    level = raw["level"].lower()
    if level not in LogLevel.values():
        raise InvalidEnum(raw["level"], LogLevel.values())

    if parse_instant(raw["timestamp"]) is None:
        raise InvalidTimestamp(raw["timestamp"])

    metadata = raw.get("metadata", {})
    # Non-string keys or non-JSON values would not read back unchanged.
    if not isinstance(metadata, dict) or not _is_json_value(metadata):
        raise InvalidMetadataShape()

    return LogEntry(
        level=level,
        message=raw["message"],
        resource_id=raw["resourceId"],
        timestamp=raw["timestamp"],
        trace_id=raw["traceId"],
        span_id=raw["spanId"],
        commit=raw["commit"],
        metadata=copy.deepcopy(metadata),
    )
