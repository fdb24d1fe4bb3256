"""logstream: structured log ingestion, search and live push."""

from .app import Application, IApplication
from .errors import (
    InvalidEnum,
    InvalidMetadataShape,
    InvalidTimestamp,
    LogstreamError,
    MalformedBody,
    MissingField,
    StorageUnavailable,
    ValidationError,
    WrongType,
)
from .hub import Hub, IHub, Subscription
from .models import FILTER_KEYS, LogEntry, LogLevel
from .pipelines import IngestionPipeline, SearchPipeline
from .query import evaluate
from .storage import IStorage, JsonFileStorage, SqliteStorage, create_storage
from .validation import validate_log_entry

__all__ = [
    # Application
    "Application",
    "IApplication",
    # Models
    "LogEntry",
    "LogLevel",
    "FILTER_KEYS",
    # Errors
    "LogstreamError",
    "ValidationError",
    "MalformedBody",
    "MissingField",
    "WrongType",
    "InvalidEnum",
    "InvalidTimestamp",
    "InvalidMetadataShape",
    "StorageUnavailable",
    # Components
    "validate_log_entry",
    "evaluate",
    "IStorage",
    "JsonFileStorage",
    "SqliteStorage",
    "create_storage",
    "IHub",
    "Hub",
    "Subscription",
    "IngestionPipeline",
    "SearchPipeline",
]
