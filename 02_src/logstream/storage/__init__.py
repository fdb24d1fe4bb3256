"""Storage module."""

from .sqlite_storage import SqliteStorage
from .storage import IStorage, JsonFileStorage, create_storage

__all__ = ["IStorage", "JsonFileStorage", "SqliteStorage", "create_storage"]
