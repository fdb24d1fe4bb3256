"""Core data models for logstream."""

from .entry import FILTER_KEYS, LogEntry, LogLevel, parse_instant

__all__ = [
    "LogEntry",
    "LogLevel",
    "FILTER_KEYS",
    "parse_instant",
]
