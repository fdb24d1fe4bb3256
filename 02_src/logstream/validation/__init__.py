"""Validation module."""

from .validator import REQUIRED_STRING_FIELDS, validate_log_entry

__all__ = ["REQUIRED_STRING_FIELDS", "validate_log_entry"]
