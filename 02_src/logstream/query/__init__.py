"""Query module."""

from .engine import evaluate

__all__ = ["evaluate"]
