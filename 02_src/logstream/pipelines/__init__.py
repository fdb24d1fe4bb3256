"""Ingestion and search pipelines."""

from .ingestion import IngestionPipeline
from .search import SearchPipeline

__all__ = ["IngestionPipeline", "SearchPipeline"]
