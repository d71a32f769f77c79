"""
Knowledge base ingestion.

Full rebuild of the vector store: load documents -> chunk -> embed -> save.
"""

from .entrypoint import IngestionPipeline

__all__ = ["IngestionPipeline"]
