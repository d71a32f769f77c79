"""
Models for the ingestion pipeline.

Exports: IngestionResult
"""

from .ingestion_result import IngestionResult

__all__ = ["IngestionResult"]
