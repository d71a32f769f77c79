"""API-specific dependencies."""

from .dependencies import (
    get_pipeline_context,
    get_retrieval_pipeline,
)

__all__ = [
    "get_pipeline_context",
    "get_retrieval_pipeline",
]
