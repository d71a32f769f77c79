"""
Ingestion pipeline tasks.

Exports: DocumentLoadingTask, ChunkingTask, EmbeddingTask, SavingTask
"""

from .chunking_task import ChunkingTask
from .embedding_task import EmbeddingTask
from .loading_task import DocumentLoadingTask
from .saving_task import SavingTask

__all__ = [
    "DocumentLoadingTask",
    "ChunkingTask",
    "EmbeddingTask",
    "SavingTask",
]
