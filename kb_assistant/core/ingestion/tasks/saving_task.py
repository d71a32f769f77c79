"""
Vector store persistence task.

Writes the complete chunk set over the previous store in one atomic step.

Dependencies: kb_assistant.boundary.vdb
System role: Final stage of knowledge base ingestion
"""

from pathlib import Path

from kb_assistant.boundary.vdb.json_vector_store import save_vector_store
from kb_assistant.models.chunk import Chunk


class SavingTask:
    """Save embedded chunks as the new vector store."""

    def __init__(self, embedding_model: str, dimension: int) -> None:
        """
        Initialize saving task.

        Args:
            embedding_model: Model identity recorded in the store header
            dimension: Vector length shared by every chunk
        """
        self._embedding_model = embedding_model
        self._dimension = dimension

    def save(self, chunks: list[Chunk], store_path: str | Path) -> str:
        """
        Replace the store file with chunks.

        Args:
            chunks: Complete chunk set
            store_path: Destination file

        Returns:
            str: Path to the saved store

        Raises:
            StoreWriteError: When validation or writing fails
        """
        path = save_vector_store(
            store_path,
            chunks,
            embedding_model=self._embedding_model,
            dimension=self._dimension,
        )
        return str(path)
