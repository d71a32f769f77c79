"""
Embedding generation task.

Embeds chunk texts in sequential batches and builds store records with
deterministic IDs.

Dependencies: langchain_core, kb_assistant.boundary.embeddings
System role: Third stage of knowledge base ingestion
"""

import logging

from langchain_core.documents import Document as LCDocument
from langchain_core.embeddings import Embeddings

from kb_assistant.boundary.embeddings.validation import validate_vector
from kb_assistant.core.exceptions import EmbeddingError
from kb_assistant.models.chunk import Chunk

logger = logging.getLogger(__name__)


class EmbeddingTask:
    """Generate embeddings for chunked documents."""

    def __init__(self, embeddings: Embeddings, dimension: int, batch_size: int = 32) -> None:
        """
        Initialize embedding task.

        Args:
            embeddings: Embedding capability (same model as the query path)
            dimension: Required vector length
            batch_size: Chunks per embedding call

        Raises:
            ValueError: When batch_size < 1
        """
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self._embeddings = embeddings
        self._dimension = dimension
        self._batch_size = batch_size

    def embed(self, documents: list[LCDocument]) -> list[Chunk]:
        """
        Embed chunk documents.

        Any failure aborts the whole batch; nothing partial is returned.

        Args:
            documents: Chunk documents from ChunkingTask

        Returns:
            list[Chunk]: Store records in input order

        Raises:
            EmbeddingError: When embedding generation fails
        """
        chunks: list[Chunk] = []
        total = len(documents)
        for start in range(0, total, self._batch_size):
            batch = documents[start:start + self._batch_size]
            try:
                vectors = self._embeddings.embed_documents([doc.page_content for doc in batch])
            except EmbeddingError:
                raise
            except Exception as e:
                raise EmbeddingError(f"Failed to generate embeddings: {e}") from e

            if len(vectors) != len(batch):
                raise EmbeddingError(
                    f"Embedding capability returned {len(vectors)} vectors for {len(batch)} chunks"
                )

            for doc, vector in zip(batch, vectors):
                metadata = doc.metadata
                chunks.append(
                    Chunk(
                        id=Chunk.make_id(metadata["doc_id"], metadata["chunk_index"]),
                        doc_id=metadata["doc_id"],
                        title=metadata["title"],
                        chunk_index=metadata["chunk_index"],
                        content=doc.page_content,
                        vector=validate_vector(vector, self._dimension),
                    )
                )
            logger.info(f"{__name__}:embed - Embedded {len(chunks)}/{total} chunks")

        return chunks
