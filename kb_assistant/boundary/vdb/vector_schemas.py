"""
Vector store file schemas.

Pydantic models for the persisted vector store. The file header records
the embedding model identity and dimension so a store built with another
model is rejected at load time instead of being silently misranked.

Dependencies: pydantic, kb_assistant.models
System role: Type definitions for the persisted vector store
"""

from collections.abc import Sequence
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, model_validator

from kb_assistant.models.chunk import Chunk


def validate_chunks(chunks: Sequence[Chunk], dimension: int) -> None:
    """
    Check store-wide chunk invariants.

    Args:
        chunks: Chunks in store order
        dimension: Required vector length

    Raises:
        ValueError: On a wrong vector length, duplicate ID, or chunk
            indexes that do not increase within a document
    """
    seen_ids: set[str] = set()
    last_index: dict[str, int] = {}
    for position, chunk in enumerate(chunks):
        if len(chunk.vector) != dimension:
            raise ValueError(
                f"Chunk {chunk.id!r} at position {position} has vector length "
                f"{len(chunk.vector)}, expected {dimension}"
            )
        if chunk.id in seen_ids:
            raise ValueError(f"Duplicate chunk id {chunk.id!r} at position {position}")
        seen_ids.add(chunk.id)

        previous = last_index.get(chunk.doc_id)
        if previous is not None and chunk.chunk_index <= previous:
            raise ValueError(
                f"Chunk {chunk.id!r} breaks chunkIndex order for document {chunk.doc_id!r}"
            )
        last_index[chunk.doc_id] = chunk.chunk_index


class VectorStoreFile(BaseModel):
    """On-disk vector store: header plus ordered chunk records."""

    model_config = ConfigDict(populate_by_name=True)

    embedding_model: str = Field(alias="embeddingModel", description="Embedding model identity")
    dimension: int = Field(ge=1, description="Vector length shared by every chunk")
    created_at: datetime = Field(
        alias="createdAt",
        default_factory=lambda: datetime.now(timezone.utc),
        description="Ingestion timestamp",
    )
    chunk_count: int = Field(alias="chunkCount", ge=0, description="Number of chunk records")
    chunks: list[Chunk] = Field(description="Chunk records in insertion order")

    @model_validator(mode="after")
    def check_chunks(self) -> "VectorStoreFile":
        """Enforce header/record agreement and store invariants."""
        if self.chunk_count != len(self.chunks):
            raise ValueError(
                f"chunkCount is {self.chunk_count} but {len(self.chunks)} chunks are stored"
            )
        validate_chunks(self.chunks, self.dimension)
        return self
