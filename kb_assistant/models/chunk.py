"""
Chunk domain models.

Represents an embedded document chunk with a deterministic ID, plus the
per-query scored view of a chunk produced by the similarity ranker.

Dependencies: pydantic
System role: Vector store record and ranking result structures
"""

from pydantic import BaseModel, ConfigDict, Field


class Chunk(BaseModel):
    """Embedded document chunk as persisted in the vector store."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(description="Deterministic chunk identifier ({docId}-chunk-{chunkIndex})")
    doc_id: str = Field(alias="docId", description="Parent document ID")
    title: str = Field(description="Parent document title")
    chunk_index: int = Field(alias="chunkIndex", ge=0, description="Zero-based position within the document")
    content: str = Field(description="Chunk text content")
    vector: list[float] = Field(description="Unit-normalized embedding vector")

    @staticmethod
    def make_id(doc_id: str, chunk_index: int) -> str:
        """Derive the chunk ID from its parent document and position."""
        return f"{doc_id}-chunk-{chunk_index}"


class ScoredChunk(BaseModel):
    """Chunk paired with its cosine similarity to a query."""

    model_config = ConfigDict(frozen=True)

    chunk: Chunk
    score: float = Field(ge=-1.0, le=1.0, description="Cosine similarity")
