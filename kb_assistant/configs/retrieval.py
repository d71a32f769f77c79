"""
Retrieval configuration settings.

Manages chunking, embedding and ranking parameters shared by ingestion
and the query path. The same values must be used on both sides, so they
live in a single settings class.

Dependencies: pydantic, pydantic_settings
System role: Retrieval pipeline configuration
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RetrievalSettings(BaseSettings):
    """Chunking, embedding, ranking and store location settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="KB_",
        case_sensitive=False,
        extra="ignore",
    )

    chunk_size: int = Field(default=400, description="Words per chunk window")
    chunk_overlap: int = Field(
        default=50,
        description="Words shared by consecutive windows (must be < chunk_size)",
    )
    top_k: int = Field(default=3, description="Maximum number of chunks retrieved per query")
    accept_threshold: float = Field(
        default=0.45,
        description="Minimum top similarity score for a query to be answered (-1.0 to 1.0)",
    )

    embedding_model: str = Field(
        default="sentence-transformers/all-MiniLM-L6-v2",
        description="Sentence-transformers model used for ingestion and queries",
    )
    embedding_dimension: int = Field(
        default=384,
        description="Embedding vector dimension produced by embedding_model",
    )

    docs_path: str = Field(
        default="data/docs.json",
        description="JSON file with the source documents for ingestion",
    )
    vector_store_path: str = Field(
        default="data/vector_store.json",
        description="Persisted vector store written by ingestion, loaded at startup",
    )
    assistant_role: str = Field(
        default="a legal assistant for a law firm",
        description="Role and domain stated in the grounding prompt",
    )

    @model_validator(mode="after")
    def check_consistency(self) -> "RetrievalSettings":
        """Reject combinations that would loop forever or never answer."""
        if self.chunk_size < 1:
            raise ValueError("chunk_size must be at least 1")
        if self.chunk_overlap < 0:
            raise ValueError("chunk_overlap must not be negative")
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be smaller than "
                f"chunk_size ({self.chunk_size})"
            )
        if self.top_k < 1:
            raise ValueError("top_k must be at least 1")
        if not -1.0 <= self.accept_threshold <= 1.0:
            raise ValueError("accept_threshold must lie within [-1.0, 1.0]")
        if self.embedding_dimension < 1:
            raise ValueError("embedding_dimension must be at least 1")
        return self
