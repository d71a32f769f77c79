"""
Ingestion result model.

Represents the outcome of one full vector store rebuild.

Dependencies: pydantic
System role: Return type for IngestionPipeline.run()
"""

from pydantic import BaseModel, Field


class IngestionResult(BaseModel):
    """Result of an ingestion run."""

    document_count: int = Field(description="Number of source documents read")
    chunk_count: int = Field(description="Number of chunks written to the store")
    output_path: str = Field(description="Path of the written vector store")
    embedding_model: str = Field(description="Embedding model recorded in the store header")
    processing_time_ms: float = Field(description="Total processing time in milliseconds")
