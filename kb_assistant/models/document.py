"""
Document domain model.

Raw input unit for ingestion, supplied wholesale from the docs source.

Dependencies: pydantic
System role: Ingestion input contract
"""

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """Source document to be chunked and embedded."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1, description="Stable document identifier")
    title: str = Field(min_length=1, description="Human-readable document title")
    content: str = Field(description="Plain text body")
