"""
Chat API schemas.

Request/response schemas for the chat endpoint.

Dependencies: pydantic
System role: Chat API contracts
"""

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    """Request schema for chat messages.

    Both fields are optional at the schema level so that missing values
    are reported with the endpoint's own 400 error body.
    """

    model_config = ConfigDict(populate_by_name=True)

    session_id: str | None = Field(default=None, alias="sessionId", description="Opaque client session ID")
    message: str | None = Field(default=None, description="User question")


class ChatResponse(BaseModel):
    """Response schema for chat messages."""

    model_config = ConfigDict(populate_by_name=True)

    reply: str
    tokens_used: int = Field(alias="tokensUsed")
    retrieved_chunks: int = Field(alias="retrievedChunks")
    similarity_scores: list[float] = Field(alias="similarityScores")


class ErrorResponse(BaseModel):
    """Error body returned for failed requests."""

    error: str
