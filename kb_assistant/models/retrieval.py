"""
Retrieval result models.

Ephemeral per-query structures returned by the retrieval pipeline.

Dependencies: pydantic
System role: Retrieval pipeline outputs
"""

from pydantic import BaseModel, ConfigDict, Field

from kb_assistant.models.chunk import ScoredChunk


class RetrievalResult(BaseModel):
    """Ranked chunks for a query and the confidence gate decision."""

    chunks: list[ScoredChunk] = Field(default_factory=list, description="Top-K chunks, best first")
    gated: bool = Field(description="True when the confidence gate accepted the retrieval")

    @property
    def top_score(self) -> float:
        """Best similarity score, 0.0 when nothing was ranked."""
        return self.chunks[0].score if self.chunks else 0.0

    @property
    def scores(self) -> list[float]:
        return [scored.score for scored in self.chunks]


class QueryResult(BaseModel):
    """Reply plus retrieval metadata for one answered (or rejected) question."""

    model_config = ConfigDict(populate_by_name=True)

    reply: str
    tokens_used: int = Field(default=0, alias="tokensUsed", description="Token accounting is not implemented")
    retrieved_chunks: int = Field(alias="retrievedChunks")
    similarity_scores: list[float] = Field(default_factory=list, alias="similarityScores")
