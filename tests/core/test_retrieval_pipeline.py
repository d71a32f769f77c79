"""Tests for the retrieval pipeline orchestrator.

Uses the keyword embedding stub from conftest, so similarity scores are
predictable: "fee policy" matches the Fee Policy document at ~0.80 and
the Refund Policy document at ~0.20.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from kb_assistant.boundary.vdb.json_vector_store import VectorStore
from kb_assistant.core.confidence_gate import INSUFFICIENT_INFORMATION_REPLY
from kb_assistant.core.exceptions import (
    ClientInputError,
    EmbeddingError,
    GenerationError,
    GenerationTimeoutError,
)
from kb_assistant.core.retrieval_pipeline import RetrievalPipeline


@pytest.fixture
def pipeline(sample_store, keyword_embeddings, mock_generator) -> RetrievalPipeline:
    return RetrievalPipeline(
        store=sample_store,
        embeddings=keyword_embeddings,
        generator=mock_generator,
        top_k=3,
        accept_threshold=0.45,
    )


class TestRetrieve:
    """Test embed -> rank -> gate."""

    @pytest.mark.asyncio
    async def test_relevant_question_ranks_matching_document_first(self, pipeline) -> None:
        """Should rank Fee Policy above Refund Policy for a fee question."""
        result = await pipeline.retrieve("What is the fee policy?")

        assert result.gated is True
        assert result.chunks[0].chunk.title == "Fee Policy"
        assert result.chunks[0].score > result.chunks[1].score
        assert result.top_score == pytest.approx(0.8018, abs=1e-3)

    @pytest.mark.asyncio
    async def test_unrelated_question_is_not_gated(self, pipeline) -> None:
        """Should reject a question with no overlap with the store."""
        result = await pipeline.retrieve("What time does the court open?")

        assert result.gated is False
        assert result.top_score == pytest.approx(0.0)

    @pytest.mark.asyncio
    async def test_empty_store_is_never_gated(
        self, sample_store, keyword_embeddings, mock_generator
    ) -> None:
        """Should reject everything when the store holds no chunks."""
        pipeline = RetrievalPipeline(
            store=VectorStore([], dimension=sample_store.dimension),
            embeddings=keyword_embeddings,
            generator=mock_generator,
        )

        result = await pipeline.retrieve("What is the fee policy?")

        assert result.chunks == []
        assert result.gated is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("question", [None, "", "   \n"])
    async def test_blank_question_rejected(self, pipeline, question) -> None:
        """Should raise ClientInputError for a missing or blank question."""
        with pytest.raises(ClientInputError):
            await pipeline.retrieve(question)

    @pytest.mark.asyncio
    async def test_wrong_dimension_from_embedder(self, sample_store, mock_generator) -> None:
        """Should raise EmbeddingError when the query vector has the wrong length."""
        embeddings = MagicMock()
        embeddings.embed_query.return_value = [0.1, 0.2]
        pipeline = RetrievalPipeline(sample_store, embeddings, mock_generator)

        with pytest.raises(EmbeddingError):
            await pipeline.retrieve("What is the fee policy?")

    @pytest.mark.asyncio
    async def test_embedder_failure_wrapped(self, sample_store, mock_generator) -> None:
        """Should wrap unexpected embedder errors as EmbeddingError."""
        embeddings = MagicMock()
        embeddings.embed_query.side_effect = RuntimeError("model crashed")
        pipeline = RetrievalPipeline(sample_store, embeddings, mock_generator)

        with pytest.raises(EmbeddingError, match="model crashed"):
            await pipeline.retrieve("What is the fee policy?")

    def test_invalid_top_k(self, sample_store, keyword_embeddings, mock_generator) -> None:
        with pytest.raises(ValueError):
            RetrievalPipeline(sample_store, keyword_embeddings, mock_generator, top_k=0)


class TestAnswer:
    """Test the full question answering flow."""

    @pytest.mark.asyncio
    async def test_accepted_question_generates_reply(self, pipeline, mock_generator) -> None:
        """Should pass a grounded prompt to the generator and return its reply."""
        # Act
        result = await pipeline.answer("What is the fee policy?")

        # Assert
        assert result.reply == "Invoices are due within thirty days."
        assert result.tokens_used == 0
        assert result.retrieved_chunks == 2
        assert result.similarity_scores[0] == pytest.approx(0.8018, abs=1e-3)
        assert result.similarity_scores == sorted(result.similarity_scores, reverse=True)

        mock_generator.agenerate.assert_awaited_once()
        prompt = mock_generator.agenerate.await_args.args[0]
        assert "hourly fee is billed monthly" in prompt
        assert prompt.index("hourly fee") < prompt.index("Refund policy")
        assert prompt.rstrip().endswith("What is the fee policy?")

    @pytest.mark.asyncio
    async def test_top_k_limits_retrieved_chunks(
        self, sample_store, keyword_embeddings, mock_generator
    ) -> None:
        """Should send at most top_k chunks to the generator."""
        pipeline = RetrievalPipeline(sample_store, keyword_embeddings, mock_generator, top_k=1)

        result = await pipeline.answer("When is a refund issued?")

        assert result.retrieved_chunks == 1
        prompt = mock_generator.agenerate.await_args.args[0]
        assert "Refund policy" in prompt
        assert "hourly fee" not in prompt

    @pytest.mark.asyncio
    async def test_rejected_question_never_calls_generator(self, pipeline, mock_generator) -> None:
        """Should short-circuit with the fixed reply when the gate rejects."""
        result = await pipeline.answer("What time does the court open?")

        assert result.reply == INSUFFICIENT_INFORMATION_REPLY
        assert result.retrieved_chunks == 0
        assert result.similarity_scores == []
        mock_generator.agenerate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_generation_error_propagates(self, pipeline, mock_generator) -> None:
        """Should surface generation failures without falling back to raw chunks."""
        mock_generator.agenerate = AsyncMock(
            side_effect=GenerationTimeoutError("timed out", model="gemini-test")
        )

        with pytest.raises(GenerationTimeoutError):
            await pipeline.answer("What is the fee policy?")

    @pytest.mark.asyncio
    async def test_unexpected_generation_error_wrapped(self, pipeline, mock_generator) -> None:
        """Should wrap unknown generator errors as GenerationError."""
        mock_generator.agenerate = AsyncMock(side_effect=RuntimeError("boom"))

        with pytest.raises(GenerationError, match="boom"):
            await pipeline.answer("What is the fee policy?")

    @pytest.mark.asyncio
    async def test_threshold_is_configurable(
        self, sample_store, keyword_embeddings, mock_generator
    ) -> None:
        """Should reject a match that scores below a stricter threshold."""
        pipeline = RetrievalPipeline(
            sample_store, keyword_embeddings, mock_generator, accept_threshold=0.9
        )

        result = await pipeline.answer("What is the fee policy?")

        assert result.reply == INSUFFICIENT_INFORMATION_REPLY
        mock_generator.agenerate.assert_not_awaited()
