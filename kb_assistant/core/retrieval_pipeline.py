"""
Retrieval pipeline orchestrator.

Runs one question through embed -> rank -> gate -> prompt -> generate and
returns the reply with retrieval metadata. Nothing is retried; any failure
after input validation is raised to the caller. A gate rejection is a
normal reply, not an error.

Dependencies: fastapi.concurrency, langchain_core, kb_assistant.core, kb_assistant.boundary
System role: Query-time RAG orchestration (coordinates only)
"""

import logging
from typing import TYPE_CHECKING

from fastapi.concurrency import run_in_threadpool
from langchain_core.embeddings import Embeddings

from kb_assistant.boundary.embeddings.validation import Vector, validate_vector
from kb_assistant.boundary.vdb.json_vector_store import VectorStore
from kb_assistant.core.confidence_gate import (
    INSUFFICIENT_INFORMATION_REPLY,
    passes_confidence_gate,
)
from kb_assistant.core.exceptions import (
    ClientInputError,
    EmbeddingError,
    GenerationError,
)
from kb_assistant.core.prompt_builder import DEFAULT_ASSISTANT_ROLE, build_prompt
from kb_assistant.core.similarity import rank
from kb_assistant.models.retrieval import QueryResult, RetrievalResult

if TYPE_CHECKING:
    from kb_assistant.boundary.llm.gemini_generator import GeminiGenerator

logger = logging.getLogger(__name__)


class RetrievalPipeline:
    """
    Answer questions from a loaded vector store.

    Holds only read-only collaborators, so one instance serves any number
    of concurrent requests.
    """

    def __init__(
        self,
        store: VectorStore,
        embeddings: Embeddings,
        generator: "GeminiGenerator",
        top_k: int = 3,
        accept_threshold: float = 0.45,
        assistant_role: str = DEFAULT_ASSISTANT_ROLE,
    ) -> None:
        """
        Initialize pipeline with its collaborators.

        Args:
            store: Loaded, read-only vector store
            embeddings: Embedding capability (same model as ingestion)
            generator: Generation capability exposing async agenerate(prompt)
            top_k: Maximum chunks passed to the prompt
            accept_threshold: Minimum top score for answering
            assistant_role: Role and domain stated in the prompt
        """
        if top_k < 1:
            raise ValueError("top_k must be at least 1")
        self._store = store
        self._embeddings = embeddings
        self._generator = generator
        self.top_k = top_k
        self.accept_threshold = accept_threshold
        self.assistant_role = assistant_role

    @staticmethod
    def _validate_question(question: str | None) -> str:
        if question is None or not question.strip():
            raise ClientInputError("Question must not be empty", field="message")
        return question

    async def embed_question(self, question: str) -> Vector:
        """
        Embed a question off the event loop and check its dimension.

        Raises:
            EmbeddingError: When the embedding call fails or returns a bad vector
        """
        try:
            raw_vector = await run_in_threadpool(self._embeddings.embed_query, question)
        except EmbeddingError:
            raise
        except Exception as e:
            raise EmbeddingError(f"Failed to embed question: {e}") from e
        return validate_vector(raw_vector, self._store.dimension)

    async def retrieve(self, question: str | None) -> RetrievalResult:
        """
        Embed, rank and gate a question.

        Args:
            question: User question

        Returns:
            RetrievalResult: Top-K ranked chunks and the gate decision

        Raises:
            ClientInputError: When the question is missing or blank
            EmbeddingError: When the question cannot be embedded
        """
        question = self._validate_question(question)

        logger.debug(f"{__name__}:retrieve - Step 1: Embedding question_len={len(question)}")
        query_vector = await self.embed_question(question)

        logger.debug(f"{__name__}:retrieve - Step 2: Ranking {len(self._store)} chunks (top_k={self.top_k})")
        ranked = rank(query_vector, self._store, self.top_k)

        top_score = ranked[0].score if ranked else 0.0
        gated = passes_confidence_gate(top_score, self.accept_threshold)
        logger.info(
            f"{__name__}:retrieve - Step 3: Gate {'accepted' if gated else 'rejected'} "
            f"top_score={top_score:.4f} threshold={self.accept_threshold}"
        )
        return RetrievalResult(chunks=ranked, gated=gated)

    async def answer(self, question: str | None) -> QueryResult:
        """
        Answer a question from the knowledge base.

        Args:
            question: User question

        Returns:
            QueryResult: Reply, retrieved chunk count and similarity scores.
                Rejected questions get the fixed insufficient-information
                reply with no chunks and no scores.

        Raises:
            ClientInputError: When the question is missing or blank
            EmbeddingError: When the question cannot be embedded
            GenerationError: When generation fails
        """
        retrieval = await self.retrieve(question)

        if not retrieval.gated:
            return QueryResult(
                reply=INSUFFICIENT_INFORMATION_REPLY,
                tokens_used=0,
                retrieved_chunks=0,
                similarity_scores=[],
            )

        prompt = build_prompt(retrieval.chunks, question, assistant_role=self.assistant_role)
        logger.debug(f"{__name__}:answer - Step 4: Built prompt prompt_len={len(prompt)}")

        try:
            reply = await self._generator.agenerate(prompt)
        except GenerationError as e:
            logger.error(f"{__name__}:answer - Step 5 FAILED: {type(e).__name__}: {e}")
            raise
        except Exception as e:
            logger.error(f"{__name__}:answer - Step 5 FAILED: {type(e).__name__}: {e}")
            raise GenerationError(f"Generation failed: {e}") from e

        logger.info(f"{__name__}:answer - SUCCESS: retrieved_chunks={len(retrieval.chunks)}")
        return QueryResult(
            reply=reply,
            tokens_used=0,
            retrieved_chunks=len(retrieval.chunks),
            similarity_scores=retrieval.scores,
        )
