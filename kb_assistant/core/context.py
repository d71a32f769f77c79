"""
Pipeline context.

Everything the serving path needs, constructed once at startup and passed
by reference into request handlers. Startup fails fast: a bad setting,
missing store or mismatched model stops the process before it serves.

Dependencies: kb_assistant.configs, kb_assistant.boundary, kb_assistant.core
System role: Startup wiring for the retrieval pipeline
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from langchain_core.embeddings import Embeddings

from kb_assistant.boundary.vdb.json_vector_store import VectorStore, load_vector_store
from kb_assistant.configs.settings import Settings, get_settings
from kb_assistant.core.retrieval_pipeline import RetrievalPipeline

if TYPE_CHECKING:
    from kb_assistant.boundary.llm.gemini_generator import GeminiGenerator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineContext:
    """Shared, read-only serving state."""

    settings: Settings
    store: VectorStore
    embeddings: Embeddings
    pipeline: RetrievalPipeline


def build_pipeline_context(
    settings: Settings | None = None,
    embeddings: Embeddings | None = None,
    generator: "GeminiGenerator | None" = None,
) -> PipelineContext:
    """
    Load the store and external capabilities and assemble the pipeline.

    Args:
        settings: Application settings (environment when None)
        embeddings: Embedding capability (sentence-transformers when None)
        generator: Generation capability (Gemini when None)

    Returns:
        PipelineContext: Ready-to-serve context

    Raises:
        ConfigurationError: Invalid settings or model/dimension mismatch
        StoreLoadError: Store missing, unreadable or built with another model
        EmbeddingError: Embedding model cannot be loaded
    """
    settings = settings or get_settings()
    retrieval = settings.retrieval

    logger.info(f"{__name__}:build_pipeline_context - Loading vector store from {retrieval.vector_store_path}")
    store = load_vector_store(
        retrieval.vector_store_path,
        expected_dimension=retrieval.embedding_dimension,
        expected_model=retrieval.embedding_model,
    )

    if embeddings is None:
        from kb_assistant.boundary.embeddings.sentence_transformer_embeddings import (
            SentenceTransformerEmbeddings,
        )

        logger.info(f"{__name__}:build_pipeline_context - Loading embedding model {retrieval.embedding_model}")
        embeddings = SentenceTransformerEmbeddings(
            model_name=retrieval.embedding_model,
            dimension=retrieval.embedding_dimension,
        )

    if generator is None:
        from kb_assistant.boundary.llm.gemini_generator import GeminiGenerator

        generator = GeminiGenerator(
            model=settings.generation.model,
            temperature=settings.generation.temperature,
            timeout_seconds=settings.generation.timeout_seconds,
            api_key=settings.generation.api_key,
        )

    pipeline = RetrievalPipeline(
        store=store,
        embeddings=embeddings,
        generator=generator,
        top_k=retrieval.top_k,
        accept_threshold=retrieval.accept_threshold,
        assistant_role=retrieval.assistant_role,
    )
    logger.info(f"{__name__}:build_pipeline_context - Ready with {len(store)} chunks")
    return PipelineContext(
        settings=settings,
        store=store,
        embeddings=embeddings,
        pipeline=pipeline,
    )
