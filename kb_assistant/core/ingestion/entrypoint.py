"""
Ingestion pipeline orchestrator.

Coordinates document loading, chunking, embedding and store saving tasks.
Every run is a full rebuild: the new store replaces the old one in a
single atomic write, or not at all.

Dependencies: All task modules, configs
System role: Pipeline orchestration (coordinates only)
"""

import logging
import sys
import time

from langchain_core.embeddings import Embeddings

from kb_assistant.configs.settings import Settings, get_settings
from kb_assistant.core.ingestion.models import IngestionResult
from kb_assistant.core.ingestion.tasks import (
    ChunkingTask,
    DocumentLoadingTask,
    EmbeddingTask,
    SavingTask,
)
from kb_assistant.observability import configure_logging

logger = logging.getLogger(__name__)


class IngestionPipeline:
    """Orchestrate knowledge base ingestion: load -> chunk -> embed -> save."""

    def __init__(
        self,
        settings: Settings | None = None,
        embeddings: Embeddings | None = None,
    ) -> None:
        """
        Initialize pipeline with configuration.

        Args:
            settings: Application settings (uses environment if None)
            embeddings: Embedding capability (sentence-transformers if None)
        """
        self._settings = settings or get_settings()
        retrieval = self._settings.retrieval

        if embeddings is None:
            from kb_assistant.boundary.embeddings.sentence_transformer_embeddings import (
                SentenceTransformerEmbeddings,
            )

            embeddings = SentenceTransformerEmbeddings(
                model_name=retrieval.embedding_model,
                dimension=retrieval.embedding_dimension,
            )

        self._loading_task = DocumentLoadingTask()
        self._chunking_task = ChunkingTask(
            chunk_size=retrieval.chunk_size,
            chunk_overlap=retrieval.chunk_overlap,
        )
        self._embedding_task = EmbeddingTask(
            embeddings=embeddings,
            dimension=retrieval.embedding_dimension,
        )
        self._saving_task = SavingTask(
            embedding_model=retrieval.embedding_model,
            dimension=retrieval.embedding_dimension,
        )

    def run(
        self,
        docs_path: str | None = None,
        store_path: str | None = None,
    ) -> IngestionResult:
        """
        Rebuild the vector store from the docs source.

        Args:
            docs_path: Documents JSON file (settings value if None)
            store_path: Vector store destination (settings value if None)

        Returns:
            IngestionResult: Counts, output path and timing

        Raises:
            ClientInputError: Documents file missing or malformed
            EmbeddingError: Embedding generation failed
            StoreWriteError: Store could not be written (previous store kept)
        """
        retrieval = self._settings.retrieval
        docs_path = docs_path or retrieval.docs_path
        store_path = store_path or retrieval.vector_store_path

        start_time = time.perf_counter()
        logger.info(f"{__name__}:run - START: docs_path={docs_path}, store_path={store_path}")

        # Load documents
        documents = self._loading_task.load(docs_path)
        logger.info(f"{__name__}:run - Step 1: Loaded {len(documents)} document(s)")

        # Chunk documents
        chunked_documents = self._chunking_task.chunk(documents)
        logger.info(f"{__name__}:run - Step 2: Produced {len(chunked_documents)} chunk(s)")

        # Embed chunks
        chunks = self._embedding_task.embed(chunked_documents)
        logger.info(f"{__name__}:run - Step 3: Embedded {len(chunks)} chunk(s)")

        # Replace the store
        output_path = self._saving_task.save(chunks, store_path)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(f"{__name__}:run - SUCCESS: Wrote {output_path} in {elapsed_ms:.0f}ms")

        return IngestionResult(
            document_count=len(documents),
            chunk_count=len(chunks),
            output_path=output_path,
            embedding_model=retrieval.embedding_model,
            processing_time_ms=elapsed_ms,
        )


def main(argv: list[str] | None = None) -> int:
    """
    Run ingestion from the command line.

    Usage:
        python -m kb_assistant.core.ingestion.entrypoint [DOCS_PATH [STORE_PATH]]
    """
    args = sys.argv[1:] if argv is None else argv
    settings = get_settings()
    configure_logging(settings.log_level)

    docs_path = args[0] if len(args) > 0 else None
    store_path = args[1] if len(args) > 1 else None

    result = IngestionPipeline(settings=settings).run(docs_path=docs_path, store_path=store_path)
    print(result.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
