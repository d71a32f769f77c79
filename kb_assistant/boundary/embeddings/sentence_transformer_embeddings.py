"""
Sentence-transformers embeddings with fixed output dimensionality.

Wraps a local SentenceTransformer model behind the LangChain Embeddings
interface. Output is mean-pooled by the model and L2-normalized here, and
every vector is checked against the configured dimension so that a model
swap fails loudly instead of degrading similarity scores.

Dependencies: sentence_transformers, langchain_core
System role: Embedding capability for ingestion and query time
"""

import logging
import threading

from langchain_core.embeddings import Embeddings
from sentence_transformers import SentenceTransformer

from kb_assistant.boundary.embeddings.validation import Vector, validate_vector
from kb_assistant.core.exceptions import ConfigurationError, EmbeddingError

logger = logging.getLogger(__name__)


class SentenceTransformerEmbeddings(Embeddings):
    """
    LangChain Embeddings backed by a local sentence-transformers model.

    The underlying model is not guaranteed reentrant, so encode calls are
    serialized through a lock; callers on the event loop should run them
    in a worker thread.
    """

    def __init__(
        self,
        model_name: str = "sentence-transformers/all-MiniLM-L6-v2",
        dimension: int = 384,
        device: str | None = None,
    ) -> None:
        """
        Load the embedding model.

        Args:
            model_name: Hugging Face model ID
            dimension: Expected output dimension
            device: Torch device (auto-selected when None)

        Raises:
            EmbeddingError: When the model cannot be loaded
            ConfigurationError: When the model's dimension differs from dimension
        """
        self.model_name = model_name
        self.dimension = dimension
        self._lock = threading.Lock()

        try:
            self._model = SentenceTransformer(model_name, device=device)
        except Exception as e:
            raise EmbeddingError(
                f"Failed to load embedding model {model_name!r}: {e}",
                details={"model": model_name},
            ) from e

        model_dimension = self._model.get_sentence_embedding_dimension()
        if model_dimension is not None and model_dimension != dimension:
            raise ConfigurationError(
                f"Embedding model {model_name!r} produces {model_dimension}-dim vectors, "
                f"configured dimension is {dimension}",
                setting="embedding_dimension",
            )
        logger.info(
            f"{__name__}:__init__ - Initialized with model={model_name}, dimension={dimension}"
        )

    def embed_documents(self, texts: list[str]) -> list[Vector]:
        """
        Embed a batch of texts.

        Args:
            texts: Texts to embed

        Returns:
            list[Vector]: Unit-normalized vectors, one per text

        Raises:
            EmbeddingError: When encoding fails or a vector is malformed
        """
        if not texts:
            return []

        try:
            with self._lock:
                embeddings = self._model.encode(
                    list(texts),
                    normalize_embeddings=True,
                    convert_to_numpy=True,
                    show_progress_bar=False,
                )
        except Exception as e:
            raise EmbeddingError(
                f"Failed to generate embeddings: {e}",
                details={"model": self.model_name, "text_count": len(texts)},
            ) from e

        if len(embeddings) != len(texts):
            raise EmbeddingError(
                f"Embedding model returned {len(embeddings)} vectors for {len(texts)} texts"
            )
        return [validate_vector(embedding.tolist(), self.dimension) for embedding in embeddings]

    def embed_query(self, text: str) -> Vector:
        """
        Embed a single query.

        Args:
            text: Query text

        Returns:
            Vector: Unit-normalized query vector
        """
        return self.embed_documents([text])[0]
