"""
Shared test fixtures and configuration for entire test suite.

Provides: keyword embedding stub, generator mock, sample documents and
stores, settings pointed at temp files
Dependencies: pytest, langchain_core
System role: Test infrastructure and fixture management
"""

import json
import math
import re
import tempfile
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from langchain_core.embeddings import Embeddings

from kb_assistant.boundary.vdb.json_vector_store import VectorStore, save_vector_store
from kb_assistant.configs.generation import GenerationSettings
from kb_assistant.configs.retrieval import RetrievalSettings
from kb_assistant.configs.settings import Settings
from kb_assistant.models.chunk import Chunk
from kb_assistant.models.document import Document

KEYWORDS = ["fee", "refund", "contract", "court", "deadline", "payment", "client", "policy"]
TEST_DIMENSION = len(KEYWORDS)
TEST_MODEL = "test/keyword-embeddings"


class KeywordEmbeddings(Embeddings):
    """Deterministic embeddings: normalized keyword counts, one axis per keyword."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []

    def _embed(self, text: str) -> list[float]:
        # Plural "s" folds onto the keyword so "fees" matches "fee"
        tokens = [token.removesuffix("s") for token in re.findall(r"[a-z]+", text.lower())]
        counts = [float(tokens.count(keyword)) for keyword in KEYWORDS]
        norm = math.sqrt(sum(value * value for value in counts))
        if norm == 0.0:
            return counts
        return [value / norm for value in counts]

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        return [self._embed(text) for text in texts]

    def embed_query(self, text: str) -> list[float]:
        return self._embed(text)


FEE_POLICY = Document(
    id="doc-fees",
    title="Fee Policy",
    content=(
        "Our fee policy: the hourly fee is billed monthly. "
        "Client payment is due within thirty days of the invoice."
    ),
)

REFUND_POLICY = Document(
    id="doc-refunds",
    title="Refund Policy",
    content=(
        "Refund policy: a refund is issued when the contract is cancelled "
        "before any refund request deadline passes."
    ),
)


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that is removed after the test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def keyword_embeddings() -> KeywordEmbeddings:
    """Provide the keyword embedding stub."""
    return KeywordEmbeddings()


@pytest.fixture
def mock_generator() -> AsyncMock:
    """
    Create mock generation capability.

    Returns:
        AsyncMock: Generator whose agenerate returns a fixed reply
    """
    generator = AsyncMock()
    generator.model = "gemini-test"
    generator.agenerate = AsyncMock(return_value="Invoices are due within thirty days.")
    return generator


@pytest.fixture
def sample_documents() -> list[Document]:
    """Provide the Fee Policy and Refund Policy documents."""
    return [FEE_POLICY, REFUND_POLICY]


@pytest.fixture
def docs_file(temp_dir: Path, sample_documents: list[Document]) -> Path:
    """Write sample documents to a JSON docs file."""
    path = temp_dir / "docs.json"
    path.write_text(
        json.dumps([document.model_dump() for document in sample_documents]),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def sample_chunks(
    sample_documents: list[Document],
    keyword_embeddings: KeywordEmbeddings,
) -> list[Chunk]:
    """Embed each sample document as a single chunk."""
    return [
        Chunk(
            id=Chunk.make_id(document.id, 0),
            doc_id=document.id,
            title=document.title,
            chunk_index=0,
            content=document.content,
            vector=keyword_embeddings.embed_query(document.content),
        )
        for document in sample_documents
    ]


@pytest.fixture
def sample_store(sample_chunks: list[Chunk]) -> VectorStore:
    """Provide an in-memory store over the sample chunks."""
    return VectorStore(sample_chunks, dimension=TEST_DIMENSION, embedding_model=TEST_MODEL)


@pytest.fixture
def store_file(temp_dir: Path, sample_chunks: list[Chunk]) -> Path:
    """Persist the sample chunks as a vector store file."""
    return save_vector_store(
        temp_dir / "vector_store.json",
        sample_chunks,
        embedding_model=TEST_MODEL,
        dimension=TEST_DIMENSION,
    )


@pytest.fixture
def test_settings(temp_dir: Path) -> Settings:
    """Settings pointed at temp files and the keyword embedding dimension."""
    return Settings(
        retrieval=RetrievalSettings(
            chunk_size=400,
            chunk_overlap=50,
            top_k=3,
            accept_threshold=0.45,
            embedding_model=TEST_MODEL,
            embedding_dimension=TEST_DIMENSION,
            docs_path=str(temp_dir / "docs.json"),
            vector_store_path=str(temp_dir / "vector_store.json"),
        ),
        generation=GenerationSettings(api_key="test-key"),
    )
