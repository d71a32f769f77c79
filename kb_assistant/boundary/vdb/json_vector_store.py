"""
JSON-file vector store.

Persists the full set of embedded chunks as one JSON document and loads
it read-only for serving. Writes go to a temporary file in the target
directory and replace the destination only once complete, so a crashed
ingestion never leaves a half-written store behind.

Dependencies: numpy, pydantic, kb_assistant.boundary.vdb.vector_schemas
System role: Vector store persistence (build once, load read-only)
"""

import json
import logging
import os
import stat
import tempfile
from collections.abc import Iterator, Sequence
from pathlib import Path

import numpy as np
from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from kb_assistant.boundary.vdb.vector_schemas import VectorStoreFile, validate_chunks
from kb_assistant.core.exceptions import StoreLoadError, StoreWriteError
from kb_assistant.models.chunk import Chunk
from kb_assistant.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)

_LEGACY_STORE = TypeAdapter(list[Chunk])

DEFAULT_STORE_MODE = 0o644


class VectorStore:
    """
    Immutable, ordered collection of embedded chunks.

    Vectors are stacked into a read-only matrix once at construction so
    every query ranks against the same shared array without copying.
    """

    def __init__(
        self,
        chunks: Sequence[Chunk],
        dimension: int,
        embedding_model: str | None = None,
    ) -> None:
        """
        Initialize store.

        Args:
            chunks: Chunks in insertion order
            dimension: Vector length shared by every chunk
            embedding_model: Model identity recorded with the store (None for legacy files)
        """
        self._chunks = tuple(chunks)
        self._dimension = dimension
        self._embedding_model = embedding_model

        matrix = np.asarray([chunk.vector for chunk in self._chunks], dtype=np.float64)
        self._vectors = matrix.reshape(len(self._chunks), dimension)
        self._vectors.setflags(write=False)

    @property
    def chunks(self) -> tuple[Chunk, ...]:
        return self._chunks

    @property
    def vectors(self) -> np.ndarray:
        """Read-only (n, dimension) matrix aligned with chunks."""
        return self._vectors

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def embedding_model(self) -> str | None:
        return self._embedding_model

    def __len__(self) -> int:
        return len(self._chunks)

    def __iter__(self) -> Iterator[Chunk]:
        return iter(self._chunks)


def load_vector_store(
    path: str | Path,
    expected_dimension: int,
    expected_model: str | None = None,
) -> VectorStore:
    """
    Load and validate a persisted vector store.

    Accepts the current format (header + chunks) and the legacy bare
    array of chunk records. Legacy files carry no model identity, so only
    the dimension can be checked.

    Args:
        path: Store file path
        expected_dimension: Dimension of the configured embedding model
        expected_model: Configured embedding model identity (skip check when None)

    Returns:
        VectorStore: Loaded store

    Raises:
        StoreLoadError: When the file is missing, unreadable, invalid, or
            was built with a different model or dimension
    """
    store_path = Path(path)
    logger.info(f"{__name__}:load_vector_store - START: path={store_path}")

    if not store_path.is_file():
        raise StoreLoadError("Vector store file not found", path=str(store_path))

    try:
        raw = json.loads(store_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise StoreLoadError(f"Vector store file is unreadable: {e}", path=str(store_path)) from e
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise StoreLoadError(f"Vector store file is not valid UTF-8 JSON: {e}", path=str(store_path)) from e

    try:
        if isinstance(raw, list):
            chunks = _LEGACY_STORE.validate_python(raw)
            validate_chunks(chunks, expected_dimension)
            logger.warning(
                f"{__name__}:load_vector_store - Legacy store without model header; "
                "only the vector dimension was verified",
                extra={"path": str(store_path)},
            )
            store = VectorStore(chunks, dimension=expected_dimension)
        else:
            store_file = VectorStoreFile.model_validate(raw)
            if store_file.dimension != expected_dimension:
                raise StoreLoadError(
                    f"Store dimension {store_file.dimension} does not match configured "
                    f"embedding dimension {expected_dimension}",
                    path=str(store_path),
                )
            if expected_model is not None and store_file.embedding_model != expected_model:
                raise StoreLoadError(
                    f"Store was built with embedding model {store_file.embedding_model!r}, "
                    f"configured model is {expected_model!r}",
                    path=str(store_path),
                )
            store = VectorStore(
                store_file.chunks,
                dimension=store_file.dimension,
                embedding_model=store_file.embedding_model,
            )
    except (ValidationError, ValueError) as e:
        raise StoreLoadError(f"Vector store failed validation: {e}", path=str(store_path)) from e

    if not len(store):
        logger.warning(f"{__name__}:load_vector_store - Store is empty, every query will be rejected")
    logger.info(f"{__name__}:load_vector_store - SUCCESS: Loaded {len(store)} chunks (dimension={store.dimension})")
    return store


def _store_file_mode(store_path: Path) -> int:
    """Permission bits for a rewritten store: the previous file's, else 0644."""
    try:
        return stat.S_IMODE(store_path.stat().st_mode)
    except FileNotFoundError:
        return DEFAULT_STORE_MODE


def save_vector_store(
    path: str | Path,
    chunks: Sequence[Chunk],
    embedding_model: str,
    dimension: int,
) -> Path:
    """
    Atomically replace the store file with a full new chunk set.

    Args:
        path: Destination file path
        chunks: Complete chunk set in insertion order
        embedding_model: Model identity to record in the header
        dimension: Vector length shared by every chunk

    Returns:
        Path: Destination path

    Raises:
        StoreWriteError: When the chunk set is invalid or writing fails;
            any previous store file is left untouched
    """
    store_path = Path(path)

    try:
        store_file = VectorStoreFile(
            embedding_model=embedding_model,
            dimension=dimension,
            chunk_count=len(chunks),
            chunks=list(chunks),
        )
    except (ValidationError, ValueError) as e:
        raise StoreWriteError(f"Refusing to write invalid vector store: {e}", path=str(store_path)) from e

    try:
        payload = store_file.model_dump_json(by_alias=True, indent=2)
    except (PydanticSerializationError, UnicodeEncodeError) as e:
        raise StoreWriteError(f"Vector store could not be serialized: {e}", path=str(store_path)) from e

    tmp_path: str | None = None
    try:
        store_path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=store_path.parent,
            prefix=f".{store_path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_path = tmp.name
            tmp.write(payload)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.chmod(tmp_path, _store_file_mode(store_path))
        os.replace(tmp_path, store_path)
    except OSError as e:
        if tmp_path and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise StoreWriteError(f"Failed to write vector store: {e}", path=str(store_path)) from e

    log_with_context(
        logger,
        logging.INFO,
        "Vector store written",
        path=str(store_path),
        chunk_count=len(chunks),
        dimension=dimension,
    )
    return store_path
