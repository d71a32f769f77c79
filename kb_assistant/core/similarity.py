"""
Cosine similarity ranking.

Scores every stored chunk against a query vector with an exact linear
scan and returns the best matches.

Dependencies: numpy, kb_assistant.models, kb_assistant.boundary.vdb
System role: Similarity ranker for the retrieval pipeline
"""

from collections.abc import Sequence

import numpy as np

from kb_assistant.boundary.vdb.json_vector_store import VectorStore
from kb_assistant.models.chunk import Chunk, ScoredChunk


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Compute cosine similarity between two vectors.

    Returns a value in [-1, 1]; higher means more similar. A zero-magnitude
    vector on either side scores 0.0.

    Args:
        a: First vector
        b: Second vector

    Returns:
        float: dot(a, b) / (|a| * |b|)

    Raises:
        ValueError: When the vectors differ in length
    """
    vec_a = np.asarray(a, dtype=np.float64)
    vec_b = np.asarray(b, dtype=np.float64)
    if vec_a.shape != vec_b.shape:
        raise ValueError(
            f"Vectors must have the same dimensions ({vec_a.shape[0]} != {vec_b.shape[0]})"
        )

    norm_a = float(np.linalg.norm(vec_a))
    norm_b = float(np.linalg.norm(vec_b))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0
    return float(np.clip(np.dot(vec_a, vec_b) / (norm_a * norm_b), -1.0, 1.0))


def cosine_scores(query_vector: Sequence[float], matrix: np.ndarray) -> np.ndarray:
    """
    Cosine similarity between a query and every row of a matrix.

    Args:
        query_vector: 1-D query of shape (dim,)
        matrix: 2-D array of shape (n, dim)

    Returns:
        np.ndarray: Scores of shape (n,), zero for zero-magnitude rows
    """
    query = np.asarray(query_vector, dtype=np.float64)
    if matrix.ndim != 2 or matrix.shape[1] != query.shape[0]:
        raise ValueError(
            f"Query dimension {query.shape[0]} does not match store dimension "
            f"{matrix.shape[1] if matrix.ndim == 2 else 'unknown'}"
        )

    denominators = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
    scores = np.zeros(matrix.shape[0], dtype=np.float64)
    np.divide(matrix @ query, denominators, out=scores, where=denominators > 0)
    return np.clip(scores, -1.0, 1.0)


def rank(
    query_vector: Sequence[float],
    store: VectorStore | Sequence[Chunk],
    top_k: int,
    threshold: float | None = None,
) -> list[ScoredChunk]:
    """
    Rank stored chunks by similarity to a query vector.

    Ordering is strictly by descending score; equal scores keep store
    insertion order.

    Args:
        query_vector: Embedded query
        store: Loaded vector store or any ordered sequence of chunks
        top_k: Maximum number of results
        threshold: Drop chunks scoring below this value (no filtering when None)

    Returns:
        list[ScoredChunk]: At most top_k results, best first

    Raises:
        ValueError: When top_k < 1 or dimensions disagree
    """
    if top_k < 1:
        raise ValueError("top_k must be at least 1")

    if isinstance(store, VectorStore):
        chunks = store.chunks
        matrix = store.vectors
    else:
        chunks = tuple(store)
        matrix = np.asarray([chunk.vector for chunk in chunks], dtype=np.float64)

    if not chunks:
        return []

    scores = cosine_scores(query_vector, matrix)
    order = np.argsort(-scores, kind="stable")

    results: list[ScoredChunk] = []
    for index in order:
        score = float(scores[index])
        if threshold is not None and score < threshold:
            # Sorted descending, nothing after this passes either
            break
        results.append(ScoredChunk(chunk=chunks[index], score=score))
        if len(results) == top_k:
            break
    return results
