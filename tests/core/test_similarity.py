"""Tests for cosine similarity and ranking."""

import numpy as np
import pytest

from kb_assistant.boundary.vdb.json_vector_store import VectorStore
from kb_assistant.core.similarity import cosine_scores, cosine_similarity, rank
from kb_assistant.models.chunk import Chunk


def _chunk(doc_id: str, vector: list[float], index: int = 0) -> Chunk:
    return Chunk(
        id=Chunk.make_id(doc_id, index),
        doc_id=doc_id,
        title=doc_id.title(),
        chunk_index=index,
        content=f"content of {doc_id}",
        vector=vector,
    )


class TestCosineSimilarity:
    """Test pairwise cosine similarity."""

    def test_identical_vectors_score_one(self) -> None:
        """Should score a non-zero vector against itself as 1."""
        assert cosine_similarity([0.3, -1.2, 2.0], [0.3, -1.2, 2.0]) == pytest.approx(1.0)

    def test_opposite_vectors_score_minus_one(self) -> None:
        """Should score v against -v as -1."""
        assert cosine_similarity([1.0, 2.0, 3.0], [-1.0, -2.0, -3.0]) == pytest.approx(-1.0)

    def test_orthogonal_vectors_score_zero(self) -> None:
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)

    def test_symmetric(self) -> None:
        """Should give the same score in both argument orders."""
        a, b = [0.2, 0.5, -0.1], [0.9, -0.3, 0.4]

        assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(b, a))

    def test_scale_invariant(self) -> None:
        """Should ignore vector magnitude."""
        assert cosine_similarity([1.0, 2.0], [10.0, 20.0]) == pytest.approx(1.0)

    def test_zero_vector_scores_zero(self) -> None:
        """Should return 0.0 instead of dividing by zero."""
        assert cosine_similarity([0.0, 0.0], [1.0, 1.0]) == 0.0
        assert cosine_similarity([1.0, 1.0], [0.0, 0.0]) == 0.0

    def test_dimension_mismatch_raises(self) -> None:
        with pytest.raises(ValueError):
            cosine_similarity([1.0, 2.0], [1.0, 2.0, 3.0])


class TestCosineScores:
    """Test vectorized scoring."""

    def test_matches_pairwise_similarity(self) -> None:
        """Should agree with cosine_similarity row by row."""
        matrix = np.array([[1.0, 0.0], [0.6, 0.8], [0.0, 0.0]])
        query = [0.8, 0.6]

        scores = cosine_scores(query, matrix)

        expected = [cosine_similarity(query, row) for row in matrix.tolist()]
        assert scores.tolist() == pytest.approx(expected)
        assert scores[2] == 0.0

    def test_dimension_mismatch_raises(self) -> None:
        with pytest.raises(ValueError):
            cosine_scores([1.0, 0.0, 0.0], np.array([[1.0, 0.0]]))


class TestRank:
    """Test top-K ranking."""

    def test_results_sorted_descending(self) -> None:
        """Should return chunks best first."""
        chunks = [
            _chunk("low", [0.0, 1.0]),
            _chunk("high", [1.0, 0.0]),
            _chunk("mid", [0.7, 0.7]),
        ]

        results = rank([1.0, 0.0], chunks, top_k=3)

        assert [result.chunk.doc_id for result in results] == ["high", "mid", "low"]
        scores = [result.score for result in results]
        assert scores == sorted(scores, reverse=True)

    def test_top_k_caps_results(self) -> None:
        """Should return at most top_k results."""
        chunks = [_chunk(f"d{i}", [1.0, float(i)]) for i in range(10)]

        assert len(rank([1.0, 0.0], chunks, top_k=3)) == 3

    def test_fewer_chunks_than_top_k(self) -> None:
        """Should return every chunk when the store is smaller than top_k."""
        chunks = [_chunk("a", [1.0, 0.0]), _chunk("b", [0.0, 1.0])]

        assert len(rank([1.0, 0.0], chunks, top_k=5)) == 2

    def test_ties_keep_insertion_order(self) -> None:
        """Should break equal scores by store order."""
        chunks = [
            _chunk("first", [1.0, 0.0]),
            _chunk("second", [2.0, 0.0]),
            _chunk("third", [3.0, 0.0]),
        ]

        results = rank([1.0, 0.0], chunks, top_k=3)

        assert [result.chunk.doc_id for result in results] == ["first", "second", "third"]

    def test_threshold_drops_low_scores(self) -> None:
        """Should omit chunks scoring below the threshold."""
        chunks = [_chunk("match", [1.0, 0.0]), _chunk("miss", [0.0, 1.0])]

        results = rank([1.0, 0.0], chunks, top_k=3, threshold=0.5)

        assert [result.chunk.doc_id for result in results] == ["match"]

    def test_empty_store(self) -> None:
        """Should return an empty list for an empty store."""
        assert rank([1.0, 0.0], VectorStore([], dimension=2), top_k=3) == []

    def test_accepts_vector_store(self) -> None:
        """Should rank a loaded VectorStore the same as a chunk list."""
        chunks = [_chunk("a", [0.0, 1.0]), _chunk("b", [1.0, 0.0])]
        store = VectorStore(chunks, dimension=2)

        from_store = rank([1.0, 0.1], store, top_k=2)
        from_list = rank([1.0, 0.1], chunks, top_k=2)

        assert [r.chunk.id for r in from_store] == [r.chunk.id for r in from_list]
        assert [r.score for r in from_store] == pytest.approx([r.score for r in from_list])

    def test_invalid_top_k(self) -> None:
        with pytest.raises(ValueError):
            rank([1.0, 0.0], [_chunk("a", [1.0, 0.0])], top_k=0)
