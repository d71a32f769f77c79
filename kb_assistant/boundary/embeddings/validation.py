"""
Embedding vector validation.

Every vector crossing the embedding boundary is checked against the
configured dimension before it reaches the store or the ranker.

Dependencies: math (stdlib)
System role: Fixed-length vector contract
"""

import math
from collections.abc import Sequence

from kb_assistant.core.exceptions import EmbeddingError

Vector = list[float]


def validate_vector(vector: Sequence[float], dimension: int) -> Vector:
    """
    Check and normalize an embedding vector.

    Args:
        vector: Raw embedding output
        dimension: Required length

    Returns:
        Vector: Plain list of floats

    Raises:
        EmbeddingError: When the length is wrong or a value is not finite
    """
    try:
        values = [float(value) for value in vector]
    except (TypeError, ValueError) as e:
        raise EmbeddingError(f"Embedding is not a numeric vector: {e}") from e
    if len(values) != dimension:
        raise EmbeddingError(
            f"Embedding has dimension {len(values)}, expected {dimension}",
            details={"expected": dimension, "actual": len(values)},
        )
    if not all(math.isfinite(value) for value in values):
        raise EmbeddingError("Embedding contains non-finite values")
    return values
