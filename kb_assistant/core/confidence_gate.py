"""
Confidence gate for retrieval results.

Decides from the top similarity score whether the knowledge base holds
enough relevant context to answer at all.

Dependencies: None
System role: Accept/reject step between ranking and prompt building
"""

INSUFFICIENT_INFORMATION_REPLY = (
    "I do not have sufficient information in the knowledge base to answer that."
)


def passes_confidence_gate(top_score: float, threshold: float) -> bool:
    """
    Accept retrieval iff the best score reaches the threshold.

    Args:
        top_score: Highest similarity score (0.0 when nothing was ranked)
        threshold: Configured accept threshold

    Returns:
        bool: True to continue to generation, False to short-circuit
    """
    return top_score >= threshold
