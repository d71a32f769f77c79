"""
Embedding boundary layer.

Dependencies: sentence_transformers, langchain_core
System role: Text-to-vector adapter shared by ingestion and queries
"""

from kb_assistant.boundary.embeddings.validation import Vector, validate_vector

__all__ = ["Vector", "validate_vector"]
