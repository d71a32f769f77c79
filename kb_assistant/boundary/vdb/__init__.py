"""
Vector store boundary layer.

Provides the JSON-file vector store used by ingestion and serving.

Dependencies: numpy, pydantic
System role: Vector store adapter for RAG retrieval
"""

from kb_assistant.boundary.vdb.json_vector_store import (
    VectorStore,
    load_vector_store,
    save_vector_store,
)
from kb_assistant.boundary.vdb.vector_schemas import VectorStoreFile

__all__ = [
    "VectorStore",
    "VectorStoreFile",
    "load_vector_store",
    "save_vector_store",
]
