"""
Knowledge base assistant.

Grounded question answering over a fixed document set: offline ingestion
into a persisted vector store, online retrieval, confidence gating and
grounded generation.
"""

__version__ = "0.1.0"
