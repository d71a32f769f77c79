"""
Core business logic module.

Contains the retrieval pipeline, its algorithmic components, ingestion
orchestration and the exception hierarchy.
"""
