"""
Boundary layer for external system integrations.

Handles all interactions with external capabilities (embedding model,
generation provider, persisted vector store).
"""
