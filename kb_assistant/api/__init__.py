"""HTTP API for the knowledge base assistant."""
