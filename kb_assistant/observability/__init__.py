"""
Observability module.

Provides logging configuration and structured logging helpers.
"""

from kb_assistant.observability.logger import configure_logging

__all__ = ["configure_logging"]
