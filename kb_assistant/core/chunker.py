"""
Word-window text chunker.

Splits document text into overlapping fixed-size word windows.

Dependencies: kb_assistant.core.exceptions, kb_assistant.models
System role: First stage of document ingestion
"""

import logging

from kb_assistant.core.exceptions import ConfigurationError
from kb_assistant.models.document import Document
from kb_assistant.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)


def validate_window(chunk_size: int, overlap: int) -> None:
    """
    Check a chunk window configuration.

    Raises:
        ConfigurationError: When the window could not advance
    """
    if chunk_size < 1:
        raise ConfigurationError("chunk_size must be at least 1", setting="chunk_size")
    if overlap < 0:
        raise ConfigurationError("overlap must not be negative", setting="chunk_overlap")
    if overlap >= chunk_size:
        raise ConfigurationError(
            f"overlap ({overlap}) must be smaller than chunk_size ({chunk_size})",
            setting="chunk_overlap",
            details={"chunk_size": chunk_size, "overlap": overlap},
        )


def chunk_text(text: str, chunk_size: int = 400, overlap: int = 50) -> list[str]:
    """
    Split text into overlapping windows of words.

    Windows start every ``chunk_size - overlap`` words. The last window
    runs to the end of the text and may be shorter than ``chunk_size``.

    Args:
        text: Text to split on whitespace
        chunk_size: Words per window
        overlap: Words shared by consecutive windows

    Returns:
        list[str]: Window texts joined with single spaces, in order

    Raises:
        ConfigurationError: When overlap >= chunk_size or sizes are negative
    """
    validate_window(chunk_size, overlap)

    words = text.split()
    step = chunk_size - overlap
    chunks: list[str] = []

    start = 0
    while start < len(words):
        end = min(start + chunk_size, len(words))
        chunks.append(" ".join(words[start:end]))
        if end == len(words):
            break
        start += step

    return chunks


class Chunker:
    """Chunker bound to one validated window configuration."""

    def __init__(self, chunk_size: int = 400, overlap: int = 50) -> None:
        """
        Initialize chunker.

        Args:
            chunk_size: Words per window
            overlap: Words shared by consecutive windows

        Raises:
            ConfigurationError: When the configuration is invalid
        """
        validate_window(chunk_size, overlap)
        self.chunk_size = chunk_size
        self.overlap = overlap

    def chunk(self, text: str) -> list[str]:
        """Split text using the bound window configuration."""
        return chunk_text(text, self.chunk_size, self.overlap)

    def chunk_document(self, document: Document) -> list[str]:
        """
        Split a document's content.

        Args:
            document: Source document

        Returns:
            list[str]: Chunk texts in document order (empty for blank content)
        """
        chunks = self.chunk(document.content)
        if not chunks:
            log_with_context(
                logger,
                logging.WARNING,
                "Document has no text to chunk",
                doc_id=document.id,
                title=document.title,
            )
        return chunks
