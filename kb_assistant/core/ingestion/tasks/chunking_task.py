"""
Text chunking task using the word-window chunker.

Splits documents into retrievable chunks and tags each with its parent
document and position.

Dependencies: langchain_core, kb_assistant.core.chunker
System role: Second stage of knowledge base ingestion
"""

import logging

from langchain_core.documents import Document as LCDocument

from kb_assistant.core.chunker import Chunker
from kb_assistant.models.document import Document

logger = logging.getLogger(__name__)


class ChunkingTask:
    """Split documents into overlapping word windows."""

    def __init__(self, chunk_size: int = 400, chunk_overlap: int = 50) -> None:
        """
        Initialize chunking task with window configuration.

        Args:
            chunk_size: Words per chunk
            chunk_overlap: Words shared by consecutive chunks

        Raises:
            ConfigurationError: When chunk_overlap >= chunk_size
        """
        self._chunker = Chunker(chunk_size=chunk_size, overlap=chunk_overlap)

    def chunk(self, documents: list[Document]) -> list[LCDocument]:
        """
        Split documents into chunks.

        Args:
            documents: Source documents

        Returns:
            list[LCDocument]: Chunk texts with doc_id, title and
                chunk_index metadata, in document then position order
        """
        chunked: list[LCDocument] = []
        for document in documents:
            texts = self._chunker.chunk_document(document)
            logger.info(
                f"{__name__}:chunk - Chunked document {document.title!r} into {len(texts)} chunk(s)"
            )
            for index, text in enumerate(texts):
                chunked.append(
                    LCDocument(
                        page_content=text,
                        metadata={
                            "doc_id": document.id,
                            "title": document.title,
                            "chunk_index": index,
                        },
                    )
                )
        return chunked
