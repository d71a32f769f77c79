"""
Document loading task.

Reads the JSON docs source and validates every record.

Dependencies: json, pydantic
System role: First stage of knowledge base ingestion
"""

import json
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from kb_assistant.core.exceptions import ClientInputError
from kb_assistant.models.document import Document

_DOCUMENTS = TypeAdapter(list[Document])


def _check_encodable(document: Document) -> None:
    """Reject text JSON can carry but UTF-8 cannot, such as lone surrogates."""
    for field in ("id", "title", "content"):
        try:
            getattr(document, field).encode("utf-8")
        except UnicodeEncodeError as e:
            raise ClientInputError(
                f"Document {document.id!r} has text that is not valid UTF-8: {e.reason}",
                field=field,
                details={"doc_id": document.id},
            ) from e


class DocumentLoadingTask:
    """Load source documents from a JSON array of {id, title, content}."""

    def load(self, docs_path: str | Path) -> list[Document]:
        """
        Load and validate documents.

        Args:
            docs_path: Path to the JSON docs file

        Returns:
            list[Document]: Documents in file order

        Raises:
            ClientInputError: When the file is missing, not JSON, fails
                validation, repeats a document ID, or holds text that
                is not valid UTF-8
        """
        path = Path(docs_path)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise ClientInputError(f"Documents file not found: {path}", field="docs_path") from e
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ClientInputError(f"Documents file is unreadable: {e}", field="docs_path") from e

        try:
            documents = _DOCUMENTS.validate_python(raw)
        except ValidationError as e:
            raise ClientInputError(f"Documents file failed validation: {e}", field="docs_path") from e

        seen: set[str] = set()
        for document in documents:
            if document.id in seen:
                raise ClientInputError(
                    f"Duplicate document id {document.id!r}",
                    field="id",
                    details={"doc_id": document.id},
                )
            seen.add(document.id)
            _check_encodable(document)

        return documents
