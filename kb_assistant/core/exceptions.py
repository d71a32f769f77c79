"""
Exception hierarchy for the knowledge base assistant.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across ingestion and retrieval
"""

from typing import Any


class KnowledgeBaseError(Exception):
    """Base exception for all knowledge base assistant errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ClientInputError(KnowledgeBaseError):
    """Raised when a question or ingestion input is missing or malformed."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize client input error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ConfigurationError(KnowledgeBaseError):
    """Raised when settings are inconsistent. Fatal at startup."""

    def __init__(
        self,
        message: str,
        setting: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if setting:
            details["setting"] = setting
        super().__init__(message, details)


class VectorStoreError(KnowledgeBaseError):
    """Base exception for persisted vector store failures."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            path: Store file involved in the failed operation
            details: Additional context
        """
        details = details or {}
        if path:
            details["path"] = path
        super().__init__(message, details)


class StoreLoadError(VectorStoreError):
    """Raised when the store is missing, unreadable, or mismatched. Fatal at startup."""

    pass


class StoreWriteError(VectorStoreError):
    """Raised when the store cannot be written. The previous store stays intact."""

    pass


class EmbeddingError(KnowledgeBaseError):
    """Raised when embedding generation fails or returns a malformed vector."""

    pass


class GenerationError(KnowledgeBaseError):
    """Base exception for text generation failures."""

    def __init__(
        self,
        message: str,
        model: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if model:
            details["model"] = model
        super().__init__(message, details)


class GenerationTransportError(GenerationError):
    """Raised when the generation provider cannot be reached."""

    pass


class GenerationProviderError(GenerationError):
    """Raised when the generation provider returns an explicit error payload."""

    pass


class GenerationResponseError(GenerationError):
    """Raised when the provider response envelope carries no usable text."""

    pass


class GenerationTimeoutError(GenerationError):
    """Raised when the generation call exceeds its time budget."""

    pass
