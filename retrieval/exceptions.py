"""
Custom Exceptions for ingestion and query orchestration.

Exception Hierarchy:
    RetrievalError (base)
    ├── EmbeddingError
    ├── SummarizationError
    └── IngestionCancelledError

Loader and store failures keep their own types (loaders.exceptions,
vector_store.exceptions) and propagate through the service unchanged.
"""

from __future__ import annotations

from typing import Optional


class RetrievalError(Exception):
    """
    Base exception for retrieval-service errors.

    Attributes:
        message: Human-readable error description
        details: Additional technical details (optional)
    """

    def __init__(
        self,
        message: str = "A retrieval error occurred",
        details: Optional[str] = None,
    ):
        self.message = message
        self.details = details

        full_message = message
        if details:
            full_message = f"{message} | Details: {details}"

        super().__init__(full_message)


class EmbeddingError(RetrievalError):
    """
    Raised when the embedding provider fails.

    Attributes:
        model: Embedding model that was called
        original_error: The underlying client error
    """

    def __init__(
        self,
        message: str = "Embedding generation failed",
        model: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.model = model
        self.original_error = original_error
        if model:
            message = f"{message} [model={model}]"
        details = str(original_error) if original_error else None
        super().__init__(message, details)


class SummarizationError(RetrievalError):
    """Raised when the summarization provider fails or returns nothing."""

    def __init__(
        self,
        message: str = "Summarization failed",
        original_error: Optional[Exception] = None,
    ):
        self.original_error = original_error
        details = str(original_error) if original_error else None
        super().__init__(message, details)


class IngestionCancelledError(RetrievalError):
    """
    Raised when an ingestion is cancelled between chunks.

    Nothing is written to the store when this is raised.

    Attributes:
        path: File being ingested
        processed: Chunks embedded before cancellation
        total: Chunks the file produced
    """

    def __init__(self, path: str, processed: int, total: int):
        self.path = path
        self.processed = processed
        self.total = total
        super().__init__(
            f"Ingestion of {path} cancelled after {processed}/{total} chunks"
        )
