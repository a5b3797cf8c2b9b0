"""
Custom Exceptions for the per-course vector store.

Exception Hierarchy:
    VectorStoreError (base)
    ├── StoreIOError
    └── DimensionMismatchError
"""

from __future__ import annotations

from typing import Optional


class VectorStoreError(Exception):
    """
    Base exception for all vector store errors.

    Attributes:
        message: Human-readable error description
        details: Additional technical details (optional)
    """

    def __init__(
        self,
        message: str = "A vector store error occurred",
        details: Optional[str] = None,
    ):
        self.message = message
        self.details = details

        full_message = message
        if details:
            full_message = f"{message} | Details: {details}"

        super().__init__(full_message)


class StoreIOError(VectorStoreError):
    """
    Raised when a store file exists but cannot be read, parsed or written.

    A store file that does not exist yet is not an error; it is an empty store.

    Attributes:
        path: Path of the store file
        original_error: The underlying I/O or parsing error
    """

    def __init__(
        self,
        path: str,
        operation: str = "access",
        original_error: Optional[Exception] = None,
    ):
        self.path = path
        self.operation = operation
        self.original_error = original_error
        details = str(original_error) if original_error else None
        super().__init__(
            message=f"Failed to {operation} vector store [{path}]",
            details=details,
        )


class DimensionMismatchError(VectorStoreError):
    """
    Raised when vectors of different lengths meet in one store.

    This means the embedding model changed between ingestions or between
    ingestion and query; it is a configuration fault and is not retried.
    """

    def __init__(self, expected: int, actual: int, context: str = "vector"):
        self.expected = expected
        self.actual = actual
        super().__init__(
            message=(
                f"Embedding dimension mismatch for {context}: "
                f"expected {expected}, got {actual}"
            ),
        )
