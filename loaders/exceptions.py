"""
Custom Exceptions for document loading.

Exception Hierarchy:
    LoaderError (base)
    ├── UnsupportedFormatError
    └── LoadError

Usage:
    from loaders.exceptions import LoadError, UnsupportedFormatError

    try:
        documents = loader.load("slides.pptx")
    except UnsupportedFormatError as e:
        print(f"Cannot index {e.extension} files")
    except LoadError as e:
        print(f"Could not read {e.path}: {e}")
"""

from __future__ import annotations

from typing import Optional


class LoaderError(Exception):
    """
    Base exception for all loading errors.

    Attributes:
        message: Human-readable error description
        path: File the error refers to (optional)
        details: Additional technical details (optional)
    """

    def __init__(
        self,
        message: str = "A loading error occurred",
        path: Optional[str] = None,
        details: Optional[str] = None,
    ):
        self.message = message
        self.path = path
        self.details = details

        full_message = message
        if details:
            full_message = f"{message} | Details: {details}"

        super().__init__(full_message)


class UnsupportedFormatError(LoaderError):
    """
    Raised when a file extension is neither PDF nor plain text.

    Attributes:
        extension: The rejected extension (lowercase, with dot)
    """

    def __init__(self, path: str, extension: str):
        self.extension = extension
        shown = extension or "<none>"
        super().__init__(
            message=f"Unsupported file format '{shown}': {path}",
            path=path,
        )


class LoadError(LoaderError):
    """
    Raised when a file cannot be read or decoded.

    Attributes:
        original_error: The underlying I/O or decoding error
    """

    def __init__(
        self,
        path: str,
        original_error: Optional[Exception] = None,
    ):
        self.original_error = original_error
        details = str(original_error) if original_error else None
        super().__init__(
            message=f"File could not be loaded: {path}",
            path=path,
            details=details,
        )
