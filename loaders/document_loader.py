"""
Document Loader - dispatch an uploaded file to the right reader

PDF files are delegated to PyMuPDF (one Document per page); plain-text
files, such as audio transcriptions, are read whole as UTF-8 with
``page=None``. Anything else is rejected before any reading happens.

Usage:
    from loaders import DocumentLoader

    documents = DocumentLoader().load("uploads/week3_transcript.txt")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from .exceptions import LoadError, UnsupportedFormatError
from .models import Document, DocumentMetadata
from .pdf_loader import load_pdf

logger = logging.getLogger(__name__)

PDF_EXTENSIONS = frozenset({".pdf"})
TEXT_EXTENSIONS = frozenset({".txt", ".text", ".md"})


class DocumentLoader:
    """Loads PDF and plain-text files into Documents."""

    def __init__(
        self,
        pdf_reader: Optional[Callable[[str], list[Document]]] = None,
        encoding: str = "utf-8",
    ):
        """
        Initialize the loader.

        Args:
            pdf_reader: Callable turning a PDF path into page Documents.
                        Defaults to the PyMuPDF based load_pdf.
            encoding: Encoding used for plain-text files.
        """
        self.pdf_reader = pdf_reader or load_pdf
        self.encoding = encoding

    def load(self, file_path: str | Path) -> list[Document]:
        """
        Load a file into Documents.

        Raises:
            UnsupportedFormatError: If the extension is not PDF or plain text.
            LoadError: If the file cannot be read or decoded.
        """
        source = str(file_path)
        extension = Path(source).suffix.lower()

        if extension in PDF_EXTENSIONS:
            documents = self.pdf_reader(source)
        elif extension in TEXT_EXTENSIONS:
            documents = self._load_text(source)
        else:
            raise UnsupportedFormatError(source, extension)

        logger.info("Loaded %d document(s) from %s", len(documents), source)
        return documents

    def _load_text(self, source: str) -> list[Document]:
        try:
            text = Path(source).read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise LoadError(source, exc) from exc

        return [
            Document(
                text=text,
                metadata=DocumentMetadata(source=source, page=None),
            )
        ]
