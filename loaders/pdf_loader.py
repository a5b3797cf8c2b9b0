"""
PDF text extraction via PyMuPDF.

Each page becomes one Document with its 1-based page number. Only the
selectable text layer is read; scanned pages simply yield empty text.
"""

from __future__ import annotations

import logging
from pathlib import Path

import fitz  # PyMuPDF

from .exceptions import LoadError
from .models import Document, DocumentMetadata

logger = logging.getLogger(__name__)


def load_pdf(pdf_path: str | Path) -> list[Document]:
    """
    Extract the text of every page of a PDF.

    Args:
        pdf_path: Path to the PDF file.

    Returns:
        One Document per page, in page order.

    Raises:
        LoadError: If the file is missing, unreadable or not a valid PDF.
    """
    source = str(pdf_path)
    if not Path(pdf_path).is_file():
        raise LoadError(source, FileNotFoundError(f"No such file: {source}"))

    try:
        with fitz.open(pdf_path) as doc:
            documents = [
                Document(
                    text=page.get_text("text"),
                    metadata=DocumentMetadata(source=source, page=index),
                )
                for index, page in enumerate(doc, start=1)
            ]
    except Exception as exc:
        raise LoadError(source, exc) from exc

    logger.debug("Extracted %d pages from %s", len(documents), source)
    return documents
