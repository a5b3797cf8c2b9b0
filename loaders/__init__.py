"""
Loaders Module - Turn uploaded course materials into text documents

Produces one Document per PDF page (via PyMuPDF) or one Document for a
whole plain-text file (e.g. a lecture transcription).

Quick Start:
    from loaders import DocumentLoader

    loader = DocumentLoader()
    documents = loader.load("uploads/lecture_01.pdf")
    for doc in documents:
        print(doc.metadata.page, len(doc.text))
"""

__version__ = "1.0.0"

from .document_loader import DocumentLoader, PDF_EXTENSIONS, TEXT_EXTENSIONS
from .exceptions import LoadError, LoaderError, UnsupportedFormatError
from .models import Document, DocumentMetadata
from .pdf_loader import load_pdf

__all__ = [
    "__version__",
    "DocumentLoader",
    "PDF_EXTENSIONS",
    "TEXT_EXTENSIONS",
    "Document",
    "DocumentMetadata",
    "LoaderError",
    "LoadError",
    "UnsupportedFormatError",
    "load_pdf",
]
