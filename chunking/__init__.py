"""
Chunking Module - Recursive character chunking for course materials

Splits loaded documents into overlapping, size-bounded chunks that are
embedded and stored per course.

Quick Start:
    from loaders import DocumentLoader
    from chunking import RecursiveTextChunker, ChunkingConfig

    documents = DocumentLoader().load("lecture_01.pdf")
    chunker = RecursiveTextChunker(ChunkingConfig(chunk_size=1000, chunk_overlap=200))
    chunks = chunker.split_documents(documents)
"""

__version__ = "1.0.0"

from .chunker import RecursiveTextChunker
from .models import DEFAULT_SEPARATORS, ChunkingConfig, TextChunk

__all__ = [
    "__version__",
    "RecursiveTextChunker",
    "ChunkingConfig",
    "TextChunk",
    "DEFAULT_SEPARATORS",
]
