"""
Vector Store Module - per-course flat-file embedding storage

Stores embedded chunks of course materials in one JSON file per course
and answers exact cosine-similarity searches over them.

Quick Start:
    from vector_store import VectorStore, DocumentChunk, ChunkMetadata

    store = VectorStore.for_course(7, "uploads/indexes")
    store.append([
        DocumentChunk(
            text="Entropy measures disorder.",
            embedding=[0.1, 0.3, 0.2],
            metadata=ChunkMetadata(source="uploads/thermo.pdf", page=3),
        )
    ])
    for hit in store.search([0.1, 0.3, 0.2], top_k=5):
        print(hit.score, hit.chunk.text)
"""

__version__ = "1.0.0"

from .exceptions import DimensionMismatchError, StoreIOError, VectorStoreError
from .models import (
    ChunkMetadata,
    DocumentChunk,
    RankedChunk,
    SourceSummary,
    StoreStats,
)
from .similarity import cosine_similarities, cosine_similarity
from .store import DEFAULT_TOP_K, VectorStore, store_path

__all__ = [
    "__version__",
    "VectorStore",
    "store_path",
    "DEFAULT_TOP_K",
    "ChunkMetadata",
    "DocumentChunk",
    "RankedChunk",
    "SourceSummary",
    "StoreStats",
    "cosine_similarity",
    "cosine_similarities",
    "VectorStoreError",
    "StoreIOError",
    "DimensionMismatchError",
]
