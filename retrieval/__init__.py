"""
Retrieval component for course materials.

Orchestrates ingestion (load, chunk, summarize, embed, store) and
question answering context retrieval over per-course vector stores.
"""

__version__ = "1.0.0"

from .config import RetrievalConfig
from .embedder import Embedder, OllamaEmbedder
from .exceptions import (
    EmbeddingError,
    IngestionCancelledError,
    RetrievalError,
    SummarizationError,
)
from .models import (
    NO_MATERIALS_MESSAGE,
    IngestRequest,
    IngestStats,
    QueryRequest,
    QueryResult,
    RetrievalHit,
)
from .service import RetrievalService, build_context, collect_sources
from .summarizer import OllamaSummarizer, Summarizer, summarize_if_longer

__all__ = [
    "__version__",
    "RetrievalConfig",
    "RetrievalService",
    "Embedder",
    "OllamaEmbedder",
    "Summarizer",
    "OllamaSummarizer",
    "summarize_if_longer",
    "build_context",
    "collect_sources",
    "NO_MATERIALS_MESSAGE",
    "IngestRequest",
    "IngestStats",
    "QueryRequest",
    "QueryResult",
    "RetrievalHit",
    "RetrievalError",
    "EmbeddingError",
    "SummarizationError",
    "IngestionCancelledError",
]
