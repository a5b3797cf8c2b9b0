"""
Data Models for the Chunking Pipeline

Defines:
1. ChunkingConfig - Chunk size, overlap and the separator hierarchy
2. TextChunk - A bounded piece of a loaded Document, ready for embedding

Design Principles:
- Pydantic v2 for validation (consistent with loaders and vector_store)
- Sizes are measured in characters, not tokens
- Chunks carry their Document's metadata unchanged

Usage:
    config = ChunkingConfig(chunk_size=1000, chunk_overlap=200)
    chunks = RecursiveTextChunker(config).split_documents(documents)
"""

from typing import Any

from pydantic import BaseModel, Field

from loaders.models import DocumentMetadata

DEFAULT_SEPARATORS = ["\n\n", "\n", ". ", "! ", "? ", " ", ""]


class ChunkingConfig(BaseModel):
    """
    Configuration for the chunking pipeline.

    The separators are tried in order; the empty string splits between
    individual characters. Without it, an unsplittable piece longer than
    chunk_size is kept whole.
    """
    chunk_size: int = Field(
        1000,
        description="Target maximum characters per chunk",
        ge=1,
    )
    chunk_overlap: int = Field(
        200,
        description="Characters shared between consecutive chunks of one document",
        ge=0,
    )
    separators: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SEPARATORS),
        description="Split points in order of preference",
        min_length=1,
    )

    def model_post_init(self, __context: Any) -> None:
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be less than "
                f"chunk_size ({self.chunk_size})"
            )


class TextChunk(BaseModel):
    """A single chunk of document text with its source metadata."""
    text: str = Field(
        ...,
        description="The chunk text content",
        min_length=1,
    )
    metadata: DocumentMetadata = Field(
        ...,
        description="Metadata of the originating Document",
    )
