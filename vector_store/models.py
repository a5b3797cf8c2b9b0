"""
Data Models for the Vector Store

Defines:
1. ChunkMetadata - Source file and page of a stored chunk
2. DocumentChunk - The atomic indexed unit (text + embedding + metadata)
3. RankedChunk - A search hit with its cosine similarity
4. SourceSummary / StoreStats - Inspection results for a course store

Design Principles:
- Pydantic v2 for validation and JSON (de)serialization
- The stored text is always the literal source text, never a summary
- A store file is a plain JSON array of DocumentChunk objects
"""

from typing import Optional

from pydantic import BaseModel, Field


class ChunkMetadata(BaseModel):
    """Where a stored chunk came from."""
    source: str = Field(
        ...,
        description="Path or filename of the originating file",
    )
    page: Optional[int] = Field(
        None,
        description="1-based page number for PDFs, None for plain text",
    )


class DocumentChunk(BaseModel):
    """A chunk of course material with its embedding."""
    id: int = Field(
        0,
        description="Store-local id, assigned at append time",
        ge=0,
    )
    text: str = Field(
        ...,
        description="Raw chunk text as it appears in the source",
    )
    embedding: list[float] = Field(
        ...,
        description="Embedding vector (possibly computed from a summary of the text)",
    )
    metadata: ChunkMetadata = Field(
        ...,
        description="Source file and page",
    )


class RankedChunk(BaseModel):
    """A single search result."""
    chunk: DocumentChunk
    score: float = Field(
        ...,
        description="Cosine similarity to the query vector (1 = same direction)",
    )


class SourceSummary(BaseModel):
    source: str
    chunk_count: int
    pages: list[int] = Field(default_factory=list)


class StoreStats(BaseModel):
    course_id: Optional[int] = None
    chunk_count: int = 0
    dimensions: Optional[int] = None
    sources: list[SourceSummary] = Field(default_factory=list)
