"""
Data Models for document loading

Defines:
1. DocumentMetadata - Where a piece of text came from (file and page)
2. Document - A loaded text record, the input of the chunker
"""

from typing import Optional

from pydantic import BaseModel, Field


class DocumentMetadata(BaseModel):
    """Origin of a loaded text record."""
    source: str = Field(
        ...,
        description="Path of the originating file",
    )
    page: Optional[int] = Field(
        None,
        description="1-based page number for paged sources (PDF), None for plain text",
        ge=1,
    )


class Document(BaseModel):
    """A single loaded text record (one PDF page or one whole text file)."""
    text: str = Field(
        "",
        description="Raw text content",
    )
    metadata: DocumentMetadata = Field(
        ...,
        description="Source file and page",
    )
