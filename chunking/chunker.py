"""
Recursive Text Chunker - Core chunking logic for course materials

Splits loaded Documents into overlapping chunks of bounded character size.

Algorithm:
1. Pick the first separator (paragraph, line, sentence end, space, character)
   that occurs in the text and split on it, keeping the separator attached
   to the end of the preceding piece.
2. Pieces that fit within chunk_size are merged greedily into chunks. When a
   chunk is full, pieces are dropped from its front until at most
   chunk_overlap characters remain; those carry over into the next chunk.
3. Pieces that are still too large are split again with the remaining
   separators. A piece that no separator can break is kept whole.

Usage:
    from chunking import RecursiveTextChunker, ChunkingConfig

    chunker = RecursiveTextChunker(ChunkingConfig(chunk_size=1000, chunk_overlap=200))
    chunks = chunker.split_documents(documents)
"""

from typing import Iterable, Optional

from loaders.models import Document

from .models import ChunkingConfig, TextChunk


class RecursiveTextChunker:
    """
    Splits text on a hierarchy of separators into overlapping chunks.

    Chunking is pure and deterministic: empty text yields no chunks and
    text shorter than chunk_size yields exactly one.
    """

    def __init__(self, config: Optional[ChunkingConfig] = None):
        self.config = config or ChunkingConfig()

    def split_documents(self, documents: Iterable[Document]) -> list[TextChunk]:
        """
        Chunk every Document, preserving document order.

        Args:
            documents: Loaded records, e.g. one per PDF page.

        Returns:
            Chunks carrying their Document's metadata unchanged.
        """
        chunks: list[TextChunk] = []
        for document in documents:
            for text in self.split_text(document.text):
                chunks.append(
                    TextChunk(text=text, metadata=document.metadata.model_copy())
                )
        return chunks

    def split_text(self, text: str) -> list[str]:
        """Split a single string into chunk texts."""
        if not text or not text.strip():
            return []
        return self._split(text, self.config.separators)

    # -------------------------------------------------------------------------
    # Internal methods
    # -------------------------------------------------------------------------

    def _split(self, text: str, separators: list[str]) -> list[str]:
        separator = separators[-1]
        remaining: list[str] = []
        for i, candidate in enumerate(separators):
            if candidate == "" or candidate in text:
                separator = candidate
                remaining = separators[i + 1:]
                break

        pieces = _split_keeping_separator(text, separator)

        final_chunks: list[str] = []
        fitting: list[str] = []
        for piece in pieces:
            if len(piece) <= self.config.chunk_size:
                fitting.append(piece)
                continue

            if fitting:
                final_chunks.extend(self._merge(fitting))
                fitting = []

            if remaining:
                final_chunks.extend(self._split(piece, remaining))
            else:
                # Indivisible unit: larger than chunk_size, kept whole.
                stripped = piece.strip()
                if stripped:
                    final_chunks.append(stripped)

        if fitting:
            final_chunks.extend(self._merge(fitting))

        return final_chunks

    def _merge(self, pieces: list[str]) -> list[str]:
        """Greedily join pieces into chunks with a sliding overlap."""
        chunk_size = self.config.chunk_size
        chunk_overlap = self.config.chunk_overlap

        chunks: list[str] = []
        window: list[str] = []
        total = 0

        for piece in pieces:
            length = len(piece)
            if window and total + length > chunk_size:
                _append_stripped(chunks, "".join(window))
                # Shrink the window to the overlap, and further if the
                # incoming piece would not fit next to it.
                while window and (
                    total > chunk_overlap or total + length > chunk_size
                ):
                    total -= len(window.pop(0))
            window.append(piece)
            total += length

        if window:
            _append_stripped(chunks, "".join(window))

        return chunks


def _split_keeping_separator(text: str, separator: str) -> list[str]:
    """Split text, leaving each separator at the end of its piece."""
    if separator == "":
        return list(text)
    parts = text.split(separator)
    pieces = [part + separator for part in parts[:-1]]
    pieces.append(parts[-1])
    return [piece for piece in pieces if piece]


def _append_stripped(chunks: list[str], text: str) -> None:
    stripped = text.strip()
    if stripped:
        chunks.append(stripped)
