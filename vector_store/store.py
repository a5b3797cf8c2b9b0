"""
Vector Store - per-course, flat-file storage for embedded chunks

Each course owns one JSON file (``course_{course_id}.json``) holding an
array of DocumentChunk objects. The store is append-only:

- Append: read the whole file, number the new chunks after the existing
  ones, write the whole file back.
- Search: read the whole file and rank every chunk by cosine similarity
  (exact brute-force search, no approximate index).

Concurrency:
- Appends to the same file are serialized by a per-file lock, so two
  ingestions for one course never lose each other's chunks. The lock is
  per process; several processes writing one course are not supported.
- Writes go to a temporary file that atomically replaces the store, so
  readers (which take no lock) see either the old or the new collection.

Usage:
    from vector_store import VectorStore

    store = VectorStore.for_course(42, "uploads/indexes")
    store.append(chunks)
    hits = store.search(query_embedding, top_k=5)
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from collections import defaultdict
from pathlib import Path
from typing import Optional, Sequence

import numpy as np
from pydantic import ValidationError

from .exceptions import DimensionMismatchError, StoreIOError
from .models import DocumentChunk, RankedChunk, SourceSummary, StoreStats
from .similarity import cosine_similarities

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 5

_registry_lock = threading.Lock()
_file_locks: dict[str, threading.Lock] = {}


def store_path(indexes_dir: str | Path, course_id: int) -> Path:
    """Return the store file for a course: ``<indexes_dir>/course_{id}.json``."""
    return Path(indexes_dir) / f"course_{course_id}.json"


def _lock_for(path: Path) -> threading.Lock:
    key = os.path.abspath(path)
    with _registry_lock:
        lock = _file_locks.get(key)
        if lock is None:
            lock = threading.Lock()
            _file_locks[key] = lock
        return lock


class VectorStore:
    """
    Append-only collection of DocumentChunks for one course.

    The file is re-read on every operation; nothing is cached between
    calls, so several VectorStore objects for the same path stay consistent.
    """

    def __init__(self, path: str | Path, course_id: Optional[int] = None):
        """
        Initialize the store.

        Args:
            path: JSON file holding the collection. Created on first append.
            course_id: Owning course, used for logging and stats.
        """
        self.path = Path(path)
        self.course_id = course_id
        self._lock = _lock_for(self.path)

    @classmethod
    def for_course(cls, course_id: int, indexes_dir: str | Path) -> "VectorStore":
        return cls(store_path(indexes_dir, course_id), course_id=course_id)

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> list[DocumentChunk]:
        """
        Load the full collection.

        Returns:
            All stored chunks in id order; empty if the file does not exist.

        Raises:
            StoreIOError: If the file exists but cannot be read or parsed, or
                its embeddings do not all have the same length.
        """
        if not self.path.exists():
            return []

        try:
            raw = self.path.read_text(encoding="utf-8")
            data = json.loads(raw) if raw.strip() else []
            if not isinstance(data, list):
                raise ValueError("store file must contain a JSON array")
            chunks = [DocumentChunk.model_validate(item) for item in data]
            if chunks:
                expected = len(chunks[0].embedding)
                for chunk in chunks:
                    if len(chunk.embedding) != expected:
                        raise ValueError(
                            f"chunk {chunk.id} has {len(chunk.embedding)} dimensions, "
                            f"expected {expected}"
                        )
        except (OSError, ValueError, ValidationError) as exc:
            raise StoreIOError(str(self.path), "read", exc) from exc

        logger.debug("Loaded %d chunks from %s", len(chunks), self.path)
        return chunks

    def count(self) -> int:
        return len(self.load())

    def dimensions(self) -> Optional[int]:
        """Embedding length of the stored chunks, None for an empty store."""
        chunks = self.load()
        return len(chunks[0].embedding) if chunks else None

    def append(self, new_chunks: Sequence[DocumentChunk]) -> list[DocumentChunk]:
        """
        Add chunks to the collection and persist it.

        New chunks are numbered ``existing_count + i``; the ids they arrive
        with are ignored. The read-modify-write runs under the store lock.

        Args:
            new_chunks: Fully embedded chunks from one ingestion.

        Returns:
            The appended chunks with their assigned ids.

        Raises:
            DimensionMismatchError: If embedding lengths disagree within the
                batch or with the stored chunks.
            StoreIOError: If the existing file cannot be read or the new
                one cannot be written. Nothing is written in either case.
        """
        if not new_chunks:
            return []

        expected = len(new_chunks[0].embedding)
        for chunk in new_chunks:
            if len(chunk.embedding) != expected:
                raise DimensionMismatchError(
                    expected, len(chunk.embedding), context="new chunk"
                )

        with self._lock:
            existing = self.load()
            if existing and len(existing[0].embedding) != expected:
                raise DimensionMismatchError(
                    len(existing[0].embedding), expected, context="new chunks"
                )

            offset = len(existing)
            numbered = [
                chunk.model_copy(update={"id": offset + i}, deep=True)
                for i, chunk in enumerate(new_chunks)
            ]
            self._write(existing + numbered)

        logger.debug(
            "Appended %d chunks to %s (total %d)",
            len(numbered), self.path, offset + len(numbered),
        )
        return numbered

    def search(
        self,
        query_vector: Sequence[float],
        top_k: int = DEFAULT_TOP_K,
    ) -> list[RankedChunk]:
        """
        Rank every stored chunk against a query vector.

        Results are sorted by descending cosine similarity. Ties keep store
        order, but callers should treat order among equal scores as undefined.

        Args:
            query_vector: Embedding of the question.
            top_k: Maximum number of results.

        Returns:
            Up to top_k ranked chunks; empty if the store is empty or missing.

        Raises:
            DimensionMismatchError: If the query length differs from the
                stored embeddings.
            StoreIOError: If the store file cannot be read.
        """
        if top_k < 1:
            raise ValueError(f"top_k must be at least 1, got {top_k}")

        chunks = self.load()
        if not chunks:
            return []

        scores = cosine_similarities([c.embedding for c in chunks], query_vector)
        order = np.argsort(-scores, kind="stable")[:top_k]
        return [
            RankedChunk(chunk=chunks[i], score=float(scores[i]))
            for i in order
        ]

    def list_sources(self) -> list[SourceSummary]:
        """Summarize the stored chunks per source file."""
        return _summarize_sources(self.load())

    def stats(self) -> StoreStats:
        chunks = self.load()
        return StoreStats(
            course_id=self.course_id,
            chunk_count=len(chunks),
            dimensions=len(chunks[0].embedding) if chunks else None,
            sources=_summarize_sources(chunks),
        )

    # -------------------------------------------------------------------------
    # Internal methods
    # -------------------------------------------------------------------------

    def _write(self, chunks: list[DocumentChunk]) -> None:
        """Write the collection to a temp file and atomically replace the store."""
        payload = json.dumps(
            [chunk.model_dump(mode="json") for chunk in chunks],
            ensure_ascii=False,
            indent=2,
        )

        tmp_name: Optional[str] = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StoreIOError(str(self.path), "write", exc) from exc


def _summarize_sources(chunks: list[DocumentChunk]) -> list[SourceSummary]:
    counts: dict[str, int] = defaultdict(int)
    pages: dict[str, set[int]] = defaultdict(set)
    for chunk in chunks:
        source = chunk.metadata.source
        counts[source] += 1
        if chunk.metadata.page is not None:
            pages[source].add(chunk.metadata.page)
    return [
        SourceSummary(
            source=source,
            chunk_count=count,
            pages=sorted(pages[source]),
        )
        for source, count in sorted(counts.items())
    ]
