"""
Retrieval Service - ingestion and query orchestration per course

Ingestion: load file -> chunk -> (summarize) -> embed -> append to the
course's VectorStore. All-or-nothing per file: any failure before the
append leaves the store untouched.

Query: embed question -> search the course's VectorStore -> join the
retrieved chunk texts into a context string and collect source filenames.
"""

import logging
import threading
import time
from pathlib import Path
from typing import Callable, Optional

from chunking import ChunkingConfig, RecursiveTextChunker
from loaders import DocumentLoader
from vector_store import ChunkMetadata, DocumentChunk, RankedChunk, SourceSummary, VectorStore

from .config import RetrievalConfig
from .embedder import Embedder, OllamaEmbedder
from .exceptions import IngestionCancelledError
from .models import NO_MATERIALS_MESSAGE, IngestStats, QueryResult, RetrievalHit
from .summarizer import OllamaSummarizer, Summarizer, summarize_if_longer

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]


class RetrievalService:
    def __init__(
        self,
        config: Optional[RetrievalConfig] = None,
        embedder: Optional[Embedder] = None,
        summarizer: Optional[Summarizer] = None,
        loader: Optional[DocumentLoader] = None,
        chunker: Optional[RecursiveTextChunker] = None,
    ):
        self.config = config or RetrievalConfig()
        self.embedder = embedder or OllamaEmbedder(
            model=self.config.embedding_model,
            base_url=self.config.ollama_base_url,
        )
        if summarizer is None and self.config.summarize:
            summarizer = OllamaSummarizer(
                model=self.config.summary_model,
                base_url=self.config.ollama_base_url,
            )
        self.summarizer = summarizer
        self.loader = loader or DocumentLoader()
        self.chunker = chunker or RecursiveTextChunker(
            ChunkingConfig(
                chunk_size=self.config.chunk_size,
                chunk_overlap=self.config.chunk_overlap,
            )
        )

    def store_for(self, course_id: int) -> VectorStore:
        return VectorStore.for_course(course_id, self.config.indexes_dir)

    def ingest(
        self,
        file_path: str,
        course_id: int,
        progress_callback: Optional[ProgressCallback] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> IngestStats:
        """
        Index one uploaded file into the course's store.

        Args:
            file_path: Path of the uploaded PDF or text file.
            course_id: Course whose store receives the chunks.
            progress_callback: Optional callback(current, total, status).
            cancel_event: Checked before each chunk is embedded; when set,
                          ingestion stops with IngestionCancelledError.

        Raises:
            UnsupportedFormatError, LoadError: The file cannot be loaded.
            EmbeddingError: Embedding failed for any chunk.
            IngestionCancelledError: cancel_event was set.
            StoreIOError, DimensionMismatchError: The append failed.
        """
        total_start = time.time()
        source = str(file_path)

        try:
            documents = self.loader.load(source)
            text_chunks = self.chunker.split_documents(documents)
            total = len(text_chunks)

            embedded: list[DocumentChunk] = []
            summarized = 0
            embed_time = 0.0
            for i, text_chunk in enumerate(text_chunks):
                if cancel_event is not None and cancel_event.is_set():
                    raise IngestionCancelledError(source, processed=i, total=total)
                if progress_callback:
                    progress_callback(i, total, "Embedding chunks...")

                embed_input, was_summarized = summarize_if_longer(
                    text_chunk.text,
                    self.summarizer,
                    threshold_chars=self.config.summarize_threshold_chars,
                    input_chars=self.config.summary_input_chars,
                    fallback_chars=self.config.summary_fallback_chars,
                )
                summarized += int(was_summarized)

                embed_start = time.time()
                embedding = self.embedder.embed(embed_input)
                embed_time += time.time() - embed_start

                embedded.append(
                    DocumentChunk(
                        id=i,
                        text=text_chunk.text,
                        embedding=embedding,
                        metadata=ChunkMetadata(
                            source=text_chunk.metadata.source or source,
                            page=text_chunk.metadata.page,
                        ),
                    )
                )

            if progress_callback:
                progress_callback(total, total, "Storing...")
            stored = self.store_for(course_id).append(embedded)
        except IngestionCancelledError as exc:
            logger.info("%s", exc)
            raise
        except Exception:
            logger.exception("Failed to ingest %s for course %s", source, course_id)
            raise

        if progress_callback:
            progress_callback(total, total, "Done")

        stats = IngestStats(
            course_id=course_id,
            source=source,
            documents_loaded=len(documents),
            chunks_stored=len(stored),
            chunks_summarized=summarized,
            embedding_time_seconds=round(embed_time, 2),
            total_time_seconds=round(time.time() - total_start, 2),
        )
        logger.info(
            "Ingested %s into course %s: %d chunks in %.2fs",
            source, course_id, stats.chunks_stored, stats.total_time_seconds,
        )
        return stats

    def query(
        self,
        question: str,
        course_id: int,
        top_k: Optional[int] = None,
    ) -> QueryResult:
        """
        Retrieve the most relevant passages of a course for a question.

        Returns the sentinel "no materials" result for a course without
        indexed chunks. Embedding and store failures are raised, never
        turned into that sentinel.
        """
        query_vector = self.embedder.embed(question)
        hits = self.store_for(course_id).search(
            query_vector, top_k=top_k if top_k is not None else self.config.top_k
        )

        if not hits:
            return QueryResult(question=question, content=NO_MATERIALS_MESSAGE)

        return QueryResult(
            question=question,
            content=build_context(hits),
            sources=collect_sources(hits),
            results=[
                RetrievalHit(
                    chunk_id=hit.chunk.id,
                    score=hit.score,
                    text=hit.chunk.text,
                    source=hit.chunk.metadata.source,
                    page=hit.chunk.metadata.page,
                )
                for hit in hits
            ],
        )

    def list_sources(self, course_id: int) -> list[SourceSummary]:
        return self.store_for(course_id).list_sources()


def build_context(hits: list[RankedChunk]) -> str:
    """Join chunk texts in rank order, separated by blank lines."""
    return "\n\n".join(hit.chunk.text for hit in hits).strip()


def collect_sources(hits: list[RankedChunk]) -> list[str]:
    """Distinct source filenames (basenames) of the hits."""
    names = (source_name(hit.chunk.metadata.source) for hit in hits)
    return list(dict.fromkeys(names))


def source_name(source: str) -> str:
    # Normalize Windows backslashes for cross-platform compatibility
    return Path(source.replace("\\", "/")).name
