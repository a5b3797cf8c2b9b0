"""Tests for vector_store.store: VectorStore."""

import json
import threading

import pytest

from vector_store import (
    ChunkMetadata,
    DimensionMismatchError,
    DocumentChunk,
    StoreIOError,
    VectorStore,
    store_path,
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

def _make_chunk(index: int, embedding=None, source: str = "uploads/lecture.pdf", page=1) -> DocumentChunk:
    return DocumentChunk(
        id=index,
        text=f"Chunk number {index} about thermodynamics.",
        embedding=embedding if embedding is not None else [float(index + 1), 1.0, 0.5],
        metadata=ChunkMetadata(source=source, page=page),
    )


def _make_chunks(n: int, **kwargs) -> list[DocumentChunk]:
    return [_make_chunk(i, **kwargs) for i in range(n)]


@pytest.fixture
def store(tmp_path):
    return VectorStore.for_course(7, tmp_path / "indexes")


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestAddressing:
    def test_store_path(self, tmp_path):
        assert store_path(tmp_path, 12) == tmp_path / "course_12.json"

    def test_for_course(self, store, tmp_path):
        assert store.path == tmp_path / "indexes" / "course_7.json"
        assert store.course_id == 7


class TestAppend:
    def test_creates_store_lazily(self, store):
        assert not store.exists()
        store.append(_make_chunks(2))
        assert store.exists()

    def test_empty_append_writes_nothing(self, store):
        assert store.append([]) == []
        assert not store.exists()

    def test_ids_continue_across_appends(self, store):
        store.append(_make_chunks(3))
        store.append(_make_chunks(4))

        chunks = store.load()
        assert len(chunks) == 7
        assert [c.id for c in chunks] == list(range(7))

    def test_incoming_ids_are_ignored(self, store):
        stored = store.append([_make_chunk(99), _make_chunk(99)])
        assert [c.id for c in stored] == [0, 1]

    def test_input_chunks_are_not_mutated(self, store):
        chunks = _make_chunks(2)
        store.append(_make_chunks(1))
        store.append(chunks)
        assert [c.id for c in chunks] == [0, 1]

    def test_file_is_json_array(self, store):
        store.append(_make_chunks(2))
        data = json.loads(store.path.read_text(encoding="utf-8"))
        assert isinstance(data, list)
        assert data[0]["metadata"] == {"source": "uploads/lecture.pdf", "page": 1}
        assert set(data[0]) == {"id", "text", "embedding", "metadata"}

    def test_no_temp_files_left_behind(self, store):
        store.append(_make_chunks(2))
        assert [p.name for p in store.path.parent.iterdir()] == ["course_7.json"]


class TestDimensions:
    def test_mixed_batch_rejected(self, store):
        chunks = [_make_chunk(0, embedding=[1.0, 2.0]), _make_chunk(1, embedding=[1.0, 2.0, 3.0])]
        with pytest.raises(DimensionMismatchError):
            store.append(chunks)
        assert not store.exists()

    def test_batch_must_match_stored(self, store):
        store.append(_make_chunks(2))
        with pytest.raises(DimensionMismatchError):
            store.append([_make_chunk(0, embedding=[1.0, 2.0])])
        assert store.count() == 2

    def test_query_must_match_stored(self, store):
        store.append(_make_chunks(2))
        with pytest.raises(DimensionMismatchError):
            store.search([1.0, 2.0])

    def test_dimensions(self, store):
        assert store.dimensions() is None
        store.append(_make_chunks(1))
        assert store.dimensions() == 3


class TestSearch:
    def test_missing_store_returns_empty(self, store):
        assert store.search([1.0, 0.0, 0.0]) == []

    def test_empty_array_returns_empty(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text("[]", encoding="utf-8")
        assert store.search([1.0, 0.0, 0.0]) == []

    def test_sorted_by_descending_score(self, store):
        store.append([
            _make_chunk(0, embedding=[0.0, 1.0, 0.0]),
            _make_chunk(1, embedding=[1.0, 0.0, 0.0]),
            _make_chunk(2, embedding=[1.0, 1.0, 0.0]),
        ])
        results = store.search([1.0, 0.0, 0.0], top_k=5)

        assert [r.chunk.id for r in results] == [1, 2, 0]
        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)
        assert results[0].score == pytest.approx(1.0)

    def test_top_k_limits_results(self, store):
        store.append(_make_chunks(10))
        assert len(store.search([1.0, 1.0, 1.0], top_k=5)) == 5
        assert len(store.search([1.0, 1.0, 1.0], top_k=20)) == 10

    def test_default_top_k_is_five(self, store):
        store.append(_make_chunks(8))
        assert len(store.search([1.0, 1.0, 1.0])) == 5

    def test_zero_vectors_score_zero(self, store):
        store.append([
            _make_chunk(0, embedding=[0.0, 0.0, 0.0]),
            _make_chunk(1, embedding=[1.0, 0.0, 0.0]),
        ])
        results = store.search([1.0, 0.0, 0.0])
        assert results[-1].chunk.id == 0
        assert results[-1].score == 0.0

        results = store.search([0.0, 0.0, 0.0])
        assert all(r.score == 0.0 for r in results)

    def test_invalid_top_k(self, store):
        with pytest.raises(ValueError):
            store.search([1.0, 0.0, 0.0], top_k=0)


class TestPersistence:
    def test_reload_gives_identical_results(self, store):
        chunks = [
            DocumentChunk(
                text="Ünïcödé text with\nnewlines and \"quotes\".",
                embedding=[0.1234567890123, -2.5e-8, 3.0],
                metadata=ChunkMetadata(source="notes.txt", page=None),
            ),
            _make_chunk(1),
        ]
        store.append(chunks)
        before = store.search([0.2, 0.1, 1.0], top_k=5)

        reopened = VectorStore(store.path, course_id=7)
        after = reopened.search([0.2, 0.1, 1.0], top_k=5)

        assert [r.model_dump() for r in after] == [r.model_dump() for r in before]
        assert reopened.load()[0].text == chunks[0].text
        assert reopened.load()[0].embedding == chunks[0].embedding
        assert reopened.load()[0].metadata.page is None

    def test_corrupted_file_raises(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text("{not json", encoding="utf-8")
        with pytest.raises(StoreIOError):
            store.search([1.0, 0.0, 0.0])

    def test_corrupted_file_blocks_append(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text('{"not": "an array"}', encoding="utf-8")
        with pytest.raises(StoreIOError):
            store.append(_make_chunks(1))
        assert store.path.read_text(encoding="utf-8") == '{"not": "an array"}'

    def test_mixed_embedding_lengths_raise(self, store):
        records = [
            _make_chunk(0, embedding=[1.0, 0.0]).model_dump(mode="json"),
            _make_chunk(1, embedding=[1.0, 0.0, 0.0]).model_dump(mode="json"),
        ]
        store.path.parent.mkdir(parents=True)
        store.path.write_text(json.dumps(records), encoding="utf-8")

        with pytest.raises(StoreIOError, match="dimensions"):
            store.search([1.0, 0.0])
        with pytest.raises(StoreIOError):
            store.append(_make_chunks(1, embedding=[1.0, 0.0]))

    def test_unwritable_location_raises(self, tmp_path):
        blocker = tmp_path / "indexes"
        blocker.write_text("a file, not a directory", encoding="utf-8")
        store = VectorStore.for_course(1, blocker)
        with pytest.raises(StoreIOError):
            store.append(_make_chunks(1))


class TestInspection:
    def test_list_sources(self, store):
        store.append(_make_chunks(2, source="a.pdf", page=1))
        store.append(_make_chunks(1, source="a.pdf", page=3))
        store.append(_make_chunks(2, source="b.txt", page=None))

        summaries = {s.source: s for s in store.list_sources()}
        assert summaries["a.pdf"].chunk_count == 3
        assert summaries["a.pdf"].pages == [1, 3]
        assert summaries["b.txt"].pages == []

    def test_stats(self, store):
        store.append(_make_chunks(3))
        stats = store.stats()
        assert stats.course_id == 7
        assert stats.chunk_count == 3
        assert stats.dimensions == 3


class TestConcurrency:
    def test_concurrent_appends_lose_nothing(self, tmp_path):
        path = tmp_path / "indexes" / "course_3.json"
        batches = [_make_chunks(5) for _ in range(8)]
        barrier = threading.Barrier(len(batches))
        errors = []

        def worker(batch):
            try:
                barrier.wait()
                VectorStore(path, course_id=3).append(batch)
            except Exception as exc:  # pragma: no cover - surfaced below
                errors.append(exc)

        threads = [threading.Thread(target=worker, args=(b,)) for b in batches]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        chunks = VectorStore(path).load()
        assert len(chunks) == 40
        assert sorted(c.id for c in chunks) == list(range(40))
