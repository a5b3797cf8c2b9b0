"""
Pytest fixtures for the course retrieval tests.
"""

import string
from pathlib import Path

import pytest

from retrieval import RetrievalConfig, RetrievalService
from retrieval.exceptions import EmbeddingError, SummarizationError


class LetterEmbedder:
    """Deterministic embedder: letter frequencies a-z as a 26-dim vector."""

    def __init__(self):
        self.calls: list[str] = []

    def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        lowered = text.lower()
        return [float(lowered.count(letter)) for letter in string.ascii_lowercase]


class FailingEmbedder:
    """Fails on the n-th call (1-based), succeeds before that."""

    def __init__(self, fail_on_call: int = 1):
        self.fail_on_call = fail_on_call
        self._inner = LetterEmbedder()

    def embed(self, text: str) -> list[float]:
        if len(self._inner.calls) + 1 >= self.fail_on_call:
            raise EmbeddingError("provider unavailable", model="fake")
        return self._inner.embed(text)


class RecordingSummarizer:
    def __init__(self, summary: str = "short summary", fail: bool = False):
        self.summary = summary
        self.fail = fail
        self.inputs: list[str] = []

    def summarize(self, text: str) -> str:
        self.inputs.append(text)
        if self.fail:
            raise SummarizationError("model offline")
        return self.summary


@pytest.fixture
def letter_embedder():
    return LetterEmbedder()


@pytest.fixture
def config(tmp_path: Path) -> RetrievalConfig:
    return RetrievalConfig(
        indexes_dir=str(tmp_path / "indexes"),
        summarize=False,
    )


@pytest.fixture
def service(config, letter_embedder) -> RetrievalService:
    return RetrievalService(config, embedder=letter_embedder)


@pytest.fixture
def text_file(tmp_path: Path):
    """Factory writing a plain-text file into tmp_path."""
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def pdf_file(tmp_path: Path):
    """Factory building a PDF with one text page per entry via PyMuPDF."""
    import fitz

    def _build(name: str, pages: list[str]) -> Path:
        path = tmp_path / name
        doc = fitz.open()
        for text in pages:
            page = doc.new_page()
            page.insert_text((72, 72), text, fontsize=11)
        doc.save(str(path))
        doc.close()
        return path
    return _build
