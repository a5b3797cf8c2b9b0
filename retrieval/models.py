from typing import Optional

from pydantic import BaseModel, Field

NO_MATERIALS_MESSAGE = "No course materials have been indexed yet."


class IngestRequest(BaseModel):
    file_path: str = Field(..., min_length=1)


class QueryRequest(BaseModel):
    question: str = Field(..., min_length=1)
    top_k: Optional[int] = Field(None, ge=1, le=50)


class IngestStats(BaseModel):
    course_id: int
    source: str
    documents_loaded: int = 0
    chunks_stored: int = 0
    chunks_summarized: int = 0
    embedding_time_seconds: float = 0.0
    total_time_seconds: float = 0.0


class RetrievalHit(BaseModel):
    chunk_id: int
    score: float
    text: str
    source: str
    page: Optional[int] = None


class QueryResult(BaseModel):
    question: str
    content: str
    sources: list[str] = Field(default_factory=list)
    results: list[RetrievalHit] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.results
