from typing import Optional

from fastapi import FastAPI, HTTPException

from loaders import LoadError, UnsupportedFormatError
from vector_store import SourceSummary, VectorStoreError

from .config import RetrievalConfig
from .exceptions import EmbeddingError
from .logging_config import setup_logging
from .models import IngestRequest, IngestStats, QueryRequest, QueryResult
from .service import RetrievalService


def _to_http(exc: Exception) -> HTTPException:
    if isinstance(exc, UnsupportedFormatError):
        return HTTPException(status_code=415, detail=str(exc))
    if isinstance(exc, LoadError):
        return HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, EmbeddingError):
        return HTTPException(status_code=502, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))


def create_app(
    config: Optional[RetrievalConfig] = None,
    service: Optional[RetrievalService] = None,
) -> FastAPI:
    cfg = config or RetrievalConfig.from_env()
    setup_logging(cfg.log_level)
    service = service or RetrievalService(cfg)

    app = FastAPI(
        title="Course Retrieval Service",
        version="1.0.0",
        description="Per-course indexing and retrieval of course materials.",
    )

    @app.get("/health")
    def health() -> dict:
        components = {"embedder": service.embedder}
        if service.summarizer is not None:
            components["summarizer"] = service.summarizer

        report: dict = {}
        for name, component in components.items():
            checker = getattr(component, "health_check", None)
            report[name] = checker() if checker else {"healthy": True}

        healthy = all(item.get("healthy") for item in report.values())
        return {"status": "ok" if healthy else "degraded", **report}

    @app.post("/courses/{course_id}/materials", response_model=IngestStats)
    def ingest(course_id: int, request: IngestRequest) -> IngestStats:
        try:
            return service.ingest(request.file_path, course_id)
        except (LoadError, UnsupportedFormatError, EmbeddingError, VectorStoreError) as exc:
            raise _to_http(exc) from exc

    @app.post("/courses/{course_id}/query", response_model=QueryResult)
    def query(course_id: int, request: QueryRequest) -> QueryResult:
        try:
            return service.query(request.question, course_id, top_k=request.top_k)
        except (EmbeddingError, VectorStoreError) as exc:
            raise _to_http(exc) from exc

    @app.get("/courses/{course_id}/sources", response_model=list[SourceSummary])
    def sources(course_id: int) -> list[SourceSummary]:
        try:
            return service.list_sources(course_id)
        except VectorStoreError as exc:
            raise _to_http(exc) from exc

    return app
