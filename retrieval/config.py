from dataclasses import dataclass
import os


@dataclass
class RetrievalConfig:
    indexes_dir: str = "uploads/indexes"
    top_k: int = 5
    chunk_size: int = 1000
    chunk_overlap: int = 200
    summarize: bool = True
    summarize_threshold_chars: int = 4000
    summary_input_chars: int = 15000
    summary_fallback_chars: int = 4000
    ollama_base_url: str = "http://localhost:11434"
    embedding_model: str = "nomic-embed-text"
    summary_model: str = "llama3.1:latest"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "RetrievalConfig":
        def _int(name: str, default: int) -> int:
            value = os.environ.get(name)
            return int(value) if value else default

        def _bool(name: str, default: bool) -> bool:
            value = os.environ.get(name)
            if not value:
                return default
            return value.strip().lower() in {"1", "true", "yes", "on"}

        return cls(
            indexes_dir=os.environ.get("RETRIEVAL_INDEXES_DIR", cls.indexes_dir),
            top_k=_int("RETRIEVAL_TOP_K", cls.top_k),
            chunk_size=_int("RETRIEVAL_CHUNK_SIZE", cls.chunk_size),
            chunk_overlap=_int("RETRIEVAL_CHUNK_OVERLAP", cls.chunk_overlap),
            summarize=_bool("RETRIEVAL_SUMMARIZE", cls.summarize),
            summarize_threshold_chars=_int(
                "RETRIEVAL_SUMMARIZE_THRESHOLD", cls.summarize_threshold_chars
            ),
            summary_input_chars=_int("RETRIEVAL_SUMMARY_INPUT_CHARS", cls.summary_input_chars),
            summary_fallback_chars=_int(
                "RETRIEVAL_SUMMARY_FALLBACK_CHARS", cls.summary_fallback_chars
            ),
            ollama_base_url=os.environ.get("OLLAMA_BASE_URL", cls.ollama_base_url),
            embedding_model=os.environ.get("OLLAMA_EMBEDDING_MODEL", cls.embedding_model),
            summary_model=os.environ.get("OLLAMA_SUMMARY_MODEL", cls.summary_model),
            log_level=os.environ.get("RETRIEVAL_LOG_LEVEL", cls.log_level),
        )
