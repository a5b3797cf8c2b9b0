import logging
from typing import Optional, Protocol

import ollama

from .exceptions import EmbeddingError

logger = logging.getLogger(__name__)


class Embedder(Protocol):
    def embed(self, text: str) -> list[float]: ...


class OllamaEmbedder:
    def __init__(
        self,
        model: str = "nomic-embed-text",
        base_url: str = "http://localhost:11434",
    ):
        self.model = model
        self.base_url = base_url
        self._client = ollama.Client(host=base_url)
        self._dimensions: Optional[int] = None

    @property
    def dimensions(self) -> Optional[int]:
        return self._dimensions

    def embed(self, text: str) -> list[float]:
        if not text or not text.strip():
            raise EmbeddingError("Cannot embed empty text", model=self.model)
        try:
            response = self._client.embed(model=self.model, input=text)
            embedding = list(response["embeddings"][0])
        except ollama.ResponseError as e:
            raise EmbeddingError(
                "Ollama embedding request failed", model=self.model, original_error=e
            ) from e
        except Exception as e:
            if "Connection" in type(e).__name__ or "refused" in str(e).lower():
                raise EmbeddingError(
                    f"Cannot connect to Ollama at {self.base_url}. "
                    f"Is Ollama running? Start it with: ollama serve",
                    model=self.model,
                    original_error=e,
                ) from e
            raise EmbeddingError(model=self.model, original_error=e) from e

        if not embedding:
            raise EmbeddingError("Ollama returned an empty embedding", model=self.model)
        self._dimensions = len(embedding)
        return embedding

    def health_check(self) -> dict[str, bool | str]:
        result = {
            "healthy": False,
            "ollama_running": False,
            "model_available": False,
            "model": self.model,
            "error": "",
        }

        try:
            models = self._client.list()
            result["ollama_running"] = True

            model_names = [m.model for m in models.models]
            result["model_available"] = any(
                m.startswith(self.model) for m in model_names
            )

            if not result["model_available"]:
                result["error"] = (
                    f"Model '{self.model}' not found. "
                    f"Available: {model_names}. "
                    f"Pull it with: ollama pull {self.model}"
                )
            else:
                result["healthy"] = True

        except Exception as e:
            result["error"] = f"Cannot connect to Ollama: {e}"

        return result
