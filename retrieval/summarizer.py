"""
Summarization before embedding

Long chunks are compressed by an LLM so the embedding input stays within
the embedding model's limits. Summaries are only used to compute the
embedding; the stored chunk text is always the original.

Policy (summarize_if_longer):
- Text at or below the threshold is embedded as-is.
- Longer text is cut to ``input_chars`` and sent to the summarizer.
- If there is no summarizer, or it fails or answers with nothing, the text
  cut to ``fallback_chars`` is embedded instead. Summarization never aborts
  an ingestion.
"""

import logging
from typing import Optional, Protocol

import ollama

from .exceptions import SummarizationError

logger = logging.getLogger(__name__)

SUMMARY_PROMPT = (
    "Please summarize the following text, retaining all key information, "
    "main points, technical terms, and important details:"
)


class Summarizer(Protocol):
    def summarize(self, text: str) -> str: ...


class OllamaSummarizer:
    """Summarizes text with a local Ollama chat model."""

    def __init__(
        self,
        model: str = "llama3.1:latest",
        base_url: str = "http://localhost:11434",
        temperature: float = 0.2,
        output_tokens: int = 1024,
    ):
        self.model = model
        self.base_url = base_url
        self.temperature = temperature
        self.output_tokens = output_tokens
        self._client = ollama.Client(host=base_url)

    def summarize(self, text: str) -> str:
        """
        Summarize a text.

        Raises:
            SummarizationError: If the request fails or the answer is empty.
        """
        try:
            response = self._client.chat(
                model=self.model,
                messages=[
                    {
                        "role": "system",
                        "content": "You are a helpful assistant that summarizes educational content.",
                    },
                    {"role": "user", "content": f"{SUMMARY_PROMPT}\n\n{text}"},
                ],
                options={
                    "temperature": self.temperature,
                    "num_predict": self.output_tokens,
                },
            )
            content = response["message"]["content"]
        except Exception as e:
            raise SummarizationError(
                f"Ollama summarization failed for model '{self.model}'",
                original_error=e,
            ) from e

        if not content or not content.strip():
            raise SummarizationError(f"Model '{self.model}' returned an empty summary")
        return content.strip()

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
            if result["model_available"]:
                result["healthy"] = True
            else:
                result["error"] = (
                    f"Model '{self.model}' not found. "
                    f"Pull it with: ollama pull {self.model}"
                )
        except Exception as e:
            result["error"] = f"Cannot connect to Ollama: {e}"

        return result


def summarize_if_longer(
    text: str,
    summarizer: Optional[Summarizer],
    threshold_chars: int = 4000,
    input_chars: int = 15000,
    fallback_chars: int = 4000,
) -> tuple[str, bool]:
    """
    Apply the summarization policy to one chunk text.

    Args:
        text: The chunk text.
        summarizer: Collaborator to call, or None to only truncate.
        threshold_chars: Texts up to this length are returned unchanged.
        input_chars: Maximum characters sent to the summarizer.
        fallback_chars: Length of the truncated text used when no summary
                        is available.

    Returns:
        Tuple of (text_to_embed, summarized) where summarized is True only
        if the summarizer produced the returned text.
    """
    if len(text) <= threshold_chars:
        return text, False

    if summarizer is None:
        return text[:fallback_chars], False

    prompt_text = text[:input_chars]
    if len(text) > input_chars:
        prompt_text += " ... (text truncated)"

    try:
        summary = summarizer.summarize(prompt_text)
    except Exception as exc:
        logger.warning(
            "Summarization failed, embedding first %d characters instead: %s",
            fallback_chars, exc,
        )
        return text[:fallback_chars], False

    if not summary or not summary.strip():
        logger.warning(
            "Summarizer returned nothing, embedding first %d characters instead",
            fallback_chars,
        )
        return text[:fallback_chars], False
    return summary, True
