from __future__ import annotations

import importlib
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, cast

from ..config import OpenAISettings

logger = logging.getLogger(__name__)

OpenAI: Callable[..., Any] | None = None

MAX_ATTEMPTS = 3
MAX_BACKOFF_SECONDS = 5


@dataclass(slots=True)
class SummaryMetadata:
    """Describes the comparison being summarized, used for logging."""

    original_words: int
    revised_words: int
    prompt_chars: int | None = None


class OpenAISummaryClient:
    """Sends one summary prompt to the OpenAI Responses API."""

    def __init__(self, settings: OpenAISettings, api_key: str) -> None:
        if not api_key:
            raise ValueError("OpenAI API key is required to generate summaries.")
        self._settings = settings
        self._client = _load_openai_factory()(
            api_key=api_key,
            base_url=settings.base_url,
            organization=settings.organization,
        )

    def summarize(self, *, prompt: str, metadata: SummaryMetadata) -> str:
        """Return the model's Markdown output, retrying transient failures."""
        last_error: Exception | None = None
        for attempt in range(1, MAX_ATTEMPTS + 1):
            try:
                response = self._client.responses.create(
                    model=self._settings.model,
                    input=[{"role": "user", "content": prompt}],
                    temperature=self._settings.temperature,
                    max_output_tokens=self._settings.max_output_tokens,
                    top_p=self._settings.top_p,
                    timeout=self._settings.request_timeout,
                )
                text = self._extract_text(response)
            except Exception as exc:  # pragma: no cover - network-related
                last_error = exc
                logger.warning(
                    "Summary request for %s -> %s words failed (attempt %s/%s): %s",
                    metadata.original_words,
                    metadata.revised_words,
                    attempt,
                    MAX_ATTEMPTS,
                    exc,
                )
                if attempt < MAX_ATTEMPTS:
                    time.sleep(min(2 ** (attempt - 1), MAX_BACKOFF_SECONDS))
                continue
            logger.debug(
                "Summary received (%s chars for a %s char prompt)",
                len(text),
                metadata.prompt_chars,
            )
            return text
        raise RuntimeError("OpenAI summary failed after retries.") from last_error

    @staticmethod
    def _extract_text(response: Any) -> str:
        output_text = getattr(response, "output_text", None)
        if isinstance(output_text, str) and output_text:
            return output_text
        output = getattr(response, "output", None) or []
        for item in output:
            for segment in _field(item, "content") or []:
                text = _field(segment, "text")
                if text:
                    return cast(str, text)
        raise RuntimeError("OpenAI response contained no summary text.")


def _field(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def _load_openai_factory() -> Callable[..., Any]:
    """Import the OpenAI client class lazily so the engine works without it."""
    global OpenAI
    if OpenAI is not None:
        return OpenAI
    try:  # pragma: no cover - import guard
        module = importlib.import_module("openai")
    except ImportError as exc:  # pragma: no cover - handled at runtime
        raise RuntimeError(
            "openai package is not installed. Install extras via 'pip install .[llm-openai]'."
        ) from exc
    OpenAI = cast(Callable[..., Any], module.OpenAI)
    return OpenAI
