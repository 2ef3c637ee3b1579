from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable

from .comparison import DELTA_METRICS, AnalysisComparison, format_delta
from .llm.openai_client import OpenAISummaryClient, SummaryMetadata

logger = logging.getLogger(__name__)

PROMPT_HEADER = (
    "You are an expert editor providing a qualitative analysis of changes between "
    "two text documents.\n"
    "Based on the provided texts and the statistical analysis below, generate a "
    'concise, human-readable "High-Level Overview" of the changes.\n'
    "Synthesize the data into an executive summary. Use Markdown for formatting "
    "(e.g., headers, bold text, lists).\n"
    "Describe the key shifts in structure, readability, vocabulary, and style.\n"
    "Explain *how* and *why* the changes matter."
)

PROMPT_TEMPLATE = (
    "{header}\n"
    "\n"
    "**Statistical Deltas:**\n"
    "{deltas}\n"
    "\n"
    "**Original Text:**\n"
    "---\n"
    "{original_text}\n"
    "---\n"
    "\n"
    "**Revised Text:**\n"
    "---\n"
    "{revised_text}\n"
    "---\n"
    "\n"
    "**Your High-Level Overview (in Markdown):**"
)


@dataclass(slots=True)
class SummaryRequest:
    """Comparison plus the source texts the summary should describe."""

    comparison: AnalysisComparison
    original_text: str
    revised_text: str


def format_delta_lines(comparison: AnalysisComparison) -> str:
    """Render one Markdown bullet per tracked metric."""
    deltas = comparison.deltas()
    lines = []
    for label, (_, hint) in DELTA_METRICS.items():
        line = f"- {label}: {format_delta(deltas[label])}"
        if hint:
            line += f" ({hint})"
        lines.append(line)
    return "\n".join(lines)


def build_summary_prompt(
    comparison: AnalysisComparison, original_text: str, revised_text: str
) -> str:
    """Build the prompt sent to the summarization service."""
    return PROMPT_TEMPLATE.format(
        header=PROMPT_HEADER,
        deltas=format_delta_lines(comparison),
        original_text=original_text.strip(),
        revised_text=revised_text.strip(),
    )


class Summarizer(ABC):
    """Produces a natural-language overview of a comparison."""

    @abstractmethod
    def summarize(self, request: SummaryRequest) -> str:
        """Return the Markdown summary."""
        raise NotImplementedError


class NoOpSummarizer(Summarizer):
    """Returns an empty summary."""

    def summarize(self, request: SummaryRequest) -> str:
        return ""


class CallableSummarizer(Summarizer):
    """Adapt an arbitrary callable into the Summarizer interface."""

    def __init__(self, func: Callable[[SummaryRequest], str]) -> None:
        self._func = func

    def summarize(self, request: SummaryRequest) -> str:
        return self._func(request)


class OpenAISummarizer(Summarizer):
    """Summarizer backed by the OpenAI Responses API."""

    def __init__(self, client: OpenAISummaryClient) -> None:
        self._client = client

    def summarize(self, request: SummaryRequest) -> str:
        prompt = build_summary_prompt(
            request.comparison, request.original_text, request.revised_text
        )
        metadata = SummaryMetadata(
            original_words=request.comparison.original.word_count,
            revised_words=request.comparison.revised.word_count,
            prompt_chars=len(prompt),
        )
        logger.info(
            "Requesting revision summary for %d -> %d words",
            metadata.original_words,
            metadata.revised_words,
        )
        return self._client.summarize(prompt=prompt, metadata=metadata).strip()
