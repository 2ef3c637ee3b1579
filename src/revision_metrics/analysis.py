from __future__ import annotations

import logging
from typing import List

from .config import RevisionMetricsConfig
from .lexical import DEFAULT_TOP_N, compute_lexical_metrics
from .models import AnalysisResult, Paragraph
from .readability import compute_readability
from .style import DEFAULT_PASSIVE_WINDOW, compute_style_metrics
from .tokenization import segment
from .wordlists import ReferenceLists, default_reference_lists, load_reference_lists

logger = logging.getLogger(__name__)


def aggregate(
    paragraphs: List[Paragraph],
    lists: ReferenceLists | None = None,
    *,
    top_n: int = DEFAULT_TOP_N,
    passive_window: int = DEFAULT_PASSIVE_WINDOW,
) -> AnalysisResult:
    """Run every analyzer over one segmented document and merge the results."""
    if lists is None:
        lists = default_reference_lists()
    sentence_count = sum(len(paragraph.sentences) for paragraph in paragraphs)
    word_count = sum(
        len(sentence.tokens)
        for paragraph in paragraphs
        for sentence in paragraph.sentences
    )
    readability = compute_readability(paragraphs, lists)
    lexical = compute_lexical_metrics(paragraphs, top_n)
    style = compute_style_metrics(paragraphs, lists, passive_window)

    return AnalysisResult(
        word_count=word_count,
        paragraph_count=len(paragraphs),
        sentence_count=sentence_count,
        avg_sentence_length=word_count / sentence_count if sentence_count else 0.0,
        flesch_reading_ease=readability.flesch_reading_ease,
        flesch_kincaid_grade=readability.flesch_kincaid_grade,
        gunning_fog=readability.gunning_fog,
        smog_index=readability.smog_index,
        dale_chall=readability.dale_chall,
        lexical_density=lexical.lexical_density,
        lexical_diversity=lexical.lexical_diversity,
        word_frequency=lexical.word_frequency,
        passive_voice_count=style.passive_voice_count,
        sentence_structure=style.sentence_structure,
        weak_word_count=style.weak_word_count,
    )


def analyze_text(
    text: str, config: RevisionMetricsConfig | None = None
) -> AnalysisResult:
    """Analyze one document. Any string, including an empty one, is valid input."""
    if config is None:
        config = RevisionMetricsConfig()
    lists = load_reference_lists(config)
    result = aggregate(
        segment(text, lists),
        lists,
        top_n=config.top_n_words,
        passive_window=config.passive_window,
    )
    logger.debug(
        "Analyzed %d words in %d sentences (FRE=%.1f).",
        result.word_count,
        result.sentence_count,
        result.flesch_reading_ease,
    )
    return result
