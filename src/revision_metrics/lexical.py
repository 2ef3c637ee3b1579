from __future__ import annotations

import math
from collections import Counter
from typing import List

from .models import LexicalMetrics, Paragraph, Token, WordCount

DEFAULT_TOP_N = 20


def _flatten(paragraphs: List[Paragraph]) -> List[Token]:
    return [
        token
        for paragraph in paragraphs
        for sentence in paragraph.sentences
        for token in sentence.tokens
    ]


def lexical_density(tokens: List[Token]) -> float:
    """Percentage of tokens that are content words."""
    if not tokens:
        return 0.0
    content = sum(1 for token in tokens if token.is_content_word)
    return content / len(tokens) * 100.0


def lexical_diversity(tokens: List[Token]) -> float:
    """Corrected type-token ratio: distinct words / sqrt(2 * total words)."""
    if not tokens:
        return 0.0
    distinct = len({token.text for token in tokens})
    return distinct / math.sqrt(2.0 * len(tokens))


def word_frequency(tokens: List[Token], top_n: int = DEFAULT_TOP_N) -> tuple[WordCount, ...]:
    """
    Rank non-stopword tokens by count.

    Counter keeps first-insertion order and ``sorted`` is stable, so ties stay
    in order of first occurrence.
    """
    if top_n <= 0:
        return ()
    counts = Counter(token.text for token in tokens if not token.is_stopword)
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return tuple(WordCount(word=word, count=count) for word, count in ranked[:top_n])


def compute_lexical_metrics(
    paragraphs: List[Paragraph], top_n: int = DEFAULT_TOP_N
) -> LexicalMetrics:
    tokens = _flatten(paragraphs)
    return LexicalMetrics(
        lexical_density=lexical_density(tokens),
        lexical_diversity=lexical_diversity(tokens),
        word_frequency=word_frequency(tokens, top_n),
    )
