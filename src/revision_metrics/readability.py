from __future__ import annotations

import math
from typing import Iterable, List

from .models import Paragraph, ReadabilityScores, Token
from .wordlists import ReferenceLists, default_reference_lists

COMPLEX_WORD_MIN_SYLLABLES = 3
DALE_CHALL_DIFFICULT_RATIO = 0.05
DALE_CHALL_ADJUSTMENT = 3.6365

# Inflections stripped when looking a word up in the familiar-word list,
# paired with the ending restored afterwards ("baking" -> "bake").
INFLECTION_RULES = (
    ("'s", ""),
    ("ies", "y"),
    ("ied", "y"),
    ("ier", "y"),
    ("iest", "y"),
    ("es", ""),
    ("s", ""),
    ("ed", ""),
    ("ed", "e"),
    ("d", ""),
    ("ing", ""),
    ("ing", "e"),
    ("er", ""),
    ("er", "e"),
    ("est", ""),
    ("est", "e"),
)


def flesch_reading_ease(words: int, sentences: int, syllables: int) -> float:
    if words == 0 or sentences == 0:
        return 0.0
    return 206.835 - 1.015 * (words / sentences) - 84.6 * (syllables / words)


def flesch_kincaid_grade(words: int, sentences: int, syllables: int) -> float:
    if words == 0 or sentences == 0:
        return 0.0
    return 0.39 * (words / sentences) + 11.8 * (syllables / words) - 15.59


def gunning_fog(words: int, sentences: int, complex_words: int) -> float:
    if words == 0 or sentences == 0:
        return 0.0
    return 0.4 * ((words / sentences) + 100.0 * (complex_words / words))


def smog_index(words: int, sentences: int, complex_words: int) -> float:
    if words == 0 or sentences == 0:
        return 0.0
    return 1.0430 * math.sqrt(complex_words * 30.0 / sentences) + 3.1291


def dale_chall(words: int, sentences: int, difficult_words: int) -> float:
    if words == 0 or sentences == 0:
        return 0.0
    difficult_ratio = difficult_words / words
    score = 0.1579 * (difficult_ratio * 100.0) + 0.0496 * (words / sentences)
    if difficult_ratio > DALE_CHALL_DIFFICULT_RATIO:
        score += DALE_CHALL_ADJUSTMENT
    return score


def is_complex_word(token: Token, lists: ReferenceLists) -> bool:
    """Three or more syllables and not one of the common exceptions."""
    return (
        token.syllables >= COMPLEX_WORD_MIN_SYLLABLES
        and token.text not in lists.complex_word_exceptions
    )


def is_familiar_word(word: str, familiar: frozenset[str]) -> bool:
    """Return True when the word or a regular inflection of it is familiar."""
    if not any(ch.isalpha() for ch in word):
        return True
    if word in familiar:
        return True
    for suffix, replacement in INFLECTION_RULES:
        if word.endswith(suffix) and len(word) > len(suffix) + 1:
            stem = word[: -len(suffix)] + replacement
            if stem in familiar:
                return True
            # Doubled final consonant: "stopped", "running", "bigger".
            if not replacement and len(stem) > 2 and stem[-1] == stem[-2]:
                if stem[:-1] in familiar:
                    return True
    return False


def _iter_tokens(paragraphs: Iterable[Paragraph]) -> Iterable[Token]:
    for paragraph in paragraphs:
        for sentence in paragraph.sentences:
            yield from sentence.tokens


def compute_readability(
    paragraphs: List[Paragraph], lists: ReferenceLists | None = None
) -> ReadabilityScores:
    """Compute every readability formula over one segmented document."""
    if lists is None:
        lists = default_reference_lists()
    sentences = sum(len(paragraph.sentences) for paragraph in paragraphs)
    words = 0
    syllables = 0
    complex_words = 0
    difficult_words = 0
    for token in _iter_tokens(paragraphs):
        words += 1
        syllables += token.syllables
        if is_complex_word(token, lists):
            complex_words += 1
        if not is_familiar_word(token.text, lists.familiar_words):
            difficult_words += 1

    return ReadabilityScores(
        flesch_reading_ease=flesch_reading_ease(words, sentences, syllables),
        flesch_kincaid_grade=flesch_kincaid_grade(words, sentences, syllables),
        gunning_fog=gunning_fog(words, sentences, complex_words),
        smog_index=smog_index(words, sentences, complex_words),
        dale_chall=dale_chall(words, sentences, difficult_words),
    )
