"""
Paragraph, sentence and word segmentation.

Paragraphs are separated by blank lines. Sentences end at ``.``, ``!`` or
``?``; a period does not end a sentence when it follows a known
abbreviation, sits inside a decimal number, belongs to an ellipsis, is
glued to the next character (URLs), or closes a dotted abbreviation
("e.g.") followed by a lowercase word. Text without any terminal mark is a
single sentence. Words are case-folded with ``str.casefold``.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from typing import Iterable, List

from .models import Paragraph, Sentence, Token
from .syllables import count_syllables
from .wordlists import ReferenceLists, default_reference_lists

logger = logging.getLogger(__name__)

PARAGRAPH_SPLIT_RE = re.compile(r"\n[ \t\r\f\v]*\n")
TERMINAL_RE = re.compile(r"[.!?]+")
CLOSING_CHARS = "\"')]}"
WORD_SPLIT_RE = re.compile(r"\s+|--+|[–—]")
EDGE_PUNCT_RE = re.compile(r"^[\W_]+|[\W_]+$", re.UNICODE)
APOSTROPHES = str.maketrans({"’": "'", "‘": "'", "“": '"', "”": '"'})


def normalize_text(text: str) -> str:
    """NFKC-normalize text and fold typographic quotes to ASCII."""
    normalized = unicodedata.normalize("NFKC", text)
    normalized = normalized.translate(APOSTROPHES)
    return normalized.replace("\r\n", "\n").replace("\r", "\n")


def normalize_word(raw: str) -> str:
    """Case-fold a word and strip surrounding punctuation."""
    return EDGE_PUNCT_RE.sub("", raw).casefold()


def iter_words(text: str) -> Iterable[str]:
    """Yield normalized, non-empty words from a span of text."""
    for chunk in WORD_SPLIT_RE.split(text):
        word = normalize_word(chunk)
        if word:
            yield word


def split_paragraphs(text: str) -> List[str]:
    """Split text into non-blank paragraphs."""
    return [block.strip() for block in PARAGRAPH_SPLIT_RE.split(text) if block.strip()]


def split_sentences(paragraph: str, abbreviations: frozenset[str]) -> List[str]:
    """Split a paragraph into sentence strings."""
    sentences: List[str] = []
    start = 0
    for match in TERMINAL_RE.finditer(paragraph):
        if not _is_boundary(paragraph, match, abbreviations):
            continue
        end = match.end()
        while end < len(paragraph) and paragraph[end] in CLOSING_CHARS:
            end += 1
        sentence = paragraph[start:end].strip()
        if sentence:
            sentences.append(sentence)
        start = end

    remainder = paragraph[start:].strip()
    if remainder:
        sentences.append(remainder)
    return sentences


def _is_boundary(text: str, match: re.Match[str], abbreviations: frozenset[str]) -> bool:
    mark = match.group()
    if any(ch in "!?" for ch in mark):
        return True
    if len(mark) > 1:
        # "..." and longer runs of periods are an ellipsis.
        return False

    before = text[match.start() - 1] if match.start() > 0 else ""
    after = text[match.end()] if match.end() < len(text) else ""
    if before.isdigit() and after.isdigit():
        return False
    if after and not after.isspace() and after not in CLOSING_CHARS:
        return False

    preceding = text[: match.start()].split()
    if not preceding:
        return True
    last_word = preceding[-1].lstrip("\"'([{").casefold()
    if "." in last_word and any(ch.isalpha() for ch in last_word):
        # Dotted abbreviations ("e.g.", "U.S.") end a sentence unless a
        # lowercase word follows.
        return not _next_word_is_lowercase(text, match.end())
    return last_word not in abbreviations


def _next_word_is_lowercase(text: str, start: int) -> bool:
    following = text[start:].lstrip(CLOSING_CHARS).split(maxsplit=1)
    if not following:
        return False
    first = following[0].lstrip("\"'([{")
    return bool(first) and first[0].islower()


def make_token(word: str, lists: ReferenceLists) -> Token:
    """Build an immutable Token with its syllable count and list flags."""
    is_stopword = word in lists.stopwords
    return Token(
        text=word,
        syllables=count_syllables(word, lists.syllable_exceptions),
        is_content_word=not is_stopword,
        is_stopword=is_stopword,
        is_weak_word=word in lists.weak_words,
        is_adverb=_is_ly_adverb(word, lists.ly_exclusions),
    )


def _is_ly_adverb(word: str, exclusions: frozenset[str]) -> bool:
    return len(word) > 3 and word.endswith("ly") and word not in exclusions


def segment(text: str, lists: ReferenceLists | None = None) -> List[Paragraph]:
    """Segment raw text into paragraphs of sentences of tokens."""
    if lists is None:
        lists = default_reference_lists()
    if not text or not text.strip():
        return []

    paragraphs: List[Paragraph] = []
    for block in split_paragraphs(normalize_text(text)):
        sentences: List[Sentence] = []
        for sentence_text in split_sentences(block, lists.abbreviations):
            tokens = tuple(make_token(word, lists) for word in iter_words(sentence_text))
            if tokens:
                sentences.append(Sentence(text=sentence_text, tokens=tokens))
        if sentences:
            paragraphs.append(Paragraph(sentences=tuple(sentences)))

    logger.debug(
        "Segmented %d paragraphs / %d sentences.",
        len(paragraphs),
        sum(len(p.sentences) for p in paragraphs),
    )
    return paragraphs
