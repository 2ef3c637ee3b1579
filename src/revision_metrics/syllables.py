from __future__ import annotations

import re
from typing import Mapping

from .wordlists import default_reference_lists

VOWEL_GROUP_RE = re.compile(r"[aeiouy]+")
NON_LETTER_RE = re.compile(r"[^a-z]")


def count_syllables(word: str, exceptions: Mapping[str, int] | None = None) -> int:
    """
    Estimate the syllables in a word from its vowel groups.

    Each maximal run of vowels counts once, a silent trailing "e" is dropped
    when another syllable remains, and known irregular words come from the
    exception table. Hyphenated words are the sum of their parts. The result
    is never below 1.
    """
    if exceptions is None:
        exceptions = default_reference_lists().syllable_exceptions
    lowered = word.casefold()
    if lowered in exceptions:
        return exceptions[lowered]
    parts = [part for part in lowered.split("-") if part]
    if len(parts) > 1:
        return sum(count_syllables(part, exceptions) for part in parts)
    return _count_part(lowered, exceptions)


def _count_part(word: str, exceptions: Mapping[str, int]) -> int:
    letters = NON_LETTER_RE.sub("", word)
    if not letters:
        return 1
    if letters in exceptions:
        return exceptions[letters]
    # A leading "y" before a vowel is a consonant ("yes", "young").
    if len(letters) > 1 and letters[0] == "y" and letters[1] in "aeiou":
        letters = letters[1:]
    count = len(VOWEL_GROUP_RE.findall(letters))
    if count > 1 and _has_silent_e(letters):
        count -= 1
    return max(1, count)


def _has_silent_e(letters: str) -> bool:
    if not letters.endswith("e") or letters.endswith("ee"):
        return False
    # Consonant + "le" is its own syllable: "table", "little".
    if letters.endswith("le") and len(letters) > 2 and letters[-3] not in "aeiouy":
        return False
    return True
