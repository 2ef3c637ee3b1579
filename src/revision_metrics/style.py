"""
Rule-based style heuristics: passive voice, clause structure and weak words.

These rules approximate grammar with word lists and token patterns; there is
no parser or part-of-speech tagger behind them. Known behaviour:

* Adjectival participles read as passive ("She is tired").
* "Get" passives ("got fired") and passives without a "be" auxiliary are
  missed.
* A coordinating conjunction after a comma that continues a list of two or
  more words ("apples, pears, and fresh plums") reads as a clause join.
* "that" used as a determiner mid-sentence ("I like that book") reads as a
  relative pronoun.
* A compound subject with two or more words before the conjunction ("The
  boy and I went") reads as a clause join.

Both documents of a comparison go through the same rules, so the deltas stay
meaningful even where the absolute counts are off.
"""

from __future__ import annotations

import re
from typing import Iterable, List

from .models import (
    Paragraph,
    Sentence,
    SentenceStructureCounts,
    SentenceStyle,
    StyleMetrics,
    Structure,
    Token,
    Voice,
)
from .tokenization import WORD_SPLIT_RE, normalize_word
from .wordlists import ReferenceLists, default_reference_lists

DEFAULT_PASSIVE_WINDOW = 3

BE_FORMS = frozenset({"am", "is", "are", "was", "were", "be", "been", "being"})
# Tokens allowed between the auxiliary and the participle.
PASSIVE_FILLERS = frozenset({"not", "never", "also", "always", "often", "still", "just"})
NON_PARTICIPLE_ED = frozenset(
    {
        "bed", "bleed", "breed", "creed", "deed", "embed", "exceed", "feed",
        "greed", "heed", "hundred", "indeed", "kindred", "naked", "need",
        "proceed", "ragged", "rugged", "sacred", "seed", "shed", "speed",
        "steed", "succeed", "tweed", "weed", "wicked",
    }
)

COORDINATING_CONJUNCTIONS = frozenset({"and", "but", "or", "so", "yet", "for", "nor"})
SUBORDINATING_CONJUNCTIONS = frozenset(
    {
        "because", "although", "though", "since", "while", "if", "unless",
        "until", "whereas", "when", "whenever", "where", "wherever", "whether",
    }
)
RELATIVE_PRONOUNS = frozenset({"which", "that", "who", "whom", "whose"})
QUESTION_WORDS = frozenset({"which", "who", "whom", "whose", "when", "where", "whether"})
SUBJECT_PRONOUNS = frozenset({"i", "you", "he", "she", "it", "we", "they"})

CLAUSE_PUNCT = frozenset({",", ";", ":"})
CLAUSE_ITEM_RE = re.compile(r"[;,:]|[^\s;,:]+")


def is_past_participle(word: str, irregular: frozenset[str]) -> bool:
    """Heuristic: "-ed" endings plus a list of irregular participles."""
    if word in irregular:
        return True
    return len(word) > 3 and word.endswith("ed") and word not in NON_PARTICIPLE_ED


def is_passive(
    tokens: Iterable[Token],
    irregular: frozenset[str],
    window: int = DEFAULT_PASSIVE_WINDOW,
) -> bool:
    """
    Detect a "be" auxiliary followed by a past participle.

    The participle must appear within ``window`` tokens of the auxiliary, with
    only adverbs, negations or further "be" forms in between ("was not
    thrown", "is being built"). A trailing "by" agent is common but optional.
    """
    words = [token.text for token in tokens]
    for index, word in enumerate(words):
        if word not in BE_FORMS:
            continue
        for candidate in words[index + 1 : index + 1 + max(1, window)]:
            if is_past_participle(candidate, irregular):
                return True
            if (
                candidate in BE_FORMS
                or candidate in PASSIVE_FILLERS
                or candidate.endswith("ly")
            ):
                continue
            break
    return False


def _clause_items(text: str) -> List[str]:
    items: List[str] = []
    raws = (
        raw for chunk in WORD_SPLIT_RE.split(text) for raw in CLAUSE_ITEM_RE.findall(chunk)
    )
    for raw in raws:
        if raw in CLAUSE_PUNCT:
            items.append(raw)
            continue
        word = normalize_word(raw)
        if word:
            items.append(word)
    return items


def _split_on(items: List[str], separator: str) -> List[List[str]]:
    segments: List[List[str]] = [[]]
    for item in items:
        if item == separator:
            segments.append([])
        else:
            segments[-1].append(item)
    return segments


def _words_until_break(items: List[str], start: int) -> List[str]:
    words: List[str] = []
    for item in items[start:]:
        if item in CLAUSE_PUNCT or item in COORDINATING_CONJUNCTIONS:
            break
        words.append(item)
    return words


def _joins_without_comma(conjunction: str, clause_words: int, following: List[str]) -> bool:
    return (
        conjunction != "for"
        and clause_words >= 2
        and len(following) >= 2
        and following[0] in SUBJECT_PRONOUNS
    )


def count_clauses(text: str) -> tuple[int, int]:
    """
    Count (independent, dependent) clauses in a sentence.

    Every non-empty semicolon segment is an independent clause. Inside a
    segment, a coordinating conjunction opens another independent clause
    when it follows a comma and is followed by at least two words. Without a
    comma it needs a subject pronoun plus at least one more word after it and
    at least two words of the current clause before it, so compound subjects
    ("John and I went") stay simple. "for" (usually a preposition) never opens
    a clause without a comma. Each subordinating conjunction or
    relative pronoun opens a dependent clause, except a sentence-initial
    "that" (a demonstrative) and a wh-word that opens a question.
    """
    items = _clause_items(text)
    is_question = text.rstrip().rstrip("\"')]}").endswith("?")
    independent = 0
    dependent = 0
    first_word_seen = False

    for segment in _split_on(items, ";"):
        if not any(item not in CLAUSE_PUNCT for item in segment):
            continue
        independent += 1
        clause_words = 0
        for index, item in enumerate(segment):
            if item in CLAUSE_PUNCT:
                continue
            sentence_initial = not first_word_seen
            first_word_seen = True
            if item in COORDINATING_CONJUNCTIONS and clause_words > 0:
                following = _words_until_break(segment, index + 1)
                after_comma = index > 0 and segment[index - 1] == ","
                if (after_comma and len(following) >= 2) or _joins_without_comma(
                    item, clause_words, following
                ):
                    independent += 1
                    clause_words = 0
                    continue
            elif item in SUBORDINATING_CONJUNCTIONS or item in RELATIVE_PRONOUNS:
                if sentence_initial and item == "that":
                    pass
                elif sentence_initial and is_question and item in QUESTION_WORDS:
                    pass
                else:
                    dependent += 1
            clause_words += 1

    return max(1, independent), dependent


def classify_structure(independent: int, dependent: int) -> Structure:
    if independent >= 2:
        return Structure.COMPOUND_COMPLEX if dependent else Structure.COMPOUND
    return Structure.COMPLEX if dependent else Structure.SIMPLE


def classify_sentence(
    sentence: Sentence,
    lists: ReferenceLists | None = None,
    passive_window: int = DEFAULT_PASSIVE_WINDOW,
) -> SentenceStyle:
    if lists is None:
        lists = default_reference_lists()
    independent, dependent = count_clauses(sentence.text)
    passive = is_passive(sentence.tokens, lists.irregular_participles, passive_window)
    return SentenceStyle(
        independent_clauses=independent,
        dependent_clauses=dependent,
        voice=Voice.PASSIVE if passive else Voice.ACTIVE,
        structure=classify_structure(independent, dependent),
    )


def count_weak_words(tokens: Iterable[Token]) -> int:
    """Weak-list words plus "-ly" adverbs, each token counted once."""
    return sum(1 for token in tokens if token.is_weak_word or token.is_adverb)


def compute_style_metrics(
    paragraphs: List[Paragraph],
    lists: ReferenceLists | None = None,
    passive_window: int = DEFAULT_PASSIVE_WINDOW,
) -> StyleMetrics:
    if lists is None:
        lists = default_reference_lists()
    styles: List[SentenceStyle] = []
    weak_words = 0
    for paragraph in paragraphs:
        for sentence in paragraph.sentences:
            styles.append(classify_sentence(sentence, lists, passive_window))
            weak_words += count_weak_words(sentence.tokens)

    structure_counts = {structure: 0 for structure in Structure}
    for style in styles:
        structure_counts[style.structure] += 1

    return StyleMetrics(
        passive_voice_count=sum(1 for style in styles if style.voice is Voice.PASSIVE),
        sentence_structure=SentenceStructureCounts(
            simple=structure_counts[Structure.SIMPLE],
            compound=structure_counts[Structure.COMPOUND],
            complex=structure_counts[Structure.COMPLEX],
            compound_complex=structure_counts[Structure.COMPOUND_COMPLEX],
        ),
        weak_word_count=weak_words,
        sentence_styles=tuple(styles),
    )
