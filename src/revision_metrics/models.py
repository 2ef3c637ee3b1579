from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any


class Voice(str, Enum):
    ACTIVE = "active"
    PASSIVE = "passive"


class Structure(str, Enum):
    SIMPLE = "simple"
    COMPOUND = "compound"
    COMPLEX = "complex"
    COMPOUND_COMPLEX = "compound_complex"


@dataclass(frozen=True, slots=True)
class Token:
    """A normalized word and the flags derived from the reference lists."""

    text: str
    syllables: int
    is_content_word: bool
    is_stopword: bool
    is_weak_word: bool
    is_adverb: bool


@dataclass(frozen=True, slots=True)
class Sentence:
    """Ordered tokens of one sentence plus the raw text they came from."""

    text: str
    tokens: tuple[Token, ...]


@dataclass(frozen=True, slots=True)
class Paragraph:
    """A blank-line separated block of sentences."""

    sentences: tuple[Sentence, ...]


@dataclass(frozen=True, slots=True)
class SentenceStyle:
    """Heuristic clause analysis for a single sentence."""

    independent_clauses: int
    dependent_clauses: int
    voice: Voice
    structure: Structure

    @property
    def clause_count(self) -> int:
        return self.independent_clauses + self.dependent_clauses


@dataclass(frozen=True, slots=True)
class WordCount:
    word: str
    count: int


@dataclass(frozen=True, slots=True)
class SentenceStructureCounts:
    simple: int = 0
    compound: int = 0
    complex: int = 0
    compound_complex: int = 0

    @property
    def total(self) -> int:
        return self.simple + self.compound + self.complex + self.compound_complex


@dataclass(frozen=True, slots=True)
class ReadabilityScores:
    flesch_reading_ease: float = 0.0
    flesch_kincaid_grade: float = 0.0
    gunning_fog: float = 0.0
    smog_index: float = 0.0
    dale_chall: float = 0.0


@dataclass(frozen=True, slots=True)
class LexicalMetrics:
    lexical_density: float = 0.0
    lexical_diversity: float = 0.0
    word_frequency: tuple[WordCount, ...] = ()


@dataclass(frozen=True, slots=True)
class StyleMetrics:
    passive_voice_count: int = 0
    sentence_structure: SentenceStructureCounts = field(
        default_factory=SentenceStructureCounts
    )
    weak_word_count: int = 0
    sentence_styles: tuple[SentenceStyle, ...] = ()


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Metrics computed for one input text."""

    word_count: int
    paragraph_count: int
    sentence_count: int
    avg_sentence_length: float
    flesch_reading_ease: float
    flesch_kincaid_grade: float
    gunning_fog: float
    smog_index: float
    dale_chall: float
    lexical_density: float
    lexical_diversity: float
    word_frequency: tuple[WordCount, ...]
    passive_voice_count: int
    sentence_structure: SentenceStructureCounts
    weak_word_count: int

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dictionary representation."""
        return asdict(self)
