"""
Read-only linguistic reference lists shared by every analysis in the process.

The bundled lists live in ``revision_metrics/data``. Each one can be swapped
for a custom file through :class:`~revision_metrics.config.RevisionMetricsConfig`;
doing so changes the scores without touching the engine logic.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Iterable, Mapping

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from .config import RevisionMetricsConfig

DATA_PACKAGE = "revision_metrics"
DATA_DIR = "data"

WORD_LIST_FILES = {
    "stopwords": "stopwords.txt",
    "familiar_words": "familiar_words.txt",
    "weak_words": "weak_words.txt",
    "ly_exclusions": "ly_exclusions.txt",
    "irregular_participles": "irregular_participles.txt",
    "abbreviations": "abbreviations.txt",
    "complex_word_exceptions": "complex_word_exceptions.txt",
}
SYLLABLE_EXCEPTIONS_FILE = "syllable_exceptions.tsv"


@dataclass(frozen=True, slots=True)
class ReferenceLists:
    stopwords: frozenset[str]
    familiar_words: frozenset[str]
    weak_words: frozenset[str]
    ly_exclusions: frozenset[str]
    irregular_participles: frozenset[str]
    abbreviations: frozenset[str]
    complex_word_exceptions: frozenset[str]
    syllable_exceptions: Mapping[str, int]


def parse_word_list(lines: Iterable[str]) -> frozenset[str]:
    """Parse one-word-per-line content, skipping blanks and ``#`` comments."""
    words: set[str] = set()
    for line in lines:
        entry = line.strip()
        if not entry or entry.startswith("#"):
            continue
        words.add(entry.casefold())
    return frozenset(words)


def parse_syllable_table(contents: str) -> Mapping[str, int]:
    """Parse a ``word<TAB>syllables`` TSV into a read-only mapping."""
    table: dict[str, int] = {}
    reader = csv.DictReader(io.StringIO(contents), delimiter="\t")
    for row in reader:
        word = (row.get("word") or "").strip().casefold()
        value = (row.get("syllables") or "").strip()
        if not word or not value:
            continue
        table[word] = max(1, int(value))
    return MappingProxyType(table)


def _read_bundled(filename: str) -> str:
    resource = resources.files(DATA_PACKAGE).joinpath(DATA_DIR).joinpath(filename)
    return resource.read_text(encoding="utf-8")


def _read_override(name: str, path: str | Path) -> str:
    target = Path(path)
    if not target.exists():
        raise FileNotFoundError(f"Reference list '{name}' not found at {target}.")
    return target.read_text(encoding="utf-8")


@lru_cache(maxsize=1)
def default_reference_lists() -> ReferenceLists:
    """Return the bundled reference lists, loaded once per process."""
    return _build_reference_lists(())


def load_reference_lists(config: "RevisionMetricsConfig | None" = None) -> ReferenceLists:
    """
    Resolve the reference lists for a configuration.

    Lists without an override path come from the bundled data files. Custom
    combinations are cached too, so repeated analyses share one instance.
    """
    if config is None:
        return default_reference_lists()
    overrides = tuple(
        (name, str(path))
        for name, path in (
            (name, getattr(config, f"{name}_path"))
            for name in (*WORD_LIST_FILES, "syllable_exceptions")
        )
        if path
    )
    if not overrides:
        return default_reference_lists()
    return _cached_reference_lists(overrides)


@lru_cache(maxsize=16)
def _cached_reference_lists(overrides: tuple[tuple[str, str], ...]) -> ReferenceLists:
    return _build_reference_lists(overrides)


def _build_reference_lists(overrides: tuple[tuple[str, str], ...]) -> ReferenceLists:
    override_map = dict(overrides)
    word_lists: dict[str, frozenset[str]] = {}
    for name, filename in WORD_LIST_FILES.items():
        if name in override_map:
            contents = _read_override(name, override_map[name])
        else:
            contents = _read_bundled(filename)
        word_lists[name] = parse_word_list(contents.splitlines())

    if "syllable_exceptions" in override_map:
        syllable_contents = _read_override(
            "syllable_exceptions", override_map["syllable_exceptions"]
        )
    else:
        syllable_contents = _read_bundled(SYLLABLE_EXCEPTIONS_FILE)

    return ReferenceLists(
        syllable_exceptions=parse_syllable_table(syllable_contents),
        **word_lists,
    )
