import math
from dataclasses import fields

import pytest

from revision_metrics.analysis import aggregate, analyze_text
from revision_metrics.config import RevisionMetricsConfig
from revision_metrics.models import AnalysisResult
from revision_metrics.tokenization import segment

MESSY_TEXTS = [
    "",
    "   \n\n  ",
    "!!! ??? ... ;;; ,,,",
    "no punctuation at all just words",
    "Mr. Dr. etc. e.g. i.e. 3.14.15 ... ?!",
    "Hello\x00world\ttabs​and zero-width. Ünïcödé wörds ārē fine!",
    "One.\n\n\n\nTwo!\n\nThree? Four... five",
    "I ran, and she jumped because it was fun; they stayed, but we left.",
]


def _numeric_values(result: AnalysisResult):
    for field in fields(result):
        value = getattr(result, field.name)
        if isinstance(value, (int, float)):
            yield field.name, value


def test_scenario_word_and_sentence_counts():
    result = analyze_text("The cat sat on the mat. The dog ran quickly.")

    assert result.word_count == 10
    assert result.sentence_count == 2
    assert result.paragraph_count == 1
    assert result.avg_sentence_length == pytest.approx(5.0)


def test_scenario_passive_and_active():
    passive = analyze_text("The ball was thrown by John.")
    active = analyze_text("John threw the ball.")

    assert passive.sentence_count == 1
    assert passive.passive_voice_count == 1
    assert active.sentence_count == 1
    assert active.passive_voice_count == 0


def test_scenario_weak_words():
    assert analyze_text("This is very really just fine.").weak_word_count >= 3


def test_scenario_compound_complex_sentence():
    result = analyze_text("I ran, and she jumped because it was fun.")
    assert result.sentence_structure.compound_complex == 1
    assert result.sentence_structure.total == 1


def test_empty_input_yields_zeroes():
    result = analyze_text("")

    assert result.word_count == 0
    assert result.sentence_count == 0
    assert result.paragraph_count == 0
    assert result.word_frequency == ()
    for name, value in _numeric_values(result):
        assert value == 0, name


@pytest.mark.parametrize("text", MESSY_TEXTS)
def test_invariants_hold_for_arbitrary_text(text: str):
    result = analyze_text(text)

    assert result.sentence_structure.total == result.sentence_count
    assert sum(entry.count for entry in result.word_frequency) <= result.word_count
    for name, value in _numeric_values(result):
        assert math.isfinite(value), name
    if result.sentence_count:
        assert result.avg_sentence_length == pytest.approx(
            result.word_count / result.sentence_count
        )
    counts = [entry.count for entry in result.word_frequency]
    assert counts == sorted(counts, reverse=True)


@pytest.mark.parametrize("text", MESSY_TEXTS)
def test_analysis_is_deterministic(text: str):
    assert analyze_text(text) == analyze_text(text)


def test_aggregate_matches_analyze_text():
    text = "First paragraph. It has two sentences.\n\nSecond paragraph here."
    result = aggregate(segment(text))

    assert result == analyze_text(text)
    assert result.paragraph_count == 2
    assert result.sentence_count == 3


def test_top_n_words_is_configurable():
    text = "alpha beta gamma delta alpha beta alpha"
    result = analyze_text(text, RevisionMetricsConfig(top_n_words=2))

    assert [entry.word for entry in result.word_frequency] == ["alpha", "beta"]


def test_result_is_immutable_and_serializable():
    result = analyze_text("The dog barked loudly.")
    with pytest.raises(AttributeError):
        result.word_count = 99  # type: ignore[misc]

    payload = result.to_dict()
    assert payload["word_count"] == 4
    assert payload["sentence_structure"]["simple"] == 1
    assert payload["word_frequency"][0] == {"word": "dog", "count": 1}
