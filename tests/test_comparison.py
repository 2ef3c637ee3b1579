import json

import pytest

from revision_metrics.comparison import (
    DELTA_METRICS,
    AnalysisComparison,
    compare_texts,
    format_delta,
    percent_change,
)


@pytest.mark.parametrize(
    ("original", "revised", "expected"),
    [
        (10, 15, 50.0),
        (20, 10, -50.0),
        (4, 4, 0.0),
        (0, 7, 100.0),
        (0, 0, 0.0),
        (-10, -5, -50.0),
    ],
)
def test_percent_change(original, revised, expected):
    assert percent_change(original, revised) == pytest.approx(expected)


@pytest.mark.parametrize(
    ("value", "expected"),
    [(12.5, "+12.5%"), (-3.0, "-3.0%"), (0.0, "+0.0%"), (-0.0, "+0.0%"), (100, "+100.0%")],
)
def test_format_delta(value, expected):
    assert format_delta(value) == expected


def test_compare_texts_reports_progress_in_order():
    events = []
    comparison = compare_texts(
        "One two.",
        "One two three four.",
        progress=lambda percent, message: events.append((percent, message)),
    )

    assert [percent for percent, _ in events] == [0, 50, 100]
    assert isinstance(comparison, AnalysisComparison)
    assert comparison.original.word_count == 2
    assert comparison.revised.word_count == 4


def test_deltas_follow_presentation_order():
    comparison = compare_texts("One two.", "One two three four.")
    deltas = comparison.deltas()

    assert list(deltas) == list(DELTA_METRICS)
    assert deltas["Total Word Count"] == pytest.approx(100.0)
    assert deltas["Passive Voice Sentences"] == 0.0


def test_identical_texts_have_no_change():
    text = "The report was written quickly. We read it twice."
    deltas = compare_texts(text, text).deltas()

    assert all(value == 0.0 for value in deltas.values())


def test_comparison_serializes_to_json():
    comparison = compare_texts("", "A new sentence appears.")
    payload = json.loads(json.dumps(comparison.to_dict()))

    assert payload["original"]["word_count"] == 0
    assert payload["revised"]["word_count"] == 4
    assert payload["deltas"]["Total Word Count"] == 100.0
