import pytest

from revision_metrics.syllables import count_syllables


@pytest.mark.parametrize(
    ("word", "expected"),
    [
        ("the", 1),
        ("cat", 1),
        ("make", 1),
        ("yes", 1),
        ("free", 1),
        ("quickly", 2),
        ("table", 2),
        ("agree", 2),
        ("river", 2),
        ("beautiful", 3),
        ("university", 5),
    ],
)
def test_vowel_group_heuristic(word: str, expected: int):
    assert count_syllables(word) == expected


def test_exception_table_overrides_heuristic():
    assert count_syllables("every") == 2
    assert count_syllables("science") == 2
    assert count_syllables("idea") == 3


def test_custom_exception_table():
    assert count_syllables("fire", {"fire": 2}) == 2
    assert count_syllables("fire", {}) == 1


def test_hyphenated_words_sum_their_parts():
    assert count_syllables("well-known") == 2
    assert count_syllables("mother-in-law") == 4


def test_floor_of_one_syllable():
    assert count_syllables("") == 1
    assert count_syllables("2024") == 1
    assert count_syllables("hmm") == 1
