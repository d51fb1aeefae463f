"""Tests for edit-distance similarity scoring."""

import pytest

from utils.similarity import levenshtein_distance, similarity


@pytest.mark.parametrize(
    ("a", "b", "expected"),
    [
        ("kitten", "sitting", 3),
        ("flaw", "lawn", 2),
        ("", "abc", 3),
        ("abc", "", 3),
        ("same", "same", 0),
        ("ab", "ba", 2),  # transposition costs two edits
    ],
)
def test_levenshtein_distance_known_values(a, b, expected):
    assert levenshtein_distance(a, b) == expected


def test_levenshtein_distance_ignores_case():
    assert levenshtein_distance("CAT.PNG", "cat.png") == 0


def test_similarity_identity():
    for text in ("x", "cat.png", "Some interesting quotes"):
        assert similarity(text, text) == 1.0


@pytest.mark.parametrize(
    ("a", "b"),
    [("ct", "cat.png"), ("kitten", "sitting"), ("", "dog.png"), ("Quote", "quotation.jpg")],
)
def test_similarity_is_symmetric(a, b):
    assert similarity(a, b) == similarity(b, a)


def test_similarity_normalizes_by_longest_string():
    # "ct" -> "cat.png": insert "a", ".", "p", "n", "g" = 5 edits over 7 chars
    assert similarity("ct", "cat.png") == pytest.approx(1 - 5 / 7)


def test_similarity_of_unrelated_strings_is_zero():
    assert similarity("abc", "xyz") == 0.0


def test_similarity_both_empty_returns_one():
    assert similarity("", "") == 1.0


def test_similarity_stays_in_unit_interval():
    for a, b in [("a", "bbbbbbbb"), ("quote", "QUOTE"), ("İ", "i")]:
        score = similarity(a, b)
        assert 0.0 <= score <= 1.0
