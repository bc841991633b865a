"""Tests for linkgnome.core.matcher."""

from dataclasses import dataclass
from typing import Optional

import pytest

from linkgnome.core.matcher import (
    best_match_index,
    budget_word_variants,
    filter_by_year,
    trailing_word_variants,
)


@dataclass
class Candidate:
    title: str
    year: Optional[int]


def test_best_match_index_picks_smallest_distance() -> None:
    candidates = ["Foobar Returns", "Foobar", "Foo"]
    assert best_match_index("Foobar", candidates) == 1


def test_best_match_index_ignores_case() -> None:
    assert best_match_index("the matrix", ["The Matrix Reloaded", "THE MATRIX"]) == 1


def test_best_match_index_ties_go_to_first_candidate() -> None:
    candidates = ["Fooba", "Foobarr", "Foobaz"]
    assert best_match_index("Foobar", candidates) == 0
    # Deterministic across calls.
    assert {best_match_index("Foobar", candidates) for _ in range(10)} == {0}


def test_best_match_index_rejects_empty_candidates() -> None:
    with pytest.raises(ValueError):
        best_match_index("Foobar", [])


def test_filter_by_year_allows_one_year_of_skew() -> None:
    candidates = [
        Candidate("A", 1998),
        Candidate("B", 1999),
        Candidate("C", 2000),
        Candidate("D", 2001),
        Candidate("E", None),
    ]
    kept = filter_by_year(candidates, 1999)
    assert [c.title for c in kept] == ["B", "C"]


def test_filter_by_year_without_year_keeps_everything() -> None:
    candidates = [Candidate("A", 1998), Candidate("B", None)]
    assert filter_by_year(candidates, None) == candidates


def test_trailing_word_variants() -> None:
    assert trailing_word_variants("the big short cut") == [
        "the big short cut",
        "the big short",
        "the big",
    ]
    assert trailing_word_variants("one two three") == ["one two three", "one two", "one"]
    assert trailing_word_variants("single") == ["single"]


def test_budget_word_variants() -> None:
    assert budget_word_variants("a b c d e f") == ["a b c d e f", "a b c d e", "a b c d"]
    assert budget_word_variants("two words") == ["two words"]
    assert budget_word_variants("x y z") == ["x y z", "x y"]
