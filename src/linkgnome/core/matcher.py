"""Candidate selection and query narrowing for catalog lookups.

Uses rapidfuzz's Levenshtein distance to pick the closest title among
several catalog candidates, and produces progressively shorter query
variants for titles that return nothing.
"""

import math
from typing import List, Optional, Protocol, Sequence, TypeVar

from rapidfuzz.distance import Levenshtein


class _Dated(Protocol):
    @property
    def year(self) -> Optional[int]: ...


D = TypeVar("D", bound=_Dated)


def best_match_index(query: str, candidates: Sequence[str]) -> int:
    """Return the index of the candidate closest to *query*.

    Distance is the Levenshtein edit distance, compared case-insensitively.
    Ties go to the candidate listed first, so the result only depends on the
    inputs.

    Raises:
        ValueError: If *candidates* is empty.
    """
    if not candidates:
        raise ValueError("no candidates to match against")
    best, best_distance = 0, math.inf
    for i, candidate in enumerate(candidates):
        distance = Levenshtein.distance(query, candidate, processor=str.casefold)
        if distance < best_distance:
            best, best_distance = i, distance
    return best


def filter_by_year(candidates: Sequence[D], year: Optional[int], tolerance: int = 1) -> List[D]:
    """Keep candidates released in ``[year, year + tolerance]``.

    Release dates in catalogs tend to trail the year in file names (festival
    vs. theatrical release), hence the one-sided window. With no *year* every
    candidate is kept.
    """
    if year is None:
        return list(candidates)
    return [c for c in candidates if c.year is not None and 0 <= c.year - year <= tolerance]


def trailing_word_variants(title: str) -> List[str]:
    """Return *title* followed by versions with trailing words removed.

    At most half the words (rounded up) are dropped, and a variant is never
    empty.

    >>> trailing_word_variants("the big short cut")
    ['the big short cut', 'the big short', 'the big']
    """
    words = title.split()
    variants: List[str] = []
    for trim in range(math.ceil(len(words) / 2) + 1):
        kept = words[: len(words) - trim]
        if kept:
            variants.append(" ".join(kept))
    return variants or [title]


def budget_word_variants(title: str) -> List[str]:
    """Return *title* followed by one-word-shorter retries.

    The retry budget is one per three words in the original title.

    >>> budget_word_variants("a b c d e f")
    ['a b c d e f', 'a b c d e', 'a b c d']
    """
    words = title.split()
    variants = [title]
    for trim in range(1, len(words) // 3 + 1):
        kept = words[: len(words) - trim]
        if not kept:
            break
        variants.append(" ".join(kept))
    return variants
