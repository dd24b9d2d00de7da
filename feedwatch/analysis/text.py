"""Word-boundary text search shared by ticker matching and keyword scoring.

A term matches when it is not preceded or followed by a letter or digit,
so "A" is found in "shares of A rose" but not in "CAT", and "loss" is not
found in "lossless". Matching is case-insensitive.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Pattern

_BOUNDARY_BEFORE = r"(?<![^\W_])"
_BOUNDARY_AFTER = r"(?![^\W_])"


@lru_cache(maxsize=4096)
def _term_pattern(term: str) -> Pattern[str]:
    """Compile the boundary-delimited pattern for a normalized term."""
    return re.compile(
        _BOUNDARY_BEFORE
        + r"\s+".join(re.escape(word) for word in term.split(" "))
        + _BOUNDARY_AFTER,
        re.IGNORECASE,
    )


def _normalize_term(term: str) -> str:
    return " ".join(term.split())


def count_term(text: str, term: str) -> int:
    """Count non-overlapping whole-word occurrences of ``term`` in ``text``.

    Args:
        text: Text to search.
        term: Word or phrase to look for. Words of a phrase may be
            separated by any run of whitespace in the text.

    Returns:
        Number of occurrences; 0 for empty text or a blank term.
    """
    term = _normalize_term(term)
    if not text or not term:
        return 0
    return sum(1 for _ in _term_pattern(term).finditer(text))


def contains_term(text: str, term: str) -> bool:
    """Check whether ``term`` occurs in ``text`` as a whole word."""
    term = _normalize_term(term)
    if not text or not term:
        return False
    return _term_pattern(term).search(text) is not None


def contains_substring(text: str, needle: str) -> bool:
    """Case-insensitive substring check; a blank needle never matches."""
    needle = needle.strip()
    if not text or not needle:
        return False
    return needle.casefold() in text.casefold()
