"""
Levenshtein distance, the similarity primitive behind fuzzy title matching.

Backed by rapidfuzz, which computes the same insert/delete/substitute table
as the textbook dynamic programme but bails out once a cutoff is exceeded.
"""

from rapidfuzz.distance import Levenshtein


def edit_distance(a: str, b: str, max_distance: int | None = None) -> int:
    """Return the edit distance between ``a`` and ``b``.

    With ``max_distance`` set, any distance above it is reported as
    ``max_distance + 1``.
    """
    return Levenshtein.distance(a, b, score_cutoff=max_distance)
