"""Shared name matching utilities.

Fuzzy matching is used only to enrich error messages ("Did you mean ...?");
resolution itself is always exact.
"""

from __future__ import annotations
from typing import Iterable, Optional

try:
    from rapidfuzz import fuzz, process
except ImportError as e:
    raise ImportError("rapidfuzz not installed. pip install rapidfuzz") from e

from timechunks.utils.normalize import normalize_name


def topk_matches(
    query: str,
    choices: Iterable[str],
    k: int = 3,
    threshold: int = 70,
) -> list[tuple[str, float]]:
    """Return top-K choices closest to query with scores.

    Uses RapidFuzz WRatio on normalized strings.

    Args:
        query: Raw query text
        choices: Candidate strings (e.g., configured period names)
        k: Number of candidates to return (default: 3)
        threshold: Minimum score (0-100) for a candidate to be returned

    Returns:
        List of (choice, score) tuples, ordered by descending score

    Examples:
        >>> [name for name, _ in topk_matches("Fal", ["Fall", "Spring", "Summer"])]
        ['Fall']
    """
    choices = list(choices)
    if not query or not choices:
        return []

    results = process.extract(
        normalize_name(query),
        [normalize_name(c) for c in choices],
        scorer=fuzz.WRatio,
        limit=k,
        score_cutoff=threshold,
    )
    # process.extract returns (match, score, index) for list choices
    return [(choices[idx], float(score)) for _, score, idx in results]


def suggest_match(
    query: str,
    choices: Iterable[str],
    threshold: int = 70,
) -> Optional[str]:
    """Return the single closest choice, or None if nothing is close enough.

    Examples:
        >>> suggest_match("Sprng", ["Fall", "Spring", "Summer"])
        'Spring'

        >>> suggest_match("xyz", ["Fall", "Spring", "Summer"]) is None
        True
    """
    matches = topk_matches(query, choices, k=1, threshold=threshold)
    return matches[0][0] if matches else None


def did_you_mean(query: str, choices: Iterable[str]) -> str:
    """Format a "Did you mean ...?" hint, or an empty string."""
    suggestion = suggest_match(query, choices)
    return f" Did you mean '{suggestion}'?" if suggestion else ""


__all__ = [
    "topk_matches",
    "suggest_match",
    "did_you_mean",
]
