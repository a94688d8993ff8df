"""Shared text normalization utilities.

This module provides the normalization applied to period names, codes and
free-form chunk text before matching.
"""

import re
import unicodedata


def normalize_text(s: str) -> str:
    """Normalize chunk text for consistent parsing, preserving case.

    Transformations:
      1. Unicode normalization (NFC)
      2. Normalize dashes (—, –, −, ‒ → -)
      3. Collapse whitespace and strip

    Args:
        s: Raw text (e.g., "  Fall   2026 ", "2026–27_1_08_Fall")

    Returns:
        Normalized text

    Examples:
        >>> normalize_text("  Fall   2026 ")
        'Fall 2026'

        >>> normalize_text("2026–27_1_08_Fall")
        '2026-27_1_08_Fall'
    """
    if not s:
        return ""

    s = unicodedata.normalize("NFC", s)

    # em dash, en dash, minus sign, figure dash
    for dash in ("—", "–", "−", "‒"):
        s = s.replace(dash, "-")

    s = re.sub(r"\s+", " ", s)
    return s.strip()


def normalize_name(s: str) -> str:
    """Case-insensitive matching key for period names and codes.

    Args:
        s: Period name or code

    Returns:
        Normalized, casefolded string

    Examples:
        >>> normalize_name("Semester  1")
        'semester 1'

        >>> normalize_name("FA")
        'fa'
    """
    return normalize_text(s).casefold()


__all__ = [
    "normalize_text",
    "normalize_name",
]
