"""Chunk text normalization and pattern helpers.

Patterns recognized by the parser:
  - composite key: "2026-27_1_08_Fall" (or "2026_1_02_Semester 1")
  - YYYYM stamp: "20268", "202611"
  - text: "Fall 2026", "2026 Fall"
  - code: "fa26"
"""

import re
from typing import Optional

from timechunks.utils.normalize import normalize_text

# Composite key: AY label (or bare year), index, start month, name
KEY_PATTERN = re.compile(r"^(\d{4})(?:-(\d{2}))?_(\d+)_(\d{2})_(.+)$")
KEY_PREFIX = re.compile(r"^\d{4}(-\d{2})?_\d+_\d{2}_")

YYYYM_PATTERN = re.compile(r"^\d{5,6}$")

YEAR_RUN = re.compile(r"\d{4}")
NAME_YEAR = re.compile(r"^(?P<name>.+?)\s+(?P<year>\d{4})$")
YEAR_NAME = re.compile(r"^(?P<year>\d{4})\s+(?P<name>.+)$")

TWO_DIGITS = re.compile(r"^\d{2}$")


def clean_chunk_text(s: str) -> str:
    """Normalize raw chunk text before dispatch.

    Examples:
        >>> clean_chunk_text("  Fall\\t2026 ")
        'Fall 2026'
    """
    return normalize_text(s)


def two_digit_year(yy: int) -> int:
    """
    Expand a two-digit year: 00-49 -> 2000-2049, 50-99 -> 1950-1999.

    Examples:
        >>> two_digit_year(26)
        2026
        >>> two_digit_year(99)
        1999
    """
    if not 0 <= yy <= 99:
        raise ValueError(f"two-digit year out of range: {yy}")
    return 2000 + yy if yy <= 49 else 1900 + yy


def split_yyyym(digits: str) -> tuple[int, int]:
    """
    Split a 5- or 6-digit YYYYM stamp into (year, month).

    Examples:
        >>> split_yyyym("20268")
        (2026, 8)
        >>> split_yyyym("202611")
        (2026, 11)
    """
    return int(digits[:4]), int(digits[4:])


def split_name_year(s: str) -> Optional[tuple[str, int]]:
    """
    Split "Name Year" or "Year Name" text.

    Examples:
        >>> split_name_year("Semester 1 2026")
        ('Semester 1', 2026)
        >>> split_name_year("2026 Fall")
        ('Fall', 2026)
        >>> split_name_year("Fall") is None
        True
    """
    m = NAME_YEAR.match(s)
    if m and m.group("name").strip():
        return m.group("name").strip(), int(m.group("year"))
    m = YEAR_NAME.match(s)
    if m and m.group("name").strip():
        return m.group("name").strip(), int(m.group("year"))
    return None


__all__ = [
    "KEY_PATTERN",
    "KEY_PREFIX",
    "YYYYM_PATTERN",
    "YEAR_RUN",
    "TWO_DIGITS",
    "clean_chunk_text",
    "two_digit_year",
    "split_yyyym",
    "split_name_year",
]
