"""TimeChunk field accessors.

Each accessor takes a TimeChunk (returning a scalar) or a sequence of
TimeChunks (returning a list). NA chunks give None. Anything else raises
ChunkTypeError.

Examples:
    >>> x = parse(["fa26", "sp27"], calendar="us_semester")
    >>> chunk_name(x)
    ['Fall', 'Spring']
    >>> chunk_ay(x)
    ['2026-27', '2026-27']
"""

from datetime import date
from typing import Any, Callable, Optional

from timechunks.chunks.chunkidentity import TimeChunk, as_chunk_list, is_listlike
from timechunks.errors import ChunkTypeError


def is_time_chunk(x: Any) -> bool:
    """True if x is a TimeChunk (including the NA chunk)."""
    return isinstance(x, TimeChunk)


def _accessor(x: Any, getter: Callable[[TimeChunk], Any], label: str):
    if isinstance(x, TimeChunk):
        return getter(x)
    if is_listlike(x) and not isinstance(x, str):
        return [getter(c) for c in as_chunk_list(x, ChunkTypeError)]
    raise ChunkTypeError(
        f"{label}() expects a TimeChunk or a sequence of TimeChunks, not {type(x).__name__}"
    )


def chunk_name(x) -> Optional[str]:
    """Period display name, e.g. "Fall"."""
    return _accessor(x, lambda c: c.name, "chunk_name")


def chunk_code(x) -> Optional[str]:
    """Period short code, e.g. "fa"."""
    return _accessor(x, lambda c: c.code, "chunk_code")


def chunk_year(x) -> Optional[int]:
    """Calendar year of the start date."""
    return _accessor(x, lambda c: c.year, "chunk_year")


def chunk_ay(x) -> Optional[str]:
    """Academic/fiscal-year label, e.g. "2026-27"."""
    return _accessor(x, lambda c: c.ay, "chunk_ay")


def chunk_index(x) -> Optional[int]:
    """1-based position within the calendar cycle."""
    return _accessor(x, lambda c: c.period_index, "chunk_index")


def start_date(x) -> Optional[date]:
    return _accessor(x, lambda c: c.start_date, "start_date")


def end_date(x) -> Optional[date]:
    return _accessor(x, lambda c: c.end_date, "end_date")


def mid_date(x) -> Optional[date]:
    """Midpoint between start and end date, truncated to a whole day."""
    return _accessor(x, lambda c: c.mid_date, "mid_date")


__all__ = [
    "is_time_chunk",
    "chunk_name",
    "chunk_code",
    "chunk_year",
    "chunk_ay",
    "chunk_index",
    "start_date",
    "end_date",
    "mid_date",
]
