"""Chunks module: TimeChunk values, parsing, arithmetic and formatting.

Public API:
    parse(value, calendar=None) -> TimeChunk | list[TimeChunk]
        Parse codes, names, YYYYM stamps and composite keys

    resolve(period_index, year, calendar=None) -> TimeChunk
        Concrete occurrence of a period in a calendar year

    shift / distance / sequence
        Period arithmetic across year boundaries

    format_chunk(x, style="name") -> str | list[str]
        Render chunks as codes, names, AY labels, keys or templates

Examples:
    >>> from timechunks.chunks import parse, sequence
    >>> fa26 = parse("fa26", calendar="us_semester")
    >>> [str(c) for c in sequence(fa26, fa26 + 3, calendar="us_semester")]
    ['Fall 2026', 'Spring 2027', 'Summer 2027', 'Fall 2027']
"""

from timechunks.chunks.chunkidentity import (
    TimeChunk,
    resolve,
)
from timechunks.chunks.chunkindex import (
    to_global_index,
    from_global_index,
    shift,
    distance,
    sequence,
)
from timechunks.chunks.chunkparse import (
    parse,
    time_chunk,
    parse_code,
    parse_text,
    parse_numeric,
    parse_key,
    resolve_month_to_period,
)
from timechunks.chunks.chunkapi import (
    is_time_chunk,
    chunk_name,
    chunk_code,
    chunk_year,
    chunk_ay,
    chunk_index,
    start_date,
    end_date,
    mid_date,
)
from timechunks.chunks.chunkformat import (
    format_chunk,
    format_chunk_display,
)

__all__ = [
    "TimeChunk",
    "resolve",
    "to_global_index",
    "from_global_index",
    "shift",
    "distance",
    "sequence",
    "parse",
    "time_chunk",
    "parse_code",
    "parse_text",
    "parse_numeric",
    "parse_key",
    "resolve_month_to_period",
    "is_time_chunk",
    "chunk_name",
    "chunk_code",
    "chunk_year",
    "chunk_ay",
    "chunk_index",
    "start_date",
    "end_date",
    "mid_date",
    "format_chunk",
    "format_chunk_display",
]
