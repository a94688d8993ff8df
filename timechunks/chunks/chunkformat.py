"""Format TimeChunks as strings.

Named styles:
  - "code"     -> "fa26"
  - "name"     -> "Fall 2026"
  - "ay"       -> "2026-27"
  - "key"      -> "2026-27_1_08_Fall" (sortable; the leading year parses back as the calendar year)
  - "iso_date" -> "2026-08-23" (start date)

Any style containing "{" is a ``str.format`` template over the fields name,
code, year, ay, chunk_index, start_date, end_date and mid_date; dates stay
``date`` objects so "{start_date:%b %d}" works.
"""

from typing import Any, Optional

from timechunks.calendar.calendarapi import current_calendar, resolve_calendar
from timechunks.chunks.chunkidentity import TimeChunk, as_chunk_list, is_listlike
from timechunks.errors import ChunkTypeError, UnknownStyleError

STYLES = ("code", "name", "ay", "key", "iso_date")


def _format_one(chunk: TimeChunk, style: str) -> Optional[str]:
    if chunk.is_na:
        return None

    if "{" in style:
        try:
            return style.format(
                name=chunk.name,
                code=chunk.code,
                year=chunk.year,
                ay=chunk.ay,
                chunk_index=chunk.period_index,
                start_date=chunk.start_date,
                end_date=chunk.end_date,
                mid_date=chunk.mid_date,
            )
        except (KeyError, IndexError, ValueError, AttributeError) as e:
            raise UnknownStyleError(
                f"Invalid format template '{style}': {e}. "
                "Available fields: name, code, year, ay, chunk_index, "
                "start_date, end_date, mid_date"
            ) from e

    if style == "code":
        return f"{chunk.code}{chunk.year % 100:02d}"
    if style == "name":
        return f"{chunk.name} {chunk.year}"
    if style == "ay":
        return chunk.ay
    if style == "key":
        return f"{chunk.ay}_{chunk.period_index}_{chunk.start_date.month:02d}_{chunk.name}"
    if style == "iso_date":
        return chunk.start_date.isoformat()

    raise UnknownStyleError(
        f"Unknown style '{style}'. Valid styles: {', '.join(STYLES)}. "
        "Or use a template containing '{'."
    )


def format_chunk(x: Any, style: str = "name"):
    """
    Format a TimeChunk or a sequence of TimeChunks.

    Args:
        x: TimeChunk or sequence of TimeChunks
        style: Named style or a "{field}" template (default: "name")

    Returns:
        str (None for NA) for a scalar, list for a sequence

    Raises:
        UnknownStyleError: For an unknown style or template field
        ChunkTypeError: If x holds something other than TimeChunks

    Examples:
        >>> fall = parse("fa26", calendar="us_semester")
        >>> format_chunk(fall, "key")
        '2026-27_1_08_Fall'
        >>> format_chunk(fall, "{name} starts {start_date:%b %d}")
        'Fall starts Aug 23'
    """
    if not isinstance(style, str):
        raise UnknownStyleError(f"style must be a string, got {type(style).__name__}")
    if isinstance(x, TimeChunk):
        return _format_one(x, style)
    if is_listlike(x):
        return [_format_one(c, style) for c in as_chunk_list(x, ChunkTypeError)]
    raise ChunkTypeError(f"Expected TimeChunk or a sequence of them, got {type(x).__name__}")


def format_chunk_display(x: Any, calendar=None) -> str:
    """
    Console listing: a ``<time_chunk[n]>`` header, one label per line and
    the calendar's display name.

    Examples:
        >>> print(format_chunk_display([], calendar="us_semester"))
        <time_chunk[0]>
        (empty)
        Calendar: us_semester
    """
    chunks = [x] if isinstance(x, TimeChunk) else as_chunk_list(x, ChunkTypeError)

    cal = resolve_calendar(calendar) if calendar is not None else current_calendar()

    lines = [f"<time_chunk[{len(chunks)}]>"]
    if not chunks:
        lines.append("(empty)")
    else:
        lines.extend(str(c) for c in chunks)
    lines.append(f"Calendar: {cal.display_name if cal is not None else 'unknown'}")
    return "\n".join(lines)


__all__ = [
    "STYLES",
    "format_chunk",
    "format_chunk_display",
]
