"""Global-index arithmetic over period occurrences.

Every occurrence maps to a single signed integer

    global_index = ay_offset * period_count + (period_index - 1)

where ``ay_offset`` is the calendar year in which the occurrence's academic
year begins. Shifts, distances and sequences are integer operations on this
index, so they cross year boundaries in both directions without special cases.
"""

from __future__ import annotations
from typing import Any, Optional, Union

from timechunks.calendar.calendarapi import resolve_calendar
from timechunks.calendar.calendaryear import academic_year_start, calendar_year_for
from timechunks.chunks.chunkidentity import (
    TimeChunk,
    _is_int,
    as_chunk_list,
    is_listlike,
    resolve,
)
from timechunks.errors import ChunkArithmeticError, ChunkTypeError, InvalidChunkError


def to_global_index(chunk: TimeChunk, calendar=None) -> Optional[int]:
    """
    Linear position of an occurrence; None for the NA chunk.

    Examples:
        >>> to_global_index(resolve(1, 2026, "us_semester"), "us_semester")
        6078
    """
    if not isinstance(chunk, TimeChunk):
        raise ChunkTypeError(f"Expected a TimeChunk, got {type(chunk).__name__}")
    if chunk.is_na:
        return None

    cal = resolve_calendar(calendar)
    n = cal.period_count
    if chunk.period_index > n:
        raise InvalidChunkError(
            f"Chunk '{chunk}' has period_index {chunk.period_index}, but calendar "
            f"'{cal.display_name}' has only {n} periods"
        )

    ay_offset = academic_year_start(cal, chunk.period_index, chunk.year)
    return ay_offset * n + (chunk.period_index - 1)


def from_global_index(index: int, calendar=None) -> TimeChunk:
    """
    Occurrence at a linear position.

    Examples:
        >>> str(from_global_index(6079, "us_semester"))
        'Spring 2027'
    """
    if not _is_int(index):
        raise ChunkArithmeticError(f"Global index must be an integer, got {index!r}")

    cal = resolve_calendar(calendar)
    ay_offset, position = divmod(int(index), cal.period_count)
    period_index = position + 1
    year = calendar_year_for(cal, period_index, ay_offset)
    return resolve(period_index, year, cal)


def _shift_one(chunk: TimeChunk, n: int, cal) -> TimeChunk:
    if chunk.is_na:
        return chunk
    return from_global_index(to_global_index(chunk, cal) + n, cal)


def shift(x: Union[TimeChunk, Any], n: int, calendar=None):
    """
    Move occurrences forward (n > 0) or backward (n < 0) by n periods.

    Args:
        x: TimeChunk or sequence of TimeChunks
        n: Number of periods (integer, not bool)
        calendar: CalendarConfig, mapping or preset id (default: active calendar)

    Returns:
        TimeChunk for scalar input, list for sequence input; NA stays NA

    Examples:
        >>> fall = resolve(1, 2026, "us_semester")
        >>> [str(c) for c in shift([fall], 2, "us_semester")]
        ['Summer 2027']
    """
    if not _is_int(n):
        raise ChunkArithmeticError(
            f"Shift amount must be an integer number of periods, got {n!r}"
        )

    cal = resolve_calendar(calendar)
    n = int(n)

    if isinstance(x, TimeChunk):
        return _shift_one(x, n, cal)
    if is_listlike(x):
        return [_shift_one(c, n, cal) for c in as_chunk_list(x)]
    raise ChunkArithmeticError(f"Cannot shift {type(x).__name__}; expected TimeChunk")


def distance(a, b, calendar=None):
    """
    Number of periods from b to a (``to_global_index(a) - to_global_index(b)``).

    A scalar operand is broadcast against a sequence; two sequences must have
    the same length. NA elements give None.

    Raises:
        ChunkArithmeticError: If two sequences differ in length, or an operand
            is not a TimeChunk or a sequence of them. A scalar paired with a
            sequence is broadcast rather than rejected.

    Examples:
        >>> fall26 = resolve(1, 2026, "us_semester")
        >>> fall27 = resolve(1, 2027, "us_semester")
        >>> distance(fall27, fall26, "us_semester")
        3
    """
    cal = resolve_calendar(calendar)

    def one(x: TimeChunk, y: TimeChunk) -> Optional[int]:
        if x.is_na or y.is_na:
            return None
        return to_global_index(x, cal) - to_global_index(y, cal)

    a_scalar, b_scalar = isinstance(a, TimeChunk), isinstance(b, TimeChunk)
    if a_scalar and b_scalar:
        return one(a, b)

    if not (a_scalar or is_listlike(a)) or not (b_scalar or is_listlike(b)):
        bad = a if not (a_scalar or is_listlike(a)) else b
        raise ChunkArithmeticError(
            f"Cannot compute distance with {type(bad).__name__}; expected TimeChunk"
        )

    left = [a] if a_scalar else as_chunk_list(a)
    right = [b] if b_scalar else as_chunk_list(b)
    if a_scalar:
        left = left * len(right)
    elif b_scalar:
        right = right * len(left)
    elif len(left) != len(right):
        raise ChunkArithmeticError(
            f"Length mismatch: cannot compute distance between {len(left)} and {len(right)} chunks"
        )
    return [one(x, y) for x, y in zip(left, right)]


def _single_endpoint(value: Any, label: str) -> TimeChunk:
    if is_listlike(value) and not isinstance(value, TimeChunk):
        values = list(value)
        if len(values) != 1:
            raise ChunkArithmeticError(
                f"`{label}` must be a single TimeChunk, got {len(values)} elements"
            )
        value = values[0]
    if not isinstance(value, TimeChunk):
        raise ChunkArithmeticError(f"`{label}` must be a TimeChunk, not {type(value).__name__}")
    if value.is_na:
        raise ChunkArithmeticError(f"`{label}` must not be NA")
    return value


def sequence(start, end, step: int = 1, calendar=None) -> list[TimeChunk]:
    """
    Inclusive, evenly stepped run of occurrences from start towards end.

    Args:
        start: First occurrence (TimeChunk or length-1 sequence)
        end: Last possible occurrence
        step: Nonzero integer; its sign must match the direction start -> end
        calendar: CalendarConfig, mapping or preset id (default: active calendar)

    Returns:
        List of TimeChunks

    Raises:
        ChunkArithmeticError: On NA or multi-element endpoints, zero or
            non-integer step, or a step pointing away from end

    Examples:
        >>> fall26 = resolve(1, 2026, "us_semester")
        >>> fall27 = resolve(1, 2027, "us_semester")
        >>> [str(c) for c in sequence(fall26, fall27, calendar="us_semester")]
        ['Fall 2026', 'Spring 2027', 'Summer 2027', 'Fall 2027']
    """
    start = _single_endpoint(start, "start")
    end = _single_endpoint(end, "end")

    if not _is_int(step) or step == 0:
        raise ChunkArithmeticError(f"`step` must be a nonzero integer, got {step!r}")
    step = int(step)

    cal = resolve_calendar(calendar)
    first = to_global_index(start, cal)
    last = to_global_index(end, cal)

    if (last - first) * step < 0:
        direction = "after" if last > first else "before"
        raise ChunkArithmeticError(
            f"`end` ({end}) is {direction} `start` ({start}), "
            f"so step {step} never reaches it"
        )

    stop = last + (1 if step > 0 else -1)
    return [from_global_index(i, cal) for i in range(first, stop, step)]


__all__ = [
    "to_global_index",
    "from_global_index",
    "shift",
    "distance",
    "sequence",
]
