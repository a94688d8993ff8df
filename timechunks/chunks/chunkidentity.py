"""TimeChunk value type and period resolution.

A TimeChunk is one concrete occurrence of a configured period (e.g. Fall
2026): its dates, labels and 1-based position in the annual cycle. Chunks are
immutable, sort by start date, and support integer arithmetic in units of
periods:

    >>> fall = resolve(1, 2026, calendar="us_semester")
    >>> fall.start_date, fall.end_date, fall.ay
    (datetime.date(2026, 8, 23), datetime.date(2027, 1, 14), '2026-27')
    >>> str(fall + 1)
    'Spring 2027'
"""

from __future__ import annotations
from dataclasses import dataclass, fields
from datetime import date
from functools import total_ordering
from numbers import Integral
from typing import Any, Iterable, Optional

import pandas as pd
from dateutil.relativedelta import relativedelta

from timechunks.calendar.calendarapi import resolve_calendar
from timechunks.calendar.calendaryear import academic_year_label, academic_year_start
from timechunks.errors import ChunkArithmeticError, InvalidChunkError


@total_ordering
@dataclass(frozen=True)
class TimeChunk:
    """
    Concrete occurrence of a calendar period.

    Attributes:
        start_date: First day of the occurrence
        end_date: Last day of the occurrence (inclusive)
        name: Period display name, e.g. "Fall"
        code: Period short code, e.g. "fa"
        year: Calendar year of start_date
        period_index: 1-based position in the calendar cycle
        ay: Academic/fiscal-year label, e.g. "2026-27"

    All fields are None for the NA chunk (see ``TimeChunk.na()``).
    """

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    name: Optional[str] = None
    code: Optional[str] = None
    year: Optional[int] = None
    period_index: Optional[int] = None
    ay: Optional[str] = None

    def __post_init__(self) -> None:
        values = [getattr(self, f.name) for f in fields(self)]
        present = [v is not None for v in values]
        if any(present) and not all(present):
            missing = [f.name for f, p in zip(fields(self), present) if not p]
            raise InvalidChunkError(
                f"TimeChunk fields must be all present or all absent; missing: {', '.join(missing)}"
            )
        if self.is_na:
            return
        if self.end_date < self.start_date:
            raise InvalidChunkError(
                f"end_date {self.end_date} is before start_date {self.start_date}"
            )
        if self.period_index < 1:
            raise InvalidChunkError(f"period_index must be >= 1, got {self.period_index}")

    @classmethod
    def na(cls) -> TimeChunk:
        """The missing-value chunk."""
        return cls()

    @property
    def is_na(self) -> bool:
        return self.start_date is None

    @property
    def mid_date(self) -> Optional[date]:
        """Midpoint of the occurrence, truncated to a whole day."""
        if self.is_na:
            return None
        return date.fromordinal((self.start_date.toordinal() + self.end_date.toordinal()) // 2)

    # ---- ordering ----

    def _sort_key(self) -> tuple:
        # NA sorts last
        return (1, date.max) if self.is_na else (0, self.start_date)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, TimeChunk):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    # ---- display ----

    def __str__(self) -> str:
        if self.is_na:
            return "NA"
        return f"{self.name} {self.year}"

    def __format__(self, style: str) -> str:
        if not style:
            return str(self)
        from timechunks.chunks.chunkformat import format_chunk

        result = format_chunk(self, style)
        return "NA" if result is None else result

    # ---- arithmetic (ambient calendar) ----

    def __add__(self, other: Any) -> TimeChunk:
        from timechunks.chunks.chunkindex import shift

        if not _is_int(other):
            raise ChunkArithmeticError(
                f"Can only add an integer number of periods to a TimeChunk, not {type(other).__name__}"
            )
        return shift(self, int(other))

    __radd__ = __add__

    def __sub__(self, other: Any):
        from timechunks.chunks.chunkindex import distance, shift

        if isinstance(other, TimeChunk):
            return distance(self, other)
        if _is_int(other):
            return shift(self, -int(other))
        raise ChunkArithmeticError(
            f"Can only subtract an integer or a TimeChunk from a TimeChunk, not {type(other).__name__}"
        )

    def __rsub__(self, other: Any):
        raise ChunkArithmeticError(
            f"Cannot subtract a TimeChunk from {type(other).__name__}"
        )


def _is_int(value: Any) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


def is_na_value(value: Any) -> bool:
    """True for scalar missing values: None, NaN, pandas.NA, NaT."""
    if value is None:
        return True
    if isinstance(value, TimeChunk):
        return value.is_na
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        # pd.isna on array-likes returns an array
        return False


def is_listlike(value: Any) -> bool:
    """Sequences handled element-wise: list, tuple, Series, Index, ndarray."""
    return pd.api.types.is_list_like(value) and not isinstance(value, (dict, set, frozenset))


def as_chunk_list(values: Iterable[Any], error_cls: type = ChunkArithmeticError) -> list[TimeChunk]:
    """Materialize a sequence, requiring every element to be a TimeChunk."""
    result = list(values)
    for v in result:
        if not isinstance(v, TimeChunk):
            raise error_cls(f"Expected TimeChunk elements, got {type(v).__name__}")
    return result


# ---- resolution ----

def resolve(period_index: int, year: int, calendar=None) -> TimeChunk:
    """
    Build the concrete occurrence of a period in a calendar year.

    End dates:
      - explicit end_mmdd: that date, rolled into the next year if needed
      - other periods: the day before the next period in the cycle starts
      - last period: the day before the year-start period of the following
        academic year

    Args:
        period_index: 1-based position in the calendar cycle
        year: Calendar year in which the occurrence starts
        calendar: CalendarConfig, mapping or preset id (default: active calendar)

    Returns:
        TimeChunk

    Raises:
        InvalidChunkError: If period_index is out of range or the year is not representable

    Examples:
        >>> resolve(3, 2027, calendar="us_semester").end_date
        datetime.date(2027, 8, 22)
    """
    cal = resolve_calendar(calendar)
    n = cal.period_count

    if not _is_int(period_index) or not 1 <= period_index <= n:
        raise InvalidChunkError(
            f"period_index {period_index!r} out of range 1..{n} for calendar '{cal.display_name}'"
        )
    if not _is_int(year):
        raise InvalidChunkError(f"year must be an integer, got {year!r}")

    period_index, year = int(period_index), int(year)
    period = cal.period(period_index)

    try:
        start = period.start_in(year)
        end = period.end_override_in(year)
        if end is None:
            if period_index < n:
                next_start = cal.period(period_index + 1).start_in(year)
                if next_start <= start:
                    next_start += relativedelta(years=1)
            else:
                ay_start = academic_year_start(cal, period_index, year)
                next_start = cal.year_start.start_in(ay_start + 1)
            end = next_start - relativedelta(days=1)
    except (ValueError, OverflowError) as e:
        raise InvalidChunkError(f"Year {year} is out of the supported date range: {e}") from e

    return TimeChunk(
        start_date=start,
        end_date=end,
        name=period.name,
        code=period.code,
        year=year,
        period_index=period_index,
        ay=academic_year_label(cal, period_index, year),
    )


__all__ = [
    "TimeChunk",
    "resolve",
    "is_na_value",
    "is_listlike",
    "as_chunk_list",
]
