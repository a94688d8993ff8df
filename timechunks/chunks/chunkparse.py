"""Parse free-form input into TimeChunks.

Dispatch for a single string, first match wins:
  1. Composite key     "2026-27_1_08_Fall"
  2. YYYYM stamp       "20268", "202611"
  3. Name and year     "Fall 2026", "2026 Fall"
  4. Code and 2-digit  "fa26"

Numbers (int, integral float, numpy scalars) are YYYYM stamps. Sequences
(list, tuple, Series, ndarray) are parsed element-wise; missing values give
NA chunks.
"""

import logging
import os
import sys
import warnings
from numbers import Integral, Real
from typing import Any, Callable

from timechunks.calendar.calendarapi import resolve_calendar
from timechunks.calendar.calendarconfig import CalendarConfig
from timechunks.chunks.chunkidentity import TimeChunk, is_listlike, is_na_value, resolve
from timechunks.chunks.chunknormalize import (
    KEY_PATTERN,
    KEY_PREFIX,
    TWO_DIGITS,
    YEAR_RUN,
    YYYYM_PATTERN,
    clean_chunk_text,
    split_name_year,
    split_yyyym,
    two_digit_year,
)
from timechunks.errors import (
    AmbiguousMonthError,
    ChunkParseError,
    CompositeKeyMonthWarning,
    InvalidChunkError,
    UnknownCodeError,
)
from timechunks.utils.normalize import normalize_name
from timechunks.utils.resolver import did_you_mean

logger = logging.getLogger(__name__)

_PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__))) + os.sep


# ============================================================================
# Entry points
# ============================================================================

def parse(value: Any, calendar=None):
    """
    Parse a value or a sequence of values into TimeChunks.

    Args:
        value: String, number, NA, or a list/tuple/Series/array of those
        calendar: CalendarConfig, mapping or preset id (default: active calendar)

    Returns:
        TimeChunk for scalar input, list of TimeChunks for sequence input

    Raises:
        ChunkParseError: If a value cannot be parsed (UnknownCodeError and
            AmbiguousMonthError are subclasses)

    Examples:
        >>> _ = activate_preset("us_semester")
        >>> str(parse("fa26"))
        'Fall 2026'
        >>> [str(c) for c in parse(["Fall 2026", 202701, "2026-27_3_06_Summer", None])]
        ['Fall 2026', 'Spring 2027', 'Summer 2026', 'NA']
    """
    cal = resolve_calendar(calendar)
    return _elementwise(_parse_one, value, cal)


time_chunk = parse


def parse_code(value: Any, calendar=None):
    """
    Parse "{code}{yy}" strings such as "fa26" (case-insensitive).

    The longest code that prefixes the text and leaves exactly two digits
    wins. Two-digit years 00-49 map to 2000-2049, 50-99 to 1950-1999.

    Raises:
        UnknownCodeError: If no configured code matches
    """
    cal = resolve_calendar(calendar)
    return _elementwise(_require_str(_parse_code), value, cal)


def parse_text(value: Any, calendar=None):
    """
    Parse "Name Year" or "Year Name" strings (case-insensitive names).

    Examples:
        >>> str(parse_text("2026 semester 1", calendar="australia_semester"))
        'Semester 1 2026'
    """
    cal = resolve_calendar(calendar)
    return _elementwise(_require_str(_parse_text), value, cal)


def parse_numeric(value: Any, calendar=None):
    """
    Parse YYYYM stamps: 5 digits for months 1-9, 6 digits for months 10-12.

    Examples:
        >>> str(parse_numeric(20268, calendar="us_semester"))
        'Fall 2026'
        >>> str(parse_numeric("202701", calendar="us_semester"))
        'Spring 2027'
    """
    cal = resolve_calendar(calendar)
    return _elementwise(_parse_numeric, value, cal)


def parse_key(value: Any, calendar=None):
    """
    Parse composite keys written by ``format_chunk(x, "key")``.

    The leading 4-digit year is taken as the calendar year, so
    "2026-27_2_01_Spring" is Spring 2026. A month segment that disagrees with
    the period's start month emits CompositeKeyMonthWarning.

    Examples:
        >>> str(parse_key("2026-27_2_01_Spring", calendar="us_semester"))
        'Spring 2026'
    """
    cal = resolve_calendar(calendar)
    return _elementwise(_require_str(_parse_key), value, cal)


def _elementwise(fn: Callable[[Any, CalendarConfig], TimeChunk], value: Any, cal: CalendarConfig):
    if isinstance(value, str) or not is_listlike(value):
        return _na_or(fn, value, cal)
    return [_na_or(fn, v, cal) for v in value]


def _na_or(fn, value, cal) -> TimeChunk:
    if is_na_value(value):
        return TimeChunk.na()
    return fn(value, cal)


def _require_str(fn):
    def wrapper(value, cal):
        if not isinstance(value, str):
            raise ChunkParseError(f"Expected a string, got {type(value).__name__}: {value!r}")
        return fn(value, cal)
    return wrapper


# ============================================================================
# Dispatch
# ============================================================================

def _parse_one(value: Any, cal: CalendarConfig) -> TimeChunk:
    if isinstance(value, TimeChunk):
        return value
    if isinstance(value, bool):
        raise ChunkParseError(f"Cannot parse bool {value!r} as a time chunk")
    if isinstance(value, str):
        return _parse_string(value, cal)
    if isinstance(value, Real):
        return _parse_numeric(value, cal)
    raise ChunkParseError(
        f"Cannot parse {type(value).__name__} {value!r} as a time chunk; "
        "expected a string or a YYYYM number"
    )


def _parse_string(value: str, cal: CalendarConfig) -> TimeChunk:
    s = clean_chunk_text(value)
    if not s:
        raise ChunkParseError("Cannot parse an empty string as a time chunk")

    if KEY_PREFIX.match(s):
        logger.debug("Parsing %r as composite key", s)
        return _parse_key(s, cal)
    if YYYYM_PATTERN.match(s):
        logger.debug("Parsing %r as YYYYM stamp", s)
        return _parse_numeric(s, cal)
    if YEAR_RUN.search(s):
        logger.debug("Parsing %r as name and year", s)
        return _parse_text(s, cal)
    logger.debug("Parsing %r as code", s)
    return _parse_code(s, cal)


def _caller_stacklevel() -> int:
    """stacklevel for warnings.warn that lands on the first frame outside timechunks."""
    frame = sys._getframe(1)
    level = 1
    while frame is not None and os.path.abspath(frame.f_code.co_filename).startswith(_PACKAGE_DIR):
        frame = frame.f_back
        level += 1
    return level


def _build(period_index: int, year: int, cal: CalendarConfig, source: Any) -> TimeChunk:
    try:
        return resolve(period_index, year, cal)
    except InvalidChunkError as e:
        raise ChunkParseError(f"Could not build a time chunk from {source!r}: {e}") from e


# ============================================================================
# Branches
# ============================================================================

def _parse_code(value: str, cal: CalendarConfig) -> TimeChunk:
    s = clean_chunk_text(value)
    folded = s.casefold()

    best = None
    for i, period in enumerate(cal.periods, 1):
        code = normalize_name(period.code)
        if folded.startswith(code) and TWO_DIGITS.match(folded[len(code):]):
            if best is None or len(code) > len(best[1]):
                best = (i, code)

    if best is None:
        stem = s.rstrip("0123456789")
        raise UnknownCodeError(
            f"Could not parse '{s}' as a period code. "
            f"Available codes: {', '.join(cal.period_codes)}."
            f"{did_you_mean(stem, cal.period_codes)}"
        )

    index, code = best
    year = two_digit_year(int(folded[len(code):]))
    return _build(index, year, cal, value)


def _parse_text(value: str, cal: CalendarConfig) -> TimeChunk:
    s = clean_chunk_text(value)
    parts = split_name_year(s)
    if parts is None:
        raise ChunkParseError(
            f"Could not parse '{s}' as a text-format period. "
            "Expected 'Name Year' or 'Year Name'. "
            f"Available names: {', '.join(cal.period_names)}"
        )

    name, year = parts
    key = normalize_name(name)
    for i, period in enumerate(cal.periods, 1):
        if normalize_name(period.name) == key:
            return _build(i, year, cal, value)

    raise ChunkParseError(
        f"Unknown period name '{name}' in '{s}'. "
        f"Available names: {', '.join(cal.period_names)}."
        f"{did_you_mean(name, cal.period_names)}"
    )


def _parse_numeric(value: Any, cal: CalendarConfig) -> TimeChunk:
    if isinstance(value, bool):
        raise ChunkParseError(f"Cannot parse bool {value!r} as a YYYYM value")

    if isinstance(value, str):
        digits = value.strip()
        if not YYYYM_PATTERN.match(digits):
            raise ChunkParseError(
                f"YYYYM value '{value}' must be 5 digits (months 1-9) or 6 digits (months 10-12)."
            )
    elif isinstance(value, Integral):
        if value < 0:
            raise ChunkParseError(f"YYYYM value {value} must not be negative.")
        digits = str(int(value))
    elif isinstance(value, Real):
        f = float(value)
        if not f.is_integer():
            raise ChunkParseError(f"YYYYM value {value} is not a whole number.")
        if f < 0:
            raise ChunkParseError(f"YYYYM value {value} must not be negative.")
        digits = str(int(f))
    else:
        raise ChunkParseError(
            f"Cannot parse {type(value).__name__} {value!r} as a YYYYM value."
        )

    if len(digits) not in (5, 6):
        raise ChunkParseError(
            f"YYYYM value {value} has {len(digits)} digit(s); "
            "expected 5 (months 1-9) or 6 (months 10-12)."
        )

    year, month = split_yyyym(digits)
    if not 1 <= month <= 12:
        raise ChunkParseError(f"Invalid month {month} in YYYYM value {value}.")

    index, year = resolve_month_to_period(month, year, cal)
    return _build(index, year, cal, value)


def _parse_key(value: str, cal: CalendarConfig) -> TimeChunk:
    s = clean_chunk_text(value)
    m = KEY_PATTERN.match(s)
    if not m:
        raise ChunkParseError(
            f"Could not parse '{s}' as a composite key. "
            "Expected format: 'YYYY-YY_index_MM_Name' (e.g. '2026-27_1_08_Fall')."
        )

    lead, suffix, _, month, name = m.groups()
    lead = int(lead)

    if suffix is not None and int(suffix) != (lead + 1) % 100:
        raise ChunkParseError(
            f"Composite key '{s}' has an inconsistent academic year '{lead}-{suffix}'."
        )
    if name not in cal.period_names:
        raise ChunkParseError(
            f"Composite key contains unknown period name '{name}'. "
            f"Available names: {', '.join(cal.period_names)}."
            f"{did_you_mean(name, cal.period_names)}"
        )

    index = cal.index_of(name)
    expected = cal.period(index).start_mmdd[:2]
    if month != expected:
        warnings.warn(
            f"Composite key month '{month}' does not match period '{name}' "
            f"start month '{expected}'. Using the period's configured start.",
            CompositeKeyMonthWarning,
            stacklevel=_caller_stacklevel(),
        )

    return _build(index, lead, cal, value)


# ============================================================================
# Month -> period
# ============================================================================

def resolve_month_to_period(month: int, year: int, calendar=None) -> tuple[int, int]:
    """
    Map a calendar month to the period occurrence that covers it.

    Resolution order:
      1. ``month_overrides`` entry for the month. This goes one step beyond
         using the named period as-is: when it starts later in the year than
         the month, the occurrence is the one that began the previous year,
         so the returned chunk actually covers the month.
      2. Periods whose start month is <= month. Several candidates raise
         AmbiguousMonthError in strict mode; otherwise ``month_tie_break``
         picks ("latest": highest start month, first in cycle order on
         equal months; "earliest": lowest start month).
      3. No candidate: the last period in cycle order, previous year.

    Months are compared, not exact dates, so August maps to a Fall that
    starts on Aug-23.

    Args:
        month: 1-12
        year: Calendar year of the month
        calendar: CalendarConfig, mapping or preset id (default: active calendar)

    Returns:
        (period_index, calendar_year) tuple

    Examples:
        >>> resolve_month_to_period(1, 2027, calendar="us_semester")
        (2, 2027)
        >>> resolve_month_to_period(9, 2027, calendar="us_federal_fy")
        (4, 2027)
    """
    cal = resolve_calendar(calendar)
    mm = f"{month:02d}"

    if cal.month_overrides and mm in cal.month_overrides:
        name = cal.month_overrides[mm]
        if name not in cal.period_names:
            raise ChunkParseError(f"month_overrides maps month '{mm}' to unknown period '{name}'.")
        index = cal.index_of(name)
        if cal.period(index).start_month > month:
            return index, year - 1
        return index, year

    starts = {i: p.start_month for i, p in enumerate(cal.periods, 1)}
    candidates = [i for i, start in starts.items() if start <= month]

    if not candidates:
        return cal.period_count, year - 1

    if len(candidates) > 1 and cal.strict_month_mapping:
        names = ", ".join(cal.period(i).name for i in candidates)
        raise AmbiguousMonthError(
            f"Month '{mm}' maps ambiguously to periods: {names}. "
            "Set strict_month_mapping=False or provide month_overrides."
        )

    if cal.month_tie_break == "earliest":
        return min(candidates, key=starts.get), year
    return max(candidates, key=starts.get), year


__all__ = [
    "parse",
    "time_chunk",
    "parse_code",
    "parse_text",
    "parse_numeric",
    "parse_key",
    "resolve_month_to_period",
]
