"""timechunks - Named, repeating institutional time periods

Public API for academic semesters, fiscal quarters, UK terms and other annual
cycles of named periods, as values that know their dates, their
academic-year label and their position in the cycle.

Usage:
    from timechunks import activate_preset, parse, sequence, format_chunk

    # Pick a calendar
    activate_preset("us_semester")

    # Parse codes, names, YYYYM stamps and composite keys
    fall = parse("fa26")             # Fall 2026: 2026-08-23 .. 2027-01-14
    spring = parse(202701)           # Spring 2027
    parse("2026-27_1_08_Fall")       # Fall 2026

    # Arithmetic in units of periods, across year boundaries
    fall + 3                         # Fall 2027
    spring - fall                    # 1
    sequence(fall, fall + 3)         # [Fall 2026, Spring 2027, Summer 2027, Fall 2027]

    # Labels
    format_chunk(fall, "ay")         # '2026-27'
    format_chunk(fall, "key")        # '2026-27_1_08_Fall'

    # Scope a different calendar to a block (thread / asyncio task safe)
    with calendar_context("uk_terms"):
        parse("Michaelmas 2026")
"""

__version__ = "0.0.1"

# ============================================================================
# Errors
# ============================================================================

from .errors import (
    TimeChunkError,            # Base class for all package errors
    CalendarConfigError,       # Invalid calendar definition
    UnknownPresetError,        # Unknown preset id
    NoCalendarError,           # No calendar active or passed
    ChunkParseError,           # Input could not be parsed
    UnknownCodeError,          # No period code matches
    AmbiguousMonthError,       # Strict month mapping found several periods
    ChunkArithmeticError,      # Invalid shift/distance/sequence operands
    ChunkTypeError,            # Non-chunk passed where chunks are required
    InvalidChunkError,         # Inconsistent chunk fields or out-of-range period
    UnknownStyleError,         # Unknown format style or template field
    RollupError,               # Invalid roll-up input
    CompositeKeyMonthWarning,  # Composite key month disagrees with the period
)

# ============================================================================
# Calendar Registry API
# ============================================================================

from .calendar.calendarconfig import (
    PeriodDefinition,        # One named period of the cycle
    CalendarConfig,          # Validated calendar configuration
)
from .calendar.calendarapi import (
    set_calendar,            # Install a process-wide calendar
    build_calendar,          # Validate a calendar without installing it
    activate_preset,         # Install a built-in preset
    get_active_calendar,     # Task-scoped or process-wide calendar
    get_preset,              # Look up a preset without installing it
    list_presets,            # Ids of built-in presets
    load_calendar,           # Read a calendar from YAML
    reset_calendar,          # Clear the process-wide calendar
    calendar_context,        # Scope a calendar to a block
)
from .calendar.calendaryear import (
    academic_year_label,     # AY/FY label for (period, year)
    academic_year_start,     # Year in which the AY begins
)

# ============================================================================
# Chunk Engine API
# ============================================================================

from .chunks.chunkidentity import (
    TimeChunk,               # Concrete period occurrence
    resolve,                 # (period_index, year) -> TimeChunk
)
from .chunks.chunkparse import (
    parse,                   # Primary API - parse any supported input
    time_chunk,              # Alias for parse
    parse_code,              # "fa26"
    parse_text,              # "Fall 2026"
    parse_numeric,           # 20268
    parse_key,               # "2026-27_1_08_Fall"
)
from .chunks.chunkindex import (
    to_global_index,         # TimeChunk -> linear index
    from_global_index,       # linear index -> TimeChunk
    shift,                   # Move by n periods
    distance,                # Periods between two chunks
    sequence,                # Stepped run of chunks
)
from .chunks.chunkapi import (
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
from .chunks.chunkformat import (
    format_chunk,            # Render as code/name/ay/key/iso_date/template
    format_chunk_display,    # Console listing
)

# ============================================================================
# pandas Integration API
# ============================================================================

from .frames.frameapi import (
    as_chunk_factor,         # Ordered categorical, chronological levels
    rollup_to_ay,            # Aggregate per academic year
    chunks_to_frame,         # Expand chunks into a DataFrame
)

__all__ = [
    # Errors
    "TimeChunkError",
    "CalendarConfigError",
    "UnknownPresetError",
    "NoCalendarError",
    "ChunkParseError",
    "UnknownCodeError",
    "AmbiguousMonthError",
    "ChunkArithmeticError",
    "ChunkTypeError",
    "InvalidChunkError",
    "UnknownStyleError",
    "RollupError",
    "CompositeKeyMonthWarning",
    # Calendar registry
    "PeriodDefinition",
    "CalendarConfig",
    "set_calendar",
    "build_calendar",
    "activate_preset",
    "get_active_calendar",
    "get_preset",
    "list_presets",
    "load_calendar",
    "reset_calendar",
    "calendar_context",
    "academic_year_label",
    "academic_year_start",
    # Chunk engine
    "TimeChunk",
    "resolve",
    "parse",
    "time_chunk",
    "parse_code",
    "parse_text",
    "parse_numeric",
    "parse_key",
    "to_global_index",
    "from_global_index",
    "shift",
    "distance",
    "sequence",
    # Accessors
    "is_time_chunk",
    "chunk_name",
    "chunk_code",
    "chunk_year",
    "chunk_ay",
    "chunk_index",
    "start_date",
    "end_date",
    "mid_date",
    # Formatting
    "format_chunk",
    "format_chunk_display",
    # pandas
    "as_chunk_factor",
    "rollup_to_ay",
    "chunks_to_frame",
]
