"""Exceptions and warnings raised by timechunks.

Every error derives from TimeChunkError and from the closest builtin, so
callers can catch either ``TimeChunkError`` or e.g. ``ValueError``.
"""


class TimeChunkError(Exception):
    """Base class for all timechunks errors."""


class CalendarConfigError(TimeChunkError, ValueError):
    """Malformed calendar definition."""


class UnknownPresetError(TimeChunkError, LookupError):
    """Preset identifier not among the built-in calendars."""


class NoCalendarError(TimeChunkError, RuntimeError):
    """No calendar has been installed and none was passed explicitly."""


class ChunkParseError(TimeChunkError, ValueError):
    """Input does not match any accepted period representation."""


class UnknownCodeError(ChunkParseError):
    """Code-form input whose code is not configured."""


class AmbiguousMonthError(ChunkParseError):
    """Strict month mapping found more than one candidate period."""


class ChunkArithmeticError(TimeChunkError, ArithmeticError):
    """Bad step, mismatched lengths or unsupported operand in chunk arithmetic."""


class ChunkTypeError(TimeChunkError, TypeError):
    """A TimeChunk was required but something else was given."""


class InvalidChunkError(TimeChunkError, ValueError):
    """A TimeChunk whose fields break its invariants."""


class UnknownStyleError(TimeChunkError, ValueError):
    """Unknown format style or template field."""


class RollupError(TimeChunkError, ValueError):
    """Invalid input to rollup_to_ay."""


class CompositeKeyMonthWarning(UserWarning):
    """Composite key month disagrees with the period's configured start month."""


__all__ = [
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
]
