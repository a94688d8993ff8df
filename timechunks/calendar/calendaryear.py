"""Academic-year arithmetic shared by resolution, indexing and formatting."""

from typing import Union

from timechunks.calendar.calendarconfig import CalendarConfig, PeriodDefinition
from timechunks.errors import CalendarConfigError

PeriodRef = Union[str, int]


def _period_of(calendar: CalendarConfig, period: PeriodRef) -> PeriodDefinition:
    # Accept a period name or a 1-based position
    if isinstance(period, int) and not isinstance(period, bool):
        if not 1 <= period <= calendar.period_count:
            raise CalendarConfigError(
                f"Period index {period} out of range 1..{calendar.period_count}"
            )
        return calendar.period(period)
    try:
        return calendar.period(calendar.index_of(period))
    except KeyError:
        raise CalendarConfigError(
            f"Unknown period '{period}'. Available names: {', '.join(calendar.period_names)}"
        ) from None


def academic_year_start(calendar: CalendarConfig, period: PeriodRef, year: int) -> int:
    """
    Calendar year in which the academic year containing this occurrence begins.

    A period whose start month is on or after the year-start period's start
    month belongs to the academic year beginning in ``year``; otherwise it
    belongs to the one that began the year before. Only months are compared.

    Examples:
        >>> academic_year_start(us_semester, "Spring", 2027)
        2026
    """
    if _period_of(calendar, period).start_month >= calendar.year_start.start_month:
        return year
    return year - 1


def calendar_year_for(calendar: CalendarConfig, period: PeriodRef, ay_start: int) -> int:
    """Inverse of academic_year_start: calendar year of a period within an academic year."""
    if _period_of(calendar, period).start_month >= calendar.year_start.start_month:
        return ay_start
    return ay_start + 1


def academic_year_label(calendar: CalendarConfig, period: PeriodRef, year: int) -> str:
    """
    Academic/fiscal-year label for a period occurrence.

    Single-year-label calendars use the bare calendar year.

    Examples:
        >>> academic_year_label(us_semester, "Fall", 2026)
        '2026-27'
        >>> academic_year_label(us_semester, "Spring", 2027)
        '2026-27'
        >>> academic_year_label(australia_semester, "Semester 2", 2026)
        '2026'
    """
    if calendar.single_year_label:
        return str(year)
    start = academic_year_start(calendar, period, year)
    return f"{start}-{(start + 1) % 100:02d}"


__all__ = [
    "academic_year_start",
    "calendar_year_for",
    "academic_year_label",
]
