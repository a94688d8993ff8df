"""Calendar module: configuration, presets and the active-calendar registry.

Public API:
    set_calendar(config) -> CalendarConfig
        Validate and install a process-wide calendar

    activate_preset(preset_id) -> CalendarConfig
        Install a built-in preset

    calendar_context(config_or_preset_id)
        Scope a calendar to the current thread / asyncio task

    academic_year_label(calendar, period, year) -> str
        Academic/fiscal-year label for a period occurrence

Examples:
    >>> from timechunks.calendar import activate_preset, academic_year_label
    >>> cal = activate_preset("us_semester")
    >>> academic_year_label(cal, "Spring", 2027)
    '2026-27'
"""

from timechunks.calendar.calendarconfig import (
    PeriodDefinition,
    CalendarConfig,
    validate_calendar,
)
from timechunks.calendar.calendaryear import (
    academic_year_start,
    academic_year_label,
)
from timechunks.calendar.calendarapi import (
    set_calendar,
    build_calendar,
    activate_preset,
    get_active_calendar,
    get_preset,
    list_presets,
    load_calendar,
    reset_calendar,
    calendar_context,
)

__all__ = [
    "PeriodDefinition",
    "CalendarConfig",
    "validate_calendar",
    "academic_year_start",
    "academic_year_label",
    "set_calendar",
    "build_calendar",
    "activate_preset",
    "get_active_calendar",
    "get_preset",
    "list_presets",
    "load_calendar",
    "reset_calendar",
    "calendar_context",
]
