"""Calendar registry API.

Public API for installing, looking up and scoping calendar configurations.

Two layers hold the active calendar:
  - a process-wide default set by ``set_calendar`` / ``activate_preset``
  - a task-scoped override installed by ``calendar_context``, isolated per
    thread and per asyncio task via ``contextvars``

Every engine operation accepts ``calendar=``; an explicit calendar beats the
task-scoped one, which beats the process-wide one.
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterator, Mapping, Optional, Sequence, Union

from timechunks.calendar.calendarconfig import CalendarConfig, PeriodDefinition
from timechunks.errors import CalendarConfigError, NoCalendarError, UnknownPresetError
from timechunks.utils.dataloader import (
    find_data_file,
    format_not_found_error,
    load_yaml_file,
)
from timechunks.utils.resolver import did_you_mean

logger = logging.getLogger(__name__)

CalendarLike = Union[CalendarConfig, Mapping[str, Any], str]

_active_calendar: Optional[CalendarConfig] = None
_scoped_calendar: ContextVar[Optional[CalendarConfig]] = ContextVar(
    "timechunks_calendar", default=None
)


# ============================================================================
# Presets
# ============================================================================

@lru_cache(maxsize=1)
def load_presets(path: Optional[Union[str, Path]] = None) -> dict[str, CalendarConfig]:
    """Load and validate built-in presets from presets.yaml.

    Uses LRU cache to parse the YAML once and reuse the validated calendars.

    Args:
        path: Optional path to a presets YAML file. If None, uses
              timechunks/calendar/data/presets.yaml

    Returns:
        Dict mapping preset id -> CalendarConfig, in file order

    Examples:
        >>> sorted(load_presets())[:2]
        ['australia_semester', 'trimester']
    """
    if path is None:
        found_path = find_data_file(
            module_file=__file__,
            subdirectory="calendar",
            filenames=["presets.yaml"],
            module_local_data=True,
        )

        if found_path is None:
            presets_dir = Path(__file__).parent / "data"
            error_msg = format_not_found_error(
                subdirectory="calendar",
                searched_locations=[
                    ("Module-local data", presets_dir),
                ],
                fix_instructions=[
                    "Reinstall timechunks; presets.yaml ships as package data.",
                ],
            )
            raise FileNotFoundError(error_msg)

        path = found_path

    data = load_yaml_file(path)
    logger.debug("Loaded %d calendar presets from %s", len(data), path)

    presets = {}
    for preset_id, definition in data.items():
        try:
            presets[preset_id] = CalendarConfig.from_dict(definition)
        except CalendarConfigError as e:
            raise CalendarConfigError(f"Invalid preset '{preset_id}': {e}") from e
    return presets


def list_presets() -> list[str]:
    """Ids of the built-in calendar presets.

    Examples:
        >>> "us_semester" in list_presets()
        True
    """
    return list(load_presets())


def get_preset(preset_id: str) -> CalendarConfig:
    """
    Return a built-in preset without installing it.

    Raises:
        UnknownPresetError: If the id is not a known preset

    Examples:
        >>> get_preset("uk_terms").year_start_period
        'Michaelmas'
    """
    presets = load_presets()
    if preset_id not in presets:
        raise UnknownPresetError(
            f"Unknown preset '{preset_id}'. "
            f"Available presets: {', '.join(presets)}."
            f"{did_you_mean(str(preset_id), presets)}"
        )
    return presets[preset_id]


# ============================================================================
# Building and loading
# ============================================================================

def build_calendar(
    periods: Sequence[Union[PeriodDefinition, Mapping[str, Any]]],
    year_start_period: str,
    *,
    strict_month_mapping: bool = False,
    month_overrides: Optional[Mapping[str, str]] = None,
    single_year_label: bool = False,
    display_name: str = "custom",
    month_tie_break: str = "latest",
) -> CalendarConfig:
    """
    Validate and return a calendar without installing it.

    Args:
        periods: Ordered period definitions (objects or mappings)
        year_start_period: Name of the period that begins the academic year
        strict_month_mapping: Raise on ambiguous month -> period lookups
        month_overrides: Explicit "MM" -> period name mapping
        single_year_label: Use bare-year academic-year labels
        display_name: Name shown in console displays
        month_tie_break: "latest" or "earliest"

    Returns:
        Validated CalendarConfig

    Examples:
        >>> cal = build_calendar(
        ...     [{"name": "Fall", "code": "fa", "start_mmdd": "09-01"},
        ...      {"name": "Spring", "code": "sp", "start_mmdd": "01-15"}],
        ...     "Fall",
        ... )
        >>> cal.period_codes
        ('fa', 'sp')
    """
    return CalendarConfig(
        periods=periods,
        year_start_period=year_start_period,
        strict_month_mapping=strict_month_mapping,
        month_overrides=month_overrides,
        single_year_label=single_year_label,
        display_name=display_name,
        month_tie_break=month_tie_break,
    )


def load_calendar(path: Union[str, Path]) -> CalendarConfig:
    """
    Read a calendar definition from a YAML file and validate it.

    Raises:
        FileNotFoundError: If the file does not exist
        CalendarConfigError: If the content is not a valid calendar
    """
    import yaml

    try:
        data = load_yaml_file(path)
    except yaml.YAMLError as e:
        raise CalendarConfigError(f"Could not parse calendar file {path}: {e}") from e

    if not isinstance(data, Mapping) or not data:
        raise CalendarConfigError(f"Calendar file {path} does not contain a calendar mapping.")

    if data.get("display_name") is None:
        data = {**data, "display_name": Path(path).stem}
    return CalendarConfig.from_dict(data)


def _coerce(config: CalendarLike) -> CalendarConfig:
    if isinstance(config, CalendarConfig):
        return config
    if isinstance(config, str):
        return get_preset(config)
    if isinstance(config, Mapping):
        return CalendarConfig.from_dict(config)
    raise CalendarConfigError(
        f"Expected a CalendarConfig, mapping or preset id, not {type(config).__name__}."
    )


# ============================================================================
# Registry
# ============================================================================

def set_calendar(config: Union[CalendarConfig, Mapping[str, Any]]) -> CalendarConfig:
    """
    Validate and install a calendar as the process-wide default.

    On failure the previously active calendar stays in place.

    Args:
        config: CalendarConfig or a mapping accepted by CalendarConfig.from_dict

    Returns:
        The installed calendar
    """
    global _active_calendar

    if isinstance(config, str):
        raise CalendarConfigError(
            f"set_calendar() takes a calendar, not an id; use activate_preset('{config}')."
        )
    cal = _coerce(config)
    _active_calendar = cal
    logger.info(
        "Installed calendar '%s' (%d periods, year starts with %s)",
        cal.display_name, cal.period_count, cal.year_start_period,
    )
    return cal


def activate_preset(preset_id: str) -> CalendarConfig:
    """
    Install a built-in preset as the process-wide default.

    Examples:
        >>> activate_preset("us_semester").period_names
        ('Fall', 'Spring', 'Summer')
    """
    global _active_calendar

    cal = get_preset(preset_id)
    _active_calendar = cal
    logger.info("Activated calendar preset '%s'", preset_id)
    return cal


def get_active_calendar() -> CalendarConfig:
    """
    Return the task-scoped calendar if set, else the process-wide one.

    Raises:
        NoCalendarError: If no calendar is active
    """
    scoped = _scoped_calendar.get()
    if scoped is not None:
        return scoped
    if _active_calendar is None:
        raise NoCalendarError(
            "No calendar configured. Call set_calendar() or "
            "activate_preset('us_semester') first, or pass calendar=."
        )
    return _active_calendar


def current_calendar() -> Optional[CalendarConfig]:
    """Like get_active_calendar(), but None when nothing is active."""
    scoped = _scoped_calendar.get()
    return scoped if scoped is not None else _active_calendar


def resolve_calendar(calendar: Optional[CalendarLike] = None) -> CalendarConfig:
    """Explicit calendar (object, mapping or preset id) if given, else the active one."""
    if calendar is None:
        return get_active_calendar()
    return _coerce(calendar)


def reset_calendar() -> None:
    """Clear the process-wide calendar."""
    global _active_calendar
    _active_calendar = None
    logger.info("Calendar registry reset")


@contextmanager
def calendar_context(config: CalendarLike) -> Iterator[CalendarConfig]:
    """
    Scope a calendar to the current thread / asyncio task.

    Args:
        config: CalendarConfig, mapping, or preset id

    Examples:
        >>> with calendar_context("uk_terms") as cal:
        ...     get_active_calendar() is cal
        True
    """
    cal = _coerce(config)
    token = _scoped_calendar.set(cal)
    logger.debug("Entered calendar context '%s'", cal.display_name)
    try:
        yield cal
    finally:
        _scoped_calendar.reset(token)


__all__ = [
    "load_presets",
    "list_presets",
    "get_preset",
    "build_calendar",
    "load_calendar",
    "set_calendar",
    "activate_preset",
    "get_active_calendar",
    "current_calendar",
    "resolve_calendar",
    "reset_calendar",
    "calendar_context",
]
