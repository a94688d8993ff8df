"""Calendar Configuration
----------------------

Immutable calendar definitions: an ordered cycle of named periods with
start dates and one designated year-start period.

Every CalendarConfig is validated when it is built, so a config object that
exists is always well-formed. Validation failures raise CalendarConfigError.

Examples:
  >>> cal = CalendarConfig(
  ...     periods=[
  ...         PeriodDefinition("Fall", "fa", "08-23"),
  ...         PeriodDefinition("Spring", "sp", "01-15"),
  ...         PeriodDefinition("Summer", "su", "06-01"),
  ...     ],
  ...     year_start_period="Fall",
  ... )
  >>> cal.period_names
  ('Fall', 'Spring', 'Summer')
"""

from __future__ import annotations
import logging
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping, Optional

from dateutil.relativedelta import relativedelta

from timechunks.errors import CalendarConfigError
from timechunks.utils.normalize import normalize_name

logger = logging.getLogger(__name__)


MMDD_PATTERN = re.compile(r"^(\d{2})-(\d{2})$")

MONTH_KEYS = tuple(f"{m:02d}" for m in range(1, 13))

TIE_BREAK_POLICIES = ("latest", "earliest")

# Non-leap lengths: a recurring period must be able to start every year.
_DAYS_IN_MONTH = {
    1: 31, 2: 28, 3: 31, 4: 30, 5: 31, 6: 30,
    7: 31, 8: 31, 9: 30, 10: 31, 11: 30, 12: 31,
}

_CONFIG_KEYS = {
    "periods",
    "year_start_period",
    "strict_month_mapping",
    "month_overrides",
    "single_year_label",
    "display_name",
    "month_tie_break",
}


# ---- MM-DD helpers ----

def parse_mmdd(value: Any, *, period_name: str = "?", field_name: str = "start_mmdd") -> tuple[int, int]:
    """
    Parse and validate an ``MM-DD`` string.

    Args:
        value: Candidate string, e.g. "08-23"
        period_name: Owning period (for error messages)
        field_name: Field being validated (for error messages)

    Returns:
        (month, day) tuple

    Raises:
        CalendarConfigError: If the value is not a valid MM-DD for every year

    Examples:
        >>> parse_mmdd("08-23")
        (8, 23)
    """
    match = MMDD_PATTERN.match(value) if isinstance(value, str) else None
    if not match:
        raise CalendarConfigError(
            f"Period '{period_name}' has invalid {field_name} '{value}'. "
            "Expected format: 'MM-DD' (e.g. '08-23')."
        )

    month, day = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise CalendarConfigError(
            f"Period '{period_name}' has invalid {field_name} '{value}': "
            f"month must be 01-12."
        )
    if not 1 <= day <= _DAYS_IN_MONTH[month]:
        raise CalendarConfigError(
            f"Period '{period_name}' has invalid {field_name} '{value}': "
            f"day must be 01-{_DAYS_IN_MONTH[month]:02d} for month {month:02d}."
        )
    return month, day


# ---- Period definition ----

@dataclass(frozen=True)
class PeriodDefinition:
    """One named period of the annual cycle."""

    name: str
    code: str
    start_mmdd: str
    end_mmdd: Optional[str] = None

    @property
    def start_month(self) -> int:
        return int(self.start_mmdd[:2])

    def start_in(self, year: int) -> date:
        """Start date of this period in the given calendar year."""
        month, day = parse_mmdd(self.start_mmdd, period_name=self.name)
        return date(year, month, day)

    def end_override_in(self, year: int) -> Optional[date]:
        """Explicit end date for an occurrence starting in ``year``, if configured."""
        if self.end_mmdd is None:
            return None
        month, day = parse_mmdd(self.end_mmdd, period_name=self.name, field_name="end_mmdd")
        end = date(year, month, day)
        # Span crosses into the next calendar year
        if end < self.start_in(year):
            end = date(year + 1, month, day)
        return end

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], position: int = 1) -> PeriodDefinition:
        """
        Build a period from a mapping such as a YAML entry.

        Args:
            data: Mapping with name, code, start_mmdd and optional end_mmdd
            position: 1-based position in the calendar (for error messages)

        Returns:
            PeriodDefinition

        Examples:
            >>> PeriodDefinition.from_dict({"name": "Fall", "code": "fa", "start_mmdd": "08-23"})
            PeriodDefinition(name='Fall', code='fa', start_mmdd='08-23', end_mmdd=None)
        """
        if not isinstance(data, Mapping):
            raise CalendarConfigError(
                f"Period {position} must be a mapping with name, code and start_mmdd, "
                f"not {type(data).__name__}."
            )

        required = ("name", "code", "start_mmdd")
        missing = [key for key in required if data.get(key) in (None, "")]
        if missing:
            raise CalendarConfigError(
                f"Period {position} is missing required fields: {', '.join(missing)}"
            )

        unknown = set(data) - {"name", "code", "start_mmdd", "end_mmdd"}
        if unknown:
            raise CalendarConfigError(
                f"Period {position} has unknown fields: {', '.join(sorted(unknown))}"
            )

        return cls(
            name=data["name"],
            code=data["code"],
            start_mmdd=data["start_mmdd"],
            end_mmdd=data.get("end_mmdd"),
        )

    def to_dict(self) -> dict:
        result = {"name": self.name, "code": self.code, "start_mmdd": self.start_mmdd}
        if self.end_mmdd is not None:
            result["end_mmdd"] = self.end_mmdd
        return result


# ---- Calendar configuration ----

@dataclass(frozen=True)
class CalendarConfig:
    """
    Validated, immutable calendar configuration.

    ``periods`` may be given as PeriodDefinition objects or as mappings;
    ``month_overrides`` maps two-digit month strings ("01".."12") to period
    names and takes priority over automatic month-to-period resolution.
    """

    periods: tuple[PeriodDefinition, ...]
    year_start_period: str
    strict_month_mapping: bool = False
    month_overrides: Optional[Mapping[str, str]] = field(default=None, hash=False)
    single_year_label: bool = False
    display_name: str = "custom"
    month_tie_break: str = "latest"

    def __post_init__(self) -> None:
        if isinstance(self.periods, (str, bytes, Mapping)) or not hasattr(self.periods, "__iter__"):
            raise CalendarConfigError(
                "`periods` must be a non-empty list of period definitions."
            )

        periods = tuple(
            p if isinstance(p, PeriodDefinition) else PeriodDefinition.from_dict(p, i)
            for i, p in enumerate(self.periods, 1)
        )
        object.__setattr__(self, "periods", periods)

        if self.month_overrides is not None:
            if not isinstance(self.month_overrides, Mapping):
                raise CalendarConfigError(
                    "`month_overrides` must be a mapping of 'MM' -> period name."
                )
            object.__setattr__(
                self,
                "month_overrides",
                {_month_key(k): v for k, v in self.month_overrides.items()},
            )

        validate_calendar(self)

    # -- lookups --

    @property
    def period_count(self) -> int:
        return len(self.periods)

    @property
    def period_names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.periods)

    @property
    def period_codes(self) -> tuple[str, ...]:
        return tuple(p.code for p in self.periods)

    @property
    def year_start(self) -> PeriodDefinition:
        return self.periods[self.index_of(self.year_start_period) - 1]

    def index_of(self, name: str) -> int:
        """1-based position of the period with this exact name."""
        for i, p in enumerate(self.periods, 1):
            if p.name == name:
                return i
        raise KeyError(name)

    def period(self, index: int) -> PeriodDefinition:
        """Period at 1-based position ``index``."""
        return self.periods[index - 1]

    # -- (de)serialization --

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CalendarConfig:
        """
        Build a calendar from a mapping (e.g. parsed YAML).

        Examples:
            >>> CalendarConfig.from_dict({
            ...     "periods": [{"name": "Fall", "code": "fa", "start_mmdd": "09-01"}],
            ...     "year_start_period": "Fall",
            ... }).display_name
            'custom'
        """
        if not isinstance(data, Mapping):
            raise CalendarConfigError(
                f"Calendar definition must be a mapping, not {type(data).__name__}."
            )

        unknown = set(data) - _CONFIG_KEYS
        if unknown:
            raise CalendarConfigError(
                f"Unknown calendar fields: {', '.join(sorted(unknown))}. "
                f"Allowed: {', '.join(sorted(_CONFIG_KEYS))}"
            )
        if "periods" not in data or "year_start_period" not in data:
            raise CalendarConfigError(
                "Calendar definition requires `periods` and `year_start_period`."
            )

        kwargs = dict(data)
        kwargs["periods"] = data["periods"] or ()
        if kwargs.get("display_name") is None:
            kwargs["display_name"] = "custom"
        return cls(**kwargs)

    def to_dict(self) -> dict:
        return {
            "periods": [p.to_dict() for p in self.periods],
            "year_start_period": self.year_start_period,
            "strict_month_mapping": self.strict_month_mapping,
            "month_overrides": dict(self.month_overrides) if self.month_overrides else None,
            "single_year_label": self.single_year_label,
            "display_name": self.display_name,
            "month_tie_break": self.month_tie_break,
        }


def _month_key(key: Any) -> Any:
    # YAML may load unquoted month keys as ints
    if isinstance(key, int) and not isinstance(key, bool):
        return f"{key:02d}"
    return key


# ---- Validation ----

def validate_calendar(cal: CalendarConfig) -> CalendarConfig:
    """
    Validate a calendar configuration.

    Checks:
      - non-empty period list with name, code and valid MM-DD dates
      - unique names, unique codes (case-insensitive)
      - year_start_period among the period names
      - month_overrides keys "01".."12" and values among the period names
      - known month_tie_break policy
      - explicit end_mmdd overrides do not reach into the next period

    Args:
        cal: Calendar to validate

    Returns:
        The same calendar

    Raises:
        CalendarConfigError: On the first failed check
    """
    if not cal.periods:
        raise CalendarConfigError(
            "`periods` must be a non-empty list of period definitions."
        )

    for i, p in enumerate(cal.periods, 1):
        for attr in ("name", "code"):
            value = getattr(p, attr)
            if not isinstance(value, str) or not value.strip():
                raise CalendarConfigError(
                    f"Period {i} has invalid {attr} {value!r}; expected a non-empty string."
                )
        parse_mmdd(p.start_mmdd, period_name=p.name)
        if p.end_mmdd is not None:
            parse_mmdd(p.end_mmdd, period_name=p.name, field_name="end_mmdd")

    names = cal.period_names
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise CalendarConfigError(f"Duplicate period names: {', '.join(duplicates)}")

    codes = [normalize_name(c) for c in cal.period_codes]
    duplicates = sorted({c for c in codes if codes.count(c) > 1})
    if duplicates:
        raise CalendarConfigError(
            f"Duplicate period codes (case-insensitive): {', '.join(duplicates)}"
        )

    if cal.year_start_period not in names:
        raise CalendarConfigError(
            f"`year_start_period` '{cal.year_start_period}' not found in periods. "
            f"Available names: {', '.join(names)}"
        )

    if cal.month_overrides:
        bad_keys = [k for k in cal.month_overrides if k not in MONTH_KEYS]
        if bad_keys:
            raise CalendarConfigError(
                f"Invalid month keys in `month_overrides`: {', '.join(map(str, bad_keys))}. "
                "Keys must be two-digit month strings '01' through '12'."
            )
        bad_values = [v for v in cal.month_overrides.values() if v not in names]
        if bad_values:
            raise CalendarConfigError(
                f"Invalid period names in `month_overrides`: {', '.join(map(str, bad_values))}. "
                f"Available names: {', '.join(names)}"
            )

    for flag in ("strict_month_mapping", "single_year_label"):
        if not isinstance(getattr(cal, flag), bool):
            raise CalendarConfigError(f"`{flag}` must be true or false, got {getattr(cal, flag)!r}.")
    if not isinstance(cal.display_name, str) or not cal.display_name:
        raise CalendarConfigError(f"`display_name` must be a non-empty string, got {cal.display_name!r}.")

    if cal.month_tie_break not in TIE_BREAK_POLICIES:
        raise CalendarConfigError(
            f"Unknown `month_tie_break` '{cal.month_tie_break}'. "
            f"Available policies: {', '.join(TIE_BREAK_POLICIES)}"
        )

    _check_end_overrides(cal)

    if cal.periods[0].name != cal.year_start_period:
        logger.warning(
            "Calendar '%s': year-start period '%s' is not first in cycle order; "
            "period arithmetic will not follow chronological order.",
            cal.display_name, cal.year_start_period,
        )

    return cal


def _check_end_overrides(cal: CalendarConfig, ref_year: int = 2001) -> None:
    """Reject end_mmdd overrides that overlap the following period."""
    n = len(cal.periods)
    ys_month = cal.year_start.start_month

    for i, p in enumerate(cal.periods):
        if p.end_mmdd is None:
            continue

        start = p.start_in(ref_year)
        end = p.end_override_in(ref_year)

        if i < n - 1:
            next_start = cal.periods[i + 1].start_in(ref_year)
            if next_start <= start:
                next_start += relativedelta(years=1)
        else:
            ay_start = ref_year if p.start_month >= ys_month else ref_year - 1
            next_start = cal.year_start.start_in(ay_start + 1)

        if end >= next_start:
            raise CalendarConfigError(
                f"Period '{p.name}' end_mmdd '{p.end_mmdd}' overlaps the start "
                f"of the following period ({next_start:%m-%d})."
            )


__all__ = [
    "PeriodDefinition",
    "CalendarConfig",
    "validate_calendar",
    "parse_mmdd",
    "MONTH_KEYS",
    "TIE_BREAK_POLICIES",
]
