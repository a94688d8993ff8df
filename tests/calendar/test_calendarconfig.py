"""Tests for calendar configuration validation.

Run with: pytest tests/calendar/test_calendarconfig.py -v
"""

import logging

import pytest

from timechunks.calendar.calendarconfig import (
    CalendarConfig,
    PeriodDefinition,
    parse_mmdd,
)
from timechunks.errors import CalendarConfigError, TimeChunkError


def _periods():
    return [
        {"name": "Fall", "code": "fa", "start_mmdd": "08-23"},
        {"name": "Spring", "code": "sp", "start_mmdd": "01-15"},
        {"name": "Summer", "code": "su", "start_mmdd": "06-01"},
    ]


def _config(**overrides):
    data = {"periods": _periods(), "year_start_period": "Fall"}
    data.update(overrides)
    return CalendarConfig.from_dict(data)


# ============================================================================
# MM-DD parsing
# ============================================================================

class TestParseMmdd:
    """Test MM-DD validation"""

    def test_valid(self):
        assert parse_mmdd("08-23") == (8, 23)
        assert parse_mmdd("12-31") == (12, 31)

    @pytest.mark.parametrize("value", ["8-23", "08/23", "0823", "", None, 823])
    def test_bad_format(self, value):
        with pytest.raises(CalendarConfigError, match="MM-DD"):
            parse_mmdd(value)

    @pytest.mark.parametrize("value", ["13-01", "00-10"])
    def test_bad_month(self, value):
        with pytest.raises(CalendarConfigError, match="month"):
            parse_mmdd(value)

    @pytest.mark.parametrize("value", ["04-31", "01-00", "02-30"])
    def test_bad_day(self, value):
        with pytest.raises(CalendarConfigError, match="day"):
            parse_mmdd(value)

    def test_leap_day_rejected(self):
        """02-29 cannot start a period every year"""
        with pytest.raises(CalendarConfigError):
            parse_mmdd("02-29")


# ============================================================================
# Construction
# ============================================================================

class TestCalendarConfig:
    """Test building valid calendars"""

    def test_from_dict(self):
        cal = _config()
        assert cal.period_names == ("Fall", "Spring", "Summer")
        assert cal.period_codes == ("fa", "sp", "su")
        assert cal.period_count == 3
        assert cal.year_start.name == "Fall"
        assert cal.display_name == "custom"
        assert cal.month_tie_break == "latest"
        assert all(isinstance(p, PeriodDefinition) for p in cal.periods)

    def test_index_and_period_lookup(self):
        cal = _config()
        assert cal.index_of("Summer") == 3
        assert cal.period(2).code == "sp"
        with pytest.raises(KeyError):
            cal.index_of("Winter")

    def test_frozen(self):
        cal = _config()
        with pytest.raises(AttributeError):
            cal.display_name = "changed"

    def test_hashable_with_overrides(self):
        cal = _config(month_overrides={"07": "Summer"})
        assert hash(cal) == hash(_config(month_overrides={"07": "Summer"}))

    def test_int_month_override_keys(self):
        """Unquoted YAML month keys load as ints"""
        cal = _config(month_overrides={7: "Summer"})
        assert cal.month_overrides == {"07": "Summer"}

    def test_to_dict_round_trip(self):
        cal = _config(single_year_label=True, display_name="demo")
        assert CalendarConfig.from_dict(cal.to_dict()) == cal

    def test_end_override_accepted(self):
        periods = _periods()
        periods[0]["end_mmdd"] = "12-20"
        cal = _config(periods=periods)
        assert cal.periods[0].end_mmdd == "12-20"

    def test_year_start_not_first_warns(self, caplog):
        """A year-start period later in the cycle is allowed but logged"""
        with caplog.at_level(logging.WARNING, logger="timechunks.calendar.calendarconfig"):
            _config(year_start_period="Spring")
        assert "not first in cycle order" in caplog.text


# ============================================================================
# Validation failures
# ============================================================================

class TestValidation:
    """Test that invalid calendars raise CalendarConfigError"""

    def test_error_hierarchy(self):
        with pytest.raises(TimeChunkError):
            _config(periods=[])
        with pytest.raises(ValueError):
            _config(periods=[])

    def test_empty_periods(self):
        with pytest.raises(CalendarConfigError, match="non-empty"):
            _config(periods=[])

    def test_missing_field(self):
        with pytest.raises(CalendarConfigError, match="code"):
            _config(periods=[{"name": "Fall", "start_mmdd": "08-23"}])

    def test_unknown_period_field(self):
        periods = _periods()
        periods[0]["colour"] = "red"
        with pytest.raises(CalendarConfigError, match="colour"):
            _config(periods=periods)

    def test_unknown_calendar_field(self):
        with pytest.raises(CalendarConfigError, match="yyyym_strict"):
            _config(yyyym_strict=True)

    def test_missing_year_start(self):
        with pytest.raises(CalendarConfigError, match="year_start_period"):
            CalendarConfig.from_dict({"periods": _periods()})

    def test_bad_start(self):
        periods = _periods()
        periods[1]["start_mmdd"] = "02-29"
        with pytest.raises(CalendarConfigError, match="Spring"):
            _config(periods=periods)

    def test_duplicate_names(self):
        periods = _periods()
        periods[2]["name"] = "Fall"
        with pytest.raises(CalendarConfigError, match="Duplicate period names"):
            _config(periods=periods)

    def test_duplicate_codes_case_insensitive(self):
        periods = _periods()
        periods[2]["code"] = "FA"
        with pytest.raises(CalendarConfigError, match="Duplicate period codes"):
            _config(periods=periods)

    def test_year_start_not_a_name(self):
        with pytest.raises(CalendarConfigError, match="Winter"):
            _config(year_start_period="Winter")

    def test_bad_override_key(self):
        with pytest.raises(CalendarConfigError, match="month keys"):
            _config(month_overrides={"13": "Fall"})

    def test_bad_override_value(self):
        with pytest.raises(CalendarConfigError, match="Winter"):
            _config(month_overrides={"12": "Winter"})

    def test_unknown_tie_break(self):
        with pytest.raises(CalendarConfigError, match="month_tie_break"):
            _config(month_tie_break="middle")

    def test_end_override_overlaps_next_period(self):
        periods = _periods()
        periods[0]["end_mmdd"] = "01-20"  # Spring starts 01-15
        with pytest.raises(CalendarConfigError, match="overlaps"):
            _config(periods=periods)

    def test_last_period_end_override_overlaps_year_start(self):
        periods = _periods()
        periods[2]["end_mmdd"] = "08-30"  # Fall starts 08-23
        with pytest.raises(CalendarConfigError, match="overlaps"):
            _config(periods=periods)
