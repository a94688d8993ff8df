"""Integration tests for the public API.

These tests verify that the main public API (timechunks/__init__.py) works
end to end: install a calendar, parse, do arithmetic, format and roll up.

For unit tests of specific modules, see:
- calendar/test_calendarapi.py - Registry, presets, AY labels
- chunks/test_chunkparse.py - Input dispatch
- chunks/test_chunkarith.py - Shift, distance, sequence
- test_presets.py - Concrete dates for every preset

Run with: pytest tests/test_api.py
"""

from datetime import date

import pandas as pd
import pytest

import timechunks
from timechunks import (
    TimeChunkError,
    activate_preset,
    calendar_context,
    format_chunk,
    parse,
    rollup_to_ay,
    sequence,
    set_calendar,
)


class TestPublicSurface:
    """Test that the documented names are exported"""

    def test_all_exports_resolve(self):
        for name in timechunks.__all__:
            assert hasattr(timechunks, name), name

    def test_version(self):
        assert timechunks.__version__ == "0.0.1"

    def test_errors_share_base(self):
        for name in timechunks.__all__:
            obj = getattr(timechunks, name)
            if isinstance(obj, type) and issubclass(obj, Exception) and not issubclass(obj, Warning):
                assert issubclass(obj, TimeChunkError), name


class TestSemesterWorkflow:
    """End-to-end scenario on the us_semester preset"""

    def test_scenario(self):
        activate_preset("us_semester")

        fall = parse("fa26")
        assert (fall.start_date, fall.end_date, fall.ay) == (
            date(2026, 8, 23), date(2027, 1, 14), "2026-27",
        )

        spring = fall + 1
        assert str(spring) == "Spring 2027"
        assert spring.end_date == date(2027, 5, 31)
        assert (fall + 2).end_date == date(2027, 8, 22)

        assert parse("sp27") - fall == 1
        assert parse("fa27") - fall == 3
        assert parse("20268") == fall
        assert parse("202701") == spring

        run = sequence(fall, parse("fa27"))
        assert len(run) == 4
        with pytest.raises(timechunks.ChunkArithmeticError):
            sequence(parse("fa27"), fall, 1)

    def test_dataframe_workflow(self):
        activate_preset("us_semester")
        df = pd.DataFrame({
            "semester": parse(pd.Series(["fa26", "sp27", "su27", "fa27"])),
            "credits": [15, 14, 6, 15],
        })
        df["label"] = format_chunk(df["semester"], "code")
        result = rollup_to_ay(df, "credits")
        assert result.to_dict("records") == [
            {"ay": "2026-27", "credits": 35},
            {"ay": "2027-28", "credits": 15},
        ]
        assert df["label"].tolist() == ["fa26", "sp27", "su27", "fa27"]


class TestCustomCalendarWorkflow:
    """Custom calendars and scoping through the top-level API"""

    def test_custom(self):
        set_calendar({
            "periods": [
                {"name": "Autumn", "code": "au", "start_mmdd": "09-15"},
                {"name": "Spring", "code": "sp", "start_mmdd": "02-01"},
            ],
            "year_start_period": "Autumn",
            "display_name": "two_term",
        })
        autumn = parse("Autumn 2026")
        assert autumn.end_date == date(2027, 1, 31)
        assert str(autumn + 1) == "Spring 2027"
        assert (autumn + 1).end_date == date(2027, 9, 14)

    def test_scoped_calendar(self):
        activate_preset("us_semester")
        with calendar_context("us_federal_fy"):
            assert str(parse("q126")) == "Q1 2026"
        assert str(parse("fa26")) == "Fall 2026"
