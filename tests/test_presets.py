"""Resolution tests for every built-in preset.

These tests pin the concrete dates each preset produces and check that
consecutive occurrences never overlap, including the wrap from the last period
of one cycle to the first period of the next.

Run with: pytest tests/test_presets.py -v
"""

from datetime import date, timedelta

import pytest

from timechunks import (
    activate_preset,
    format_chunk,
    list_presets,
    parse,
    resolve,
    sequence,
    shift,
)


def _span(chunk):
    return chunk.start_date, chunk.end_date


# ============================================================================
# Concrete dates
# ============================================================================

class TestUsSemester:
    """us_semester: Fall 08-23, Spring 01-15, Summer 06-01"""

    def test_fall(self):
        fall = resolve(1, 2026, "us_semester")
        assert _span(fall) == (date(2026, 8, 23), date(2027, 1, 14))
        assert fall.ay == "2026-27"

    def test_spring(self):
        assert _span(resolve(2, 2027, "us_semester")) == (date(2027, 1, 15), date(2027, 5, 31))

    def test_summer_wraps_to_next_fall(self):
        """Last period ends the day before the next academic year, not Dec 31"""
        assert _span(resolve(3, 2027, "us_semester")) == (date(2027, 6, 1), date(2027, 8, 22))


class TestUsQuarter:
    """us_quarter: Fall 09-20, Winter 01-05, Spring 03-30, Summer 06-20"""

    @pytest.mark.parametrize("index,year,start,end", [
        (1, 2026, date(2026, 9, 20), date(2027, 1, 4)),
        (2, 2027, date(2027, 1, 5), date(2027, 3, 29)),
        (3, 2027, date(2027, 3, 30), date(2027, 6, 19)),
        (4, 2027, date(2027, 6, 20), date(2027, 9, 19)),
    ])
    def test_dates(self, index, year, start, end):
        assert _span(resolve(index, year, "us_quarter")) == (start, end)

    @pytest.mark.parametrize("stamp,name,year", [
        (20269, "Fall", 2026),
        (202701, "Winter", 2027),
        (202703, "Spring", 2027),
        (202707, "Summer", 2027),
    ])
    def test_yyyym(self, stamp, name, year):
        chunk = parse(stamp, calendar="us_quarter")
        assert (chunk.name, chunk.year) == (name, year)


class TestUkTerms:
    """uk_terms: Michaelmas 10-01, Lent 01-15, Easter 04-22"""

    @pytest.mark.parametrize("text,start,end", [
        ("Michaelmas 2026", date(2026, 10, 1), date(2027, 1, 14)),
        ("Lent 2027", date(2027, 1, 15), date(2027, 4, 21)),
        ("Easter 2027", date(2027, 4, 22), date(2027, 9, 30)),
    ])
    def test_dates(self, text, start, end):
        assert _span(parse(text, calendar="uk_terms")) == (start, end)

    def test_labels(self):
        assert parse("ea27", calendar="uk_terms").ay == "2026-27"


class TestTrimester:
    """trimester: Fall 09-01, Winter 01-10, Spring 04-01"""

    def test_dates(self):
        assert _span(resolve(1, 2026, "trimester")) == (date(2026, 9, 1), date(2027, 1, 9))
        assert _span(resolve(2, 2027, "trimester")) == (date(2027, 1, 10), date(2027, 3, 31))
        assert _span(resolve(3, 2027, "trimester")) == (date(2027, 4, 1), date(2027, 8, 31))


class TestUsFederalFy:
    """us_federal_fy: Q1 10-01, Q2 01-01, Q3 04-01, Q4 07-01"""

    def test_q1(self):
        q1 = parse("q126", calendar="us_federal_fy")
        assert _span(q1) == (date(2026, 10, 1), date(2026, 12, 31))
        assert q1.ay == "2026-27"

    def test_q4_ends_before_next_fy(self):
        assert _span(resolve(4, 2027, "us_federal_fy")) == (date(2027, 7, 1), date(2027, 9, 30))

    @pytest.mark.parametrize("stamp,name,year", [
        (202610, "Q1", 2026),
        (202701, "Q2", 2027),
        (202704, "Q3", 2027),
        (202707, "Q4", 2027),
        (202709, "Q4", 2027),
    ])
    def test_yyyym(self, stamp, name, year):
        chunk = parse(stamp, calendar="us_federal_fy")
        assert (chunk.name, chunk.year) == (name, year)

    def test_sequence_over_one_year(self):
        activate_preset("us_federal_fy")
        run = sequence(parse("q126"), parse("q127"))
        assert len(run) == 5
        assert [c.name for c in run] == ["Q1", "Q2", "Q3", "Q4", "Q1"]


class TestAustraliaSemester:
    """australia_semester: Semester 1 02-22, Semester 2 07-22, bare-year labels"""

    def test_dates(self):
        s1 = resolve(1, 2026, "australia_semester")
        s2 = resolve(2, 2026, "australia_semester")
        assert _span(s1) == (date(2026, 2, 22), date(2026, 7, 21))
        assert _span(s2) == (date(2026, 7, 22), date(2027, 2, 21))
        assert s1.ay == s2.ay == "2026"

    def test_shift_two(self):
        activate_preset("australia_semester")
        nxt = parse("Semester 1 2026") + 2
        assert (nxt.name, nxt.year) == ("Semester 1", 2027)

    def test_key_round_trip(self):
        s2 = resolve(2, 2026, "australia_semester")
        key = format_chunk(s2, "key")
        assert key == "2026_2_07_Semester 2"
        assert parse(key, calendar="australia_semester") == s2


class TestCustomCalendar:
    """Custom quarters whose last period crosses the calendar year"""

    def test_q4_crosses_year(self, retail_quarters):
        q4 = resolve(4, 2025, retail_quarters)
        assert _span(q4) == (date(2025, 12, 1), date(2026, 2, 28))
        assert q4.ay == "2025-26"

    def test_january_maps_to_previous_q4(self, retail_quarters):
        chunk = parse(202601, calendar=retail_quarters)
        assert (chunk.name, chunk.year) == ("Q4", 2025)

    def test_leap_year_q4(self, retail_quarters):
        assert resolve(4, 2027, retail_quarters).end_date == date(2028, 2, 29)


# ============================================================================
# Non-overlap property
# ============================================================================

@pytest.mark.parametrize("preset", list_presets())
def test_presets_never_overlap(preset):
    """Consecutive occurrences over four cycles are contiguous and disjoint"""
    first = resolve(1, 2024, preset)
    n = len(activate_preset(preset).periods)
    run = sequence(first, shift(first, 4 * n))

    assert len(run) == 4 * n + 1
    for a, b in zip(run, run[1:]):
        assert a.start_date <= a.end_date
        assert a.end_date < b.start_date
        assert a.end_date + timedelta(days=1) == b.start_date


def test_custom_calendar_never_overlaps(retail_quarters):
    first = resolve(1, 2023, retail_quarters)
    run = sequence(first, shift(first, 12, retail_quarters), calendar=retail_quarters)
    for a, b in zip(run, run[1:]):
        assert a.end_date + timedelta(days=1) == b.start_date
