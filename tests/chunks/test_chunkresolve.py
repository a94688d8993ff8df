"""Tests for the TimeChunk value type and period resolution.

Run with: pytest tests/chunks/test_chunkresolve.py -v
"""

from datetime import date

import pytest

from timechunks import (
    InvalidChunkError,
    NoCalendarError,
    TimeChunk,
    build_calendar,
    parse,
    resolve,
)


# ============================================================================
# Resolution
# ============================================================================

class TestResolve:
    """Test (period_index, year) -> TimeChunk"""

    def test_fields(self, semester):
        fall = resolve(1, 2026)
        assert fall == TimeChunk(
            start_date=date(2026, 8, 23),
            end_date=date(2027, 1, 14),
            name="Fall",
            code="fa",
            year=2026,
            period_index=1,
            ay="2026-27",
        )

    @pytest.mark.parametrize("index", [0, 4, -1, 1.0, "1", True])
    def test_index_out_of_range(self, semester, index):
        with pytest.raises(InvalidChunkError):
            resolve(index, 2026)

    def test_year_out_of_range(self, semester):
        with pytest.raises(InvalidChunkError, match="date range"):
            resolve(1, 9999)

    def test_no_calendar(self):
        with pytest.raises(NoCalendarError):
            resolve(1, 2026)

    def test_end_override(self):
        cal = build_calendar(
            [
                {"name": "Fall", "code": "fa", "start_mmdd": "09-01", "end_mmdd": "12-20"},
                {"name": "Spring", "code": "sp", "start_mmdd": "01-15", "end_mmdd": "05-10"},
            ],
            "Fall",
        )
        assert resolve(1, 2026, cal).end_date == date(2026, 12, 20)
        assert resolve(2, 2027, cal).end_date == date(2027, 5, 10)

    def test_end_override_crossing_year(self):
        cal = build_calendar(
            [
                {"name": "Winter", "code": "wi", "start_mmdd": "11-01", "end_mmdd": "02-15"},
                {"name": "Summer", "code": "su", "start_mmdd": "05-01"},
            ],
            "Winter",
        )
        assert resolve(1, 2026, cal).end_date == date(2027, 2, 15)


# ============================================================================
# Value semantics
# ============================================================================

class TestTimeChunk:
    """Test TimeChunk invariants, ordering and display"""

    def test_na(self):
        na = TimeChunk.na()
        assert na.is_na
        assert na.mid_date is None
        assert str(na) == "NA"
        assert na == TimeChunk()

    def test_partial_fields_rejected(self):
        with pytest.raises(InvalidChunkError, match="all present or all absent"):
            TimeChunk(start_date=date(2026, 1, 1))

    def test_end_before_start_rejected(self):
        with pytest.raises(InvalidChunkError, match="before start_date"):
            TimeChunk(date(2026, 2, 1), date(2026, 1, 1), "X", "x", 2026, 1, "2025-26")

    def test_bad_index_rejected(self):
        with pytest.raises(InvalidChunkError):
            TimeChunk(date(2026, 1, 1), date(2026, 2, 1), "X", "x", 2026, 0, "2025-26")

    def test_immutable(self, semester):
        with pytest.raises(AttributeError):
            parse("fa26").year = 2027

    def test_mid_date_truncates(self, semester):
        fall = parse("fa26")
        # 2026-08-23 .. 2027-01-14 is 145 days; midpoint truncates
        assert fall.mid_date == date(2026, 11, 3)

    def test_str(self, semester):
        assert str(parse("sp27")) == "Spring 2027"

    def test_sorting(self, semester):
        chunks = parse(["su27", None, "fa26", "sp27"])
        assert [str(c) for c in sorted(chunks)] == ["Fall 2026", "Spring 2027", "Summer 2027", "NA"]

    def test_comparisons(self, semester):
        fall, spring = parse(["fa26", "sp27"])
        assert fall < spring
        assert spring >= fall
        assert max(fall, spring) == spring

    def test_hashable(self, semester):
        assert len({parse("fa26"), parse("Fall 2026"), parse(20268)}) == 1

    def test_compare_with_other_type(self, semester):
        with pytest.raises(TypeError):
            parse("fa26") < "fa27"
