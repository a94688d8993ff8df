"""Shared test fixtures and utilities for timechunks tests."""

import pytest

from timechunks.calendar.calendarapi import (
    activate_preset,
    build_calendar,
    reset_calendar,
)


@pytest.fixture(autouse=True)
def clean_registry():
    """Reset the process-wide calendar around every test.

    Tests that need an ambient calendar install one explicitly (or use the
    ``semester`` fixture), so no test depends on another's registry state.
    """
    reset_calendar()
    yield
    reset_calendar()


@pytest.fixture
def semester():
    """Activate the us_semester preset (Fall 08-23, Spring 01-15, Summer 06-01)."""
    return activate_preset("us_semester")


@pytest.fixture
def retail_quarters():
    """Custom quarter calendar whose last period crosses the calendar year.

    Q1 03-01, Q2 06-01, Q3 09-01, Q4 12-01; the year starts with Q1.
    """
    return build_calendar(
        [
            {"name": "Q1", "code": "q1", "start_mmdd": "03-01"},
            {"name": "Q2", "code": "q2", "start_mmdd": "06-01"},
            {"name": "Q3", "code": "q3", "start_mmdd": "09-01"},
            {"name": "Q4", "code": "q4", "start_mmdd": "12-01"},
        ],
        "Q1",
        display_name="retail",
    )


@pytest.fixture
def sample_codes():
    """Fixture providing a run of us_semester codes in chronological order."""
    return ["fa26", "sp27", "su27", "fa27", "sp28"]
