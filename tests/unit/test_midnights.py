"""Tests for the dual-timezone midnight grid."""

from datetime import datetime

import pytest

from perdiem.models import TimezoneSide
from perdiem.timeline.midnights import build_midnights

START = datetime(2026, 4, 12, 12)


def test_same_timezone_has_only_home_marks() -> None:
    """Test a 3-day trip with one clock: four home marks, no destination marks."""
    marks = build_midnights(START, 3, "America/New_York", "America/New_York")

    assert len(marks) == 4
    assert all(m.tz == TimezoneSide.home for m in marks)
    assert [m.day_index for m in marks] == [0, 1, 2, 3]
    assert [m.hours_from_start for m in marks] == [0.0, 24.0, 48.0, 72.0]
    assert marks[0].label == "SUN APR 12"
    assert marks[3].label == "WED APR 15"


def test_missing_destination_has_only_home_marks() -> None:
    """Test that no destination zone means a single clock."""
    marks = build_midnights(START, 2, "America/New_York", None)
    assert len(marks) == 3


def test_eastern_destination_marks() -> None:
    """Test Tokyo midnights, 13 hours ahead of New York in April."""
    marks = build_midnights(START, 2, "America/New_York", "Asia/Tokyo")
    dest = [m for m in marks if m.tz == TimezoneSide.dest]

    # -13 falls below the lower bound; 59 is within (2 + 1) * 24
    assert [m.hours_from_start for m in dest] == [11.0, 35.0, 59.0]
    assert [m.label for m in dest] == ["MON APR 13", "TUE APR 14", "WED APR 15"]
    assert [m.day_index for m in dest] == [1, 2, 3]


def test_destination_mark_before_trip_start_within_bound() -> None:
    """Test that a destination midnight up to 12 hours early is kept."""
    marks = build_midnights(START, 1, "America/New_York", "Europe/London")
    dest = [m for m in marks if m.tz == TimezoneSide.dest]

    assert dest[0].hours_from_start == pytest.approx(-5.0)
    assert dest[0].label == "SUN APR 12"


def test_western_destination_marks() -> None:
    """Test Los Angeles midnights, 3 hours behind New York."""
    marks = build_midnights(START, 2, "America/New_York", "America/Los_Angeles")
    dest = [m.hours_from_start for m in marks if m.tz == TimezoneSide.dest]

    assert dest == [3.0, 27.0, 51.0]


def test_marks_sorted_with_home_first_on_ties() -> None:
    """Test ordering when both clocks agree (London on GMT in January)."""
    marks = build_midnights(datetime(2026, 1, 10, 12), 2, "UTC", "Europe/London")

    # Destination midnights run one day past the home grid
    assert [m.hours_from_start for m in marks] == [0.0, 0.0, 24.0, 24.0, 48.0, 48.0, 72.0]
    assert [m.tz for m in marks[:2]] == [TimezoneSide.home, TimezoneSide.dest]
    positions = [m.hours_from_start for m in marks]
    assert positions == sorted(positions)


def test_degenerate_trip_has_no_marks() -> None:
    """Test empty grids for trips without days."""
    assert build_midnights(START, 0, "America/New_York", "Asia/Tokyo") == []
    assert build_midnights(None, 3, "America/New_York", "Asia/Tokyo") == []
