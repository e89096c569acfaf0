"""Tests for timezone resolution, offsets and airport tables."""

import logging
from datetime import UTC, datetime

import pytest

from perdiem.adapters.airports import airport_city, airport_timezone, is_airport_code
from perdiem.timeline.zones import ZoneContext, offset_hours, resolve_timezone

APRIL = datetime(2026, 4, 13, 12)


@pytest.fixture
def context() -> ZoneContext:
    """New York home, Tokyo destination."""
    return ZoneContext(
        home_tz="America/New_York",
        dest_tz="Asia/Tokyo",
        home_city="New York",
        dest_city="Tokyo",
    )


# Airport table tests


def test_airport_timezone_lookup_normalizes_code() -> None:
    """Test case and whitespace insensitivity."""
    assert airport_timezone("JFK") == "America/New_York"
    assert airport_timezone(" nrt ") == "Asia/Tokyo"
    assert airport_timezone("GRR") == "America/Detroit"


def test_airport_lookups_return_none_for_unknown() -> None:
    """Test that unknown codes are None."""
    assert airport_timezone("ZZZ") is None
    assert airport_timezone("") is None
    assert airport_city(None) is None


def test_airport_city_and_code_detection() -> None:
    """Test city labels and code detection."""
    assert airport_city("LHR") == "London"
    assert is_airport_code("cph")
    assert not is_airport_code("Hotel")
    assert not is_airport_code("ZZZ")


# Resolver tests


def test_resolve_prefers_airport_code(context: ZoneContext) -> None:
    """Test that a known airport wins over city matching."""
    assert resolve_timezone("NRT", context) == "Asia/Tokyo"
    assert resolve_timezone("ord", context) == "America/Chicago"


def test_resolve_matches_city_labels(context: ZoneContext) -> None:
    """Test substring matching against home, then destination city."""
    assert resolve_timezone("New York Penn Station", context) == "America/New_York"
    assert resolve_timezone("Tokyo Station", context) == "Asia/Tokyo"
    assert resolve_timezone("tokyo", context) == "Asia/Tokyo"


def test_resolve_falls_back_to_preferred_then_home(context: ZoneContext) -> None:
    """Test the final tiers of the fallback chain."""
    assert resolve_timezone("Somewhere", context, preferred="Asia/Tokyo") == "Asia/Tokyo"
    assert resolve_timezone("Somewhere", context) == "America/New_York"
    assert resolve_timezone(None, context) == "America/New_York"
    assert resolve_timezone("  ", context, preferred="Europe/London") == "Europe/London"


def test_resolve_uses_injected_airport_lookup() -> None:
    """Test that the airport table is a replaceable dependency."""
    ctx = ZoneContext(
        home_tz="America/New_York",
        dest_tz="Europe/Madrid",
        airport_timezone=lambda code: "Pacific/Auckland" if code == "XYZ" else None,
    )
    assert resolve_timezone("XYZ", ctx) == "Pacific/Auckland"
    assert resolve_timezone("JFK", ctx) == "America/New_York"


def test_unknown_airport_code_uses_city_tier() -> None:
    """Test that a 3-letter token without airport data still matches cities."""
    ctx = ZoneContext(home_tz="America/New_York", dest_tz="Europe/Rome", dest_city="Rom")
    assert resolve_timezone("ROM", ctx) == "Europe/Rome"


# Offset tests


@pytest.mark.parametrize("tz", ["America/New_York", "Asia/Tokyo", "Asia/Kolkata", "UTC"])
def test_offset_is_zero_for_same_zone(tz: str) -> None:
    """Test offset(t, a, a) == 0."""
    assert offset_hours(APRIL, tz, tz) == 0.0


@pytest.mark.parametrize(
    ("tz_a", "tz_b"),
    [
        ("Asia/Tokyo", "America/New_York"),
        ("Europe/London", "America/Los_Angeles"),
        ("Asia/Kolkata", "America/New_York"),
        ("Australia/Sydney", "Europe/Madrid"),
    ],
)
@pytest.mark.parametrize("instant", [APRIL, datetime(2026, 1, 15, 12), datetime(2026, 11, 1, 12)])
def test_offset_is_antisymmetric(tz_a: str, tz_b: str, instant: datetime) -> None:
    """Test offset(t, a, b) == -offset(t, b, a)."""
    assert offset_hours(instant, tz_a, tz_b) == -offset_hours(instant, tz_b, tz_a)


def test_offset_tokyo_new_york_tracks_dst() -> None:
    """Test that New York daylight saving changes the gap to Tokyo."""
    assert offset_hours(APRIL, "Asia/Tokyo", "America/New_York") == 13.0
    assert offset_hours(datetime(2026, 1, 15, 12), "Asia/Tokyo", "America/New_York") == 14.0


def test_offset_during_mismatched_dst_window() -> None:
    """Test the weeks when the US has switched to DST and the UK has not."""
    assert offset_hours(datetime(2026, 3, 16, 12), "Europe/London", "America/New_York") == 4.0
    assert offset_hours(datetime(2026, 4, 15, 12), "Europe/London", "America/New_York") == 5.0


def test_offset_supports_fractional_zones() -> None:
    """Test half-hour zones."""
    assert offset_hours(APRIL, "Asia/Kolkata", "UTC") == 5.5


def test_offset_accepts_aware_instants() -> None:
    """Test that aware datetimes are compared at their absolute instant."""
    instant = datetime(2026, 4, 13, 3, tzinfo=UTC)
    assert offset_hours(instant, "Asia/Tokyo", "America/New_York") == 13.0


def test_offset_is_zero_for_missing_zone() -> None:
    """Test that a missing zone never raises."""
    assert offset_hours(APRIL, None, "Asia/Tokyo") == 0.0
    assert offset_hours(APRIL, "Asia/Tokyo", "") == 0.0


def test_offset_logs_and_returns_zero_for_unknown_zone(caplog: pytest.LogCaptureFixture) -> None:
    """Test that an unknown IANA id is logged and treated as zero offset."""
    with caplog.at_level(logging.WARNING, logger="perdiem.timeline.zones"):
        result = offset_hours(datetime(2026, 6, 1, 12), "Nowhere/Atlantis", "UTC")

    assert result == 0.0
    assert "Nowhere/Atlantis" in caplog.text
