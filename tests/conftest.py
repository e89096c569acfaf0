"""Shared pytest fixtures for all test suites."""

from datetime import datetime

import pytest

from perdiem.models import Day, Flight, FlightSegment, Hotel, TransportLeg, Trip, TripSnapshot
from perdiem.models.trip import build_days


def make_trip(
    start: datetime = datetime(2026, 4, 12),
    end: datetime = datetime(2026, 4, 16),
    home_tz: str = "America/New_York",
    dest_tz: str = "Asia/Tokyo",
    **kwargs,
) -> Trip:
    """Helper to create a trip with default days."""
    return Trip(
        home_tz=home_tz,
        dest_tz=dest_tz,
        days=build_days(start, end, kwargs.pop("template", None)),
        **kwargs,
    )


def make_segment(
    segment_id: str,
    dep_port: str,
    arr_port: str,
    dep: tuple[str, str],
    arr: tuple[str, str],
) -> FlightSegment:
    """Helper to create a segment from (date, time) pairs."""
    return FlightSegment(
        id=segment_id,
        dep_port=dep_port,
        arr_port=arr_port,
        dep_date=dep[0],
        dep_time=dep[1],
        arr_date=arr[0],
        arr_time=arr[1],
    )


@pytest.fixture
def tokyo_trip() -> Trip:
    """Five-day New York to Tokyo trip starting 2026-04-12."""
    return make_trip(home_city="New York", dest_city="Tokyo", name="tokyo")


@pytest.fixture
def tokyo_flight() -> Flight:
    """Round trip JFK-NRT with a one-stop return via ORD."""
    return Flight(
        id="f1",
        confirmation="ABC123",
        outbound=[
            make_segment("s1", "JFK", "NRT", ("2026-04-12", "10:00a"), ("2026-04-13", "2:00p")),
        ],
        return_segments=[
            make_segment("s2", "NRT", "ORD", ("2026-04-16", "11:00a"), ("2026-04-16", "9:00a")),
            make_segment("s3", "ORD", "JFK", ("2026-04-16", "11:30a"), ("2026-04-16", "2:45p")),
        ],
        amount=1450.0,
    )


@pytest.fixture
def tokyo_hotel() -> Hotel:
    """Hotel stay from arrival day to departure day."""
    return Hotel(id="h1", name="Park Hotel", check_in="2026-04-13", check_out="2026-04-16", nightly_rate=210.0)


@pytest.fixture
def tokyo_snapshot(tokyo_trip: Trip, tokyo_flight: Flight, tokyo_hotel: Hotel) -> TripSnapshot:
    """Snapshot bundling the Tokyo trip, flight, hotel and two ground legs."""
    trip = tokyo_trip.model_copy(
        update={
            "transport_legs": [
                TransportLeg(id="t1", from_place="Home", to_place="JFK", date="2026-04-12", time="7:00a", mode="uber", amount=65.0),
                TransportLeg(id="t2", from_place="NRT", to_place="Park Hotel", date="2026-04-13", time="3:30p", mode="train", amount=3000.0, currency="JPY"),
            ]
        }
    )
    return TripSnapshot(trip=trip, flights=[tokyo_flight], hotels=[tokyo_hotel])


@pytest.fixture
def single_day() -> list[Day]:
    """One-day trip days."""
    return build_days(datetime(2026, 4, 12), datetime(2026, 4, 12))
