"""Tests for the in-memory trip repository."""

import threading

from perdiem.db.inmemory import InMemoryTripRepository
from perdiem.models import TripSnapshot


def test_save_and_get(tokyo_snapshot: TripSnapshot) -> None:
    """Test that a stored snapshot comes back equal."""
    repo = InMemoryTripRepository()
    repo.save_trip("tokyo", tokyo_snapshot)

    assert repo.get_trip("tokyo") == tokyo_snapshot
    assert repo.get_trip("missing") is None


def test_reads_are_isolated_from_stored_state(tokyo_snapshot: TripSnapshot) -> None:
    """Test that mutating a loaded snapshot does not change the store."""
    repo = InMemoryTripRepository()
    repo.save_trip("tokyo", tokyo_snapshot)

    loaded = repo.get_trip("tokyo")
    loaded.flights.clear()

    assert len(repo.get_trip("tokyo").flights) == 1


def test_list_and_delete(tokyo_snapshot: TripSnapshot) -> None:
    """Test listing order, summaries and deletion."""
    repo = InMemoryTripRepository()
    repo.save_trip("zeta", tokyo_snapshot)
    repo.save_trip("alpha", tokyo_snapshot)

    summaries = repo.list_trips()
    assert [s.name for s in summaries] == ["alpha", "zeta"]
    assert summaries[0].start_date == "2026-04-12"
    assert summaries[0].total_days == 5

    assert repo.delete_trip("alpha") is True
    assert repo.delete_trip("alpha") is False
    assert [s.name for s in repo.list_trips()] == ["zeta"]


def test_concurrent_saves(tokyo_snapshot: TripSnapshot) -> None:
    """Test that parallel writers do not lose trips."""
    repo = InMemoryTripRepository()
    threads = [
        threading.Thread(target=repo.save_trip, args=(f"trip-{i}", tokyo_snapshot)) for i in range(20)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(repo.list_trips()) == 20
