"""In-memory implementation of the trip repository."""

import threading
from datetime import UTC, datetime
from typing import Any

from perdiem.db.repositories import TripSummary
from perdiem.models.snapshot import TripSnapshot
from perdiem.timeline.clock import format_date


class InMemoryTripRepository:
    """In-memory implementation of TripRepository.

    Snapshots are held as plain JSON state, the way an external document
    store would hold them, and rebuilt on read so callers never share
    mutable model instances.
    """

    def __init__(self) -> None:
        self._trips: dict[str, tuple[dict[str, Any], datetime]] = {}
        self._lock = threading.Lock()

    def save_trip(self, name: str, snapshot: TripSnapshot) -> None:
        """Store a snapshot under ``name``."""
        state = snapshot.to_state()
        with self._lock:
            self._trips[name] = (state, datetime.now(UTC))

    def get_trip(self, name: str) -> TripSnapshot | None:
        """Get a stored snapshot by name."""
        with self._lock:
            entry = self._trips.get(name)
        if entry is None:
            return None
        return TripSnapshot.from_state(entry[0])

    def list_trips(self) -> list[TripSummary]:
        """List stored trips ordered by name."""
        with self._lock:
            items = sorted(self._trips.items())

        summaries = []
        for name, (state, updated_at) in items:
            snapshot = TripSnapshot.from_state(state)
            start = snapshot.trip.start_date
            summaries.append(
                TripSummary(
                    name=name,
                    start_date=format_date(start) if start else None,
                    total_days=snapshot.trip.total_days,
                    updated_at=updated_at,
                )
            )
        return summaries

    def delete_trip(self, name: str) -> bool:
        """Delete a stored trip."""
        with self._lock:
            return self._trips.pop(name, None) is not None
