"""Repository protocol interfaces for trip storage."""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from perdiem.models.snapshot import TripSnapshot


@dataclass
class TripSummary:
    """Summary of a stored trip for listing."""

    name: str
    start_date: str | None
    total_days: int
    updated_at: datetime


class TripRepository(Protocol):
    """Key-value store of trip snapshots, keyed by trip name."""

    def save_trip(self, name: str, snapshot: TripSnapshot) -> None:
        """Store a snapshot, replacing any previous one under ``name``.

        Args:
            name: Trip name (storage key)
            snapshot: Trip state to store
        """
        ...

    def get_trip(self, name: str) -> TripSnapshot | None:
        """Get a stored snapshot.

        Args:
            name: Trip name

        Returns:
            Snapshot or None if not found
        """
        ...

    def list_trips(self) -> list[TripSummary]:
        """List stored trips ordered by name."""
        ...

    def delete_trip(self, name: str) -> bool:
        """Delete a stored trip.

        Returns:
            True if a trip was deleted, False if none existed
        """
        ...
