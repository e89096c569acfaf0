"""Trip snapshot - the JSON import/export and persistence shape."""

from typing import Any

from pydantic import BaseModel, Field

from perdiem.models.itinerary import Flight, Hotel
from perdiem.models.trip import Trip

SNAPSHOT_VERSION = 1


class TripSnapshot(BaseModel):
    """Plain-data state of one trip.

    Flight, hotel and transport values are kept as the raw local strings the
    traveler entered. Timeline coordinates are never stored here; they are
    recomputed from these values on every projection.
    """

    version: int = SNAPSHOT_VERSION
    trip: Trip
    flights: list[Flight] = Field(default_factory=list)
    hotels: list[Hotel] = Field(default_factory=list)

    def to_state(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return self.model_dump(mode="json")

    @classmethod
    def from_state(cls, state: dict[str, Any]) -> "TripSnapshot":
        """Rebuild a snapshot from a dict produced by ``to_state``.

        Raises:
            pydantic.ValidationError: If the state is malformed
        """
        return cls.model_validate(state)
