"""Violation models - advisory findings about an itinerary."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

# JSON-serializable value types for violation details
JsonValue = str | int | float | bool | None | dict[str, Any] | list[Any]


class ViolationSeverity(str, Enum):
    """Severity levels for itinerary findings."""

    ADVISORY = "advisory"
    BLOCKING = "blocking"


class ViolationKind(str, Enum):
    """Categories of itinerary checks."""

    LAYOVER = "layover"
    LODGING = "lodging"
    HOTEL = "hotel"


class Violation(BaseModel):
    """A finding raised while checking a trip.

    Findings never block projection; they are reported alongside it so the
    traveler can fix the entered data.
    """

    kind: ViolationKind
    code: str  # Machine-usable short code, e.g., "LAYOVER_OVERLAP"
    message: str  # Human-readable description (1-2 sentences)
    severity: ViolationSeverity
    affected_ids: list[str]
    details: dict[str, JsonValue] = Field(default_factory=dict)
