"""Models package - re-exports for convenience."""

from perdiem.models.common import (
    EventKind,
    FlightDirection,
    HotelCostMode,
    PlaceKind,
    TimezoneSide,
    TransportMode,
)
from perdiem.models.expenses import LodgingStatus, TripTotals
from perdiem.models.itinerary import Flight, FlightSegment, Hotel, TransportLeg
from perdiem.models.per_diem import (
    DayAccrual,
    DayPerDiem,
    EffectiveDayRates,
    MealBreakdown,
    PerDiemRates,
)
from perdiem.models.snapshot import TripSnapshot
from perdiem.models.timeline import (
    FlightEvent,
    HotelEvent,
    MidnightMark,
    Projection,
    SkippedEvent,
    TimelineEvent,
    TransportEvent,
)
from perdiem.models.trip import Day, LodgingParams, MealFlags, Trip
from perdiem.models.violations import Violation

__all__ = [
    # Common
    "EventKind",
    "FlightDirection",
    "HotelCostMode",
    "PlaceKind",
    "TimezoneSide",
    "TransportMode",
    # Itinerary
    "Flight",
    "FlightSegment",
    "Hotel",
    "TransportLeg",
    # Trip
    "Trip",
    "Day",
    "MealFlags",
    "LodgingParams",
    # Per diem
    "PerDiemRates",
    "MealBreakdown",
    "DayAccrual",
    "DayPerDiem",
    "EffectiveDayRates",
    # Expenses
    "LodgingStatus",
    "TripTotals",
    # Timeline
    "FlightEvent",
    "HotelEvent",
    "TransportEvent",
    "TimelineEvent",
    "MidnightMark",
    "SkippedEvent",
    "Projection",
    # Snapshot
    "TripSnapshot",
    # Violations
    "Violation",
]
