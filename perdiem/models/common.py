"""Common types and enums shared across all models."""

from enum import Enum


class TimezoneSide(str, Enum):
    """Which of the trip's two clocks a value belongs to."""

    home = "home"
    dest = "dest"


class EventKind(str, Enum):
    """Timeline event discriminator."""

    flight = "flight"
    hotel = "hotel"
    transport = "transport"


class TransportMode(str, Enum):
    """Ground transport mode."""

    taxi = "taxi"
    uber = "uber"
    train = "train"
    bus = "bus"
    drive = "drive"
    walk = "walk"


class PlaceKind(str, Enum):
    """Classification of a transport endpoint token."""

    home = "home"
    airport = "airport"
    hotel = "hotel"
    work = "work"
    other = "other"


class HotelCostMode(str, Enum):
    """How a hotel stay's price was entered."""

    nightly = "nightly"
    total = "total"
    per_night = "per_night"


class FlightDirection(str, Enum):
    """Which segment list of a booking a segment belongs to."""

    outbound = "outbound"
    return_ = "return"
