"""Itinerary models - flights, hotel stays and ground transport legs.

All local dates and times are stored exactly as entered. They are parsed
again on every projection and never persisted in normalized form.
"""

from pydantic import BaseModel, Field, model_validator

from perdiem.adapters.airports import is_airport_code
from perdiem.models.common import FlightDirection, HotelCostMode, PlaceKind, TransportMode
from perdiem.timeline.clock import parse_local_calendar_date

WORK_TOKENS = ("work", "office", "meeting", "conference", "briefcase")


class FlightSegment(BaseModel):
    """One scheduled flight leg in local airport times."""

    id: str
    dep_port: str = ""
    arr_port: str = ""
    dep_date: str = ""
    arr_date: str = ""
    dep_time: str = ""
    arr_time: str = ""
    airline_code: str = ""
    flight_number: str = ""
    seat: str = ""


class Flight(BaseModel):
    """A round- or multi-trip booking owning ordered segment lists."""

    id: str
    confirmation: str = ""
    outbound: list[FlightSegment] = Field(default_factory=list)
    return_segments: list[FlightSegment] = Field(default_factory=list)
    amount: float = 0.0
    currency: str = "USD"

    def iter_segments(self) -> list[tuple[FlightDirection, int, FlightSegment]]:
        """Segments in booking order, tagged with direction and list index."""
        tagged = [(FlightDirection.outbound, i, s) for i, s in enumerate(self.outbound)]
        tagged += [(FlightDirection.return_, i, s) for i, s in enumerate(self.return_segments)]
        return tagged


class Hotel(BaseModel):
    """A lodging stay, always interpreted in the destination time zone."""

    id: str
    name: str = ""
    check_in: str = ""
    check_out: str = ""
    check_in_time: str = ""
    check_out_time: str = ""
    cost_mode: HotelCostMode = HotelCostMode.nightly
    nightly_rate: float = 0.0
    total_cost: float = 0.0
    per_night_costs: list[float] = Field(default_factory=list)
    currency: str = "USD"

    @model_validator(mode="after")
    def validate_check_out_not_before_check_in(self) -> "Hotel":
        """Reject stays that end before they start.

        Dates that do not parse yet are allowed through; the projector skips
        such stays until they are fixed.
        """
        check_in = parse_local_calendar_date(self.check_in)
        check_out = parse_local_calendar_date(self.check_out)
        if check_in and check_out and check_out < check_in:
            raise ValueError(f"check_out {self.check_out} is before check_in {self.check_in}")
        return self


def place_kind(token: str | None) -> PlaceKind:
    """Classify a transport endpoint token."""
    if not token or not token.strip():
        return PlaceKind.other
    t = token.strip().lower()
    if t == "home" or t.startswith("home "):
        return PlaceKind.home
    if "hotel" in t:
        return PlaceKind.hotel
    if any(w in t for w in WORK_TOKENS):
        return PlaceKind.work
    if is_airport_code(token):
        return PlaceKind.airport
    return PlaceKind.other


def classify_is_home(from_place: str | None, to_place: str | None) -> bool:
    """A leg touching "home" runs on the home clock; anything else on the destination clock."""
    return PlaceKind.home in (place_kind(from_place), place_kind(to_place))


class TransportLeg(BaseModel):
    """A point-to-point ground movement.

    ``is_home`` is classified from the endpoints once, when the leg is created
    without it, and is stored from then on. Editing endpoints later does not
    reclassify the leg.
    """

    id: str
    from_place: str = ""
    to_place: str = ""
    date: str = ""
    time: str = ""
    duration_min: int | None = Field(default=None, ge=0)
    end_time: str = ""
    mode: TransportMode = TransportMode.uber
    amount: float = 0.0
    currency: str = "USD"
    is_home: bool | None = None

    @model_validator(mode="after")
    def classify_once(self) -> "TransportLeg":
        """Fill ``is_home`` from the place tokens when it was not supplied."""
        if self.is_home is None:
            self.is_home = classify_is_home(self.from_place, self.to_place)
        return self
