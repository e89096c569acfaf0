"""Timeline models - derived, render-ready projection output."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from perdiem.models.common import FlightDirection, TimezoneSide, TransportMode


class _TimelineEventBase(BaseModel):
    """Position of an event on the home-timezone axis."""

    model_config = ConfigDict(frozen=True)

    event_id: str
    start_hours: float
    end_hours: float


class FlightEvent(_TimelineEventBase):
    """One flight segment placed on the timeline."""

    kind: Literal["flight"] = "flight"
    flight_id: str
    segment_id: str
    direction: FlightDirection
    segment_index: int
    dep_port: str
    arr_port: str
    dep_tz: str
    arr_tz: str
    airline_code: str = ""
    flight_number: str = ""
    seat: str = ""
    confirmation: str = ""
    # Departure/arrival clock labels, in home and destination time
    dep_home_clock: str
    arr_home_clock: str
    dep_dest_clock: str
    arr_dest_clock: str


class HotelEvent(_TimelineEventBase):
    """A hotel stay placed on the timeline."""

    kind: Literal["hotel"] = "hotel"
    hotel_id: str
    name: str = ""


class TransportEvent(_TimelineEventBase):
    """A ground transport leg placed on the timeline."""

    kind: Literal["transport"] = "transport"
    leg_id: str
    from_place: str
    to_place: str
    mode: TransportMode
    is_home: bool
    day_index: int
    start_clock: str
    end_clock: str


TimelineEvent = Annotated[FlightEvent | HotelEvent | TransportEvent, Field(discriminator="kind")]


class MidnightMark(BaseModel):
    """A date boundary of one of the two clocks, in home-axis hours."""

    model_config = ConfigDict(frozen=True)

    hours_from_start: float
    tz: TimezoneSide
    label: str
    day_index: int


class SkippedEvent(BaseModel):
    """An event omitted from a projection pass and why."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["flight", "hotel", "transport"]
    source_id: str
    reason: str


class Projection(BaseModel):
    """Complete projector output for one render cycle."""

    events: list[TimelineEvent] = Field(default_factory=list)
    midnights: list[MidnightMark] = Field(default_factory=list)
    skipped: list[SkippedEvent] = Field(default_factory=list)
    total_days: int = 0
