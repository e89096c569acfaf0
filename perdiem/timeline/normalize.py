"""Event normalizer - local-time events to home-axis hour coordinates.

Each function turns one domain event into a positioned timeline event whose
``start_hours``/``end_hours`` count hours from local midnight of the trip's
first day on the home clock. A value that cannot be parsed raises
``UnparseableValueError``; the projector catches it and skips only that event.
"""

from dataclasses import dataclass
from datetime import datetime

from perdiem.config import get_settings
from perdiem.models.common import FlightDirection
from perdiem.models.itinerary import Flight, FlightSegment, Hotel, TransportLeg
from perdiem.models.timeline import FlightEvent, HotelEvent, TransportEvent
from perdiem.timeline.clock import (
    day_offset,
    format_hours_of_day,
    parse_local_calendar_date,
    parse_local_time_of_day,
)
from perdiem.timeline.zones import ZoneContext, offset_hours, resolve_timezone


class UnparseableValueError(ValueError):
    """A local date or time on an event matched no accepted pattern."""

    def __init__(self, field: str, value: str | None) -> None:
        self.field = field
        self.value = value
        super().__init__(f"unparseable {field}: {value!r}")


@dataclass(frozen=True)
class AxisFrame:
    """Origin and extent of the home-timezone axis for one projection."""

    trip_start: datetime
    total_days: int
    context: ZoneContext

    @property
    def total_hours(self) -> float:
        return self.total_days * 24.0

    def contains(self, start_hours: float, end_hours: float, slack_hours: float) -> bool:
        """False when ``[start, end]`` lies entirely outside the padded window."""
        return end_hours >= -slack_hours and start_hours <= self.total_hours + slack_hours


def _require_date(value: str | None, field: str, frame: AxisFrame) -> datetime:
    parsed = parse_local_calendar_date(value, reference_year=frame.trip_start.year)
    if parsed is None:
        raise UnparseableValueError(field, value)
    return parsed


def _require_time(value: str | None, field: str) -> float:
    parsed = parse_local_time_of_day(value)
    if parsed is None:
        raise UnparseableValueError(field, value)
    return parsed


def _optional_time(value: str | None, field: str, default: float) -> float:
    if value is None or not value.strip():
        return default
    return _require_time(value, field)


def to_axis_hours(local_date: datetime, local_hours: float, tz: str, frame: AxisFrame) -> float:
    """Place a local wall-clock reading in ``tz`` on the home axis."""
    shift = offset_hours(local_date, tz, frame.context.home_tz)
    return day_offset(local_date, frame.trip_start) * 24 + local_hours - shift


def dest_clock(home_hours: float, at: datetime, frame: AxisFrame) -> str:
    """Destination wall-clock label for a home-axis position."""
    ctx = frame.context
    return format_hours_of_day(home_hours + offset_hours(at, ctx.dest_tz, ctx.home_tz))


def normalize_flight_segment(
    flight: Flight,
    direction: FlightDirection,
    index: int,
    segment: FlightSegment,
    frame: AxisFrame,
) -> FlightEvent:
    """Project one flight segment.

    Ports resolve through the airport table, then city-name matching, and
    default to the destination clock. When the converted arrival lands before
    the departure, the arrival date was entered for the wrong calendar day
    and the arrival moves forward 24 hours.

    Raises:
        UnparseableValueError: If a departure/arrival date or time is invalid
    """
    ctx = frame.context
    dep_date = _require_date(segment.dep_date, "dep_date", frame)
    arr_date = _require_date(segment.arr_date, "arr_date", frame)
    dep_time = _require_time(segment.dep_time, "dep_time")
    arr_time = _require_time(segment.arr_time, "arr_time")

    dep_tz = resolve_timezone(segment.dep_port, ctx, preferred=ctx.dest_tz)
    arr_tz = resolve_timezone(segment.arr_port, ctx, preferred=ctx.dest_tz)

    start = to_axis_hours(dep_date, dep_time, dep_tz, frame)
    end = to_axis_hours(arr_date, arr_time, arr_tz, frame)
    if end < start:
        end += 24

    return FlightEvent(
        event_id=f"flight:{flight.id}:{segment.id}",
        start_hours=start,
        end_hours=end,
        flight_id=flight.id,
        segment_id=segment.id,
        direction=direction,
        segment_index=index,
        dep_port=segment.dep_port,
        arr_port=segment.arr_port,
        dep_tz=dep_tz,
        arr_tz=arr_tz,
        airline_code=segment.airline_code,
        flight_number=segment.flight_number,
        seat=segment.seat,
        confirmation=flight.confirmation,
        dep_home_clock=format_hours_of_day(start),
        arr_home_clock=format_hours_of_day(end),
        dep_dest_clock=dest_clock(start, dep_date, frame),
        arr_dest_clock=dest_clock(end, arr_date, frame),
    )


def normalize_hotel(hotel: Hotel, frame: AxisFrame) -> HotelEvent:
    """Project a hotel stay on the destination clock.

    Blank times default to the configured check-in (14:00) and check-out
    (11:00) hours.

    Raises:
        UnparseableValueError: If a date, or a non-blank time, is invalid
    """
    settings = get_settings()
    dest_tz = frame.context.dest_tz

    check_in = _require_date(hotel.check_in, "check_in", frame)
    check_out = _require_date(hotel.check_out, "check_out", frame)
    in_time = _optional_time(hotel.check_in_time, "check_in_time", settings.hotel_check_in_hour)
    out_time = _optional_time(hotel.check_out_time, "check_out_time", settings.hotel_check_out_hour)

    return HotelEvent(
        event_id=f"hotel:{hotel.id}",
        start_hours=to_axis_hours(check_in, in_time, dest_tz, frame),
        end_hours=to_axis_hours(check_out, out_time, dest_tz, frame),
        hotel_id=hotel.id,
        name=hotel.name,
    )


def normalize_transport_leg(
    leg: TransportLeg,
    frame: AxisFrame,
    fallback_date: datetime | None = None,
) -> TransportEvent:
    """Project a ground transport leg on the clock its stored flag selects.

    Args:
        leg: Leg with a classified ``is_home`` flag
        frame: Axis frame of the projection
        fallback_date: Date used when the leg has none (legacy per-day legs)

    Raises:
        UnparseableValueError: If the date, start time or end time is invalid
    """
    ctx = frame.context
    if leg.date.strip() or fallback_date is None:
        local_date = _require_date(leg.date, "date", frame)
    else:
        local_date = fallback_date
    start_time = _require_time(leg.time, "time")

    is_home = bool(leg.is_home)
    tz = ctx.home_tz if is_home else ctx.dest_tz
    start = to_axis_hours(local_date, start_time, tz, frame)

    if leg.end_time.strip():
        end_time = _require_time(leg.end_time, "end_time")
        end = to_axis_hours(local_date, end_time, tz, frame)
        if end < start:
            end += 24
    else:
        duration_min = leg.duration_min
        if duration_min is None:
            duration_min = get_settings().transport_default_duration_min
        end = start + duration_min / 60

    return TransportEvent(
        event_id=f"transport:{leg.id}",
        start_hours=start,
        end_hours=end,
        leg_id=leg.id,
        from_place=leg.from_place,
        to_place=leg.to_place,
        mode=leg.mode,
        is_home=is_home,
        day_index=day_offset(local_date, frame.trip_start),
        start_clock=format_hours_of_day(start_time),
        end_clock=format_hours_of_day(start_time + (end - start)),
    )
