"""Itinerary projector - composes normalization and the midnight grid.

``project`` is a pure function of its inputs. It keeps no state between
calls and never mutates the trip, flights, hotels or legs it is given, so it
can be re-run on every edit and from concurrent read-only callers. Event ids
derive from source ids, so repeated projections of the same data produce the
same identities in the same order.
"""

import time
from collections.abc import Iterator, Sequence
from datetime import datetime

from perdiem.adapters.airports import airport_timezone
from perdiem.config import get_settings
from perdiem.models.common import EventKind
from perdiem.models.itinerary import Flight, Hotel, TransportLeg
from perdiem.models.timeline import Projection, SkippedEvent, TimelineEvent
from perdiem.models.trip import Trip
from perdiem.timeline.midnights import build_midnights
from perdiem.timeline.normalize import (
    AxisFrame,
    UnparseableValueError,
    normalize_flight_segment,
    normalize_hotel,
    normalize_transport_leg,
)
from perdiem.timeline.zones import AirportTimezoneLookup, ZoneContext
from perdiem.utils.logging import StructuredTimelineLogger
from perdiem.utils.metrics import PrometheusTimelineMetrics

_KIND_ORDER = {EventKind.flight.value: 0, EventKind.hotel.value: 1, EventKind.transport.value: 2}


def _all_legs(
    trip: Trip, transport_legs: Sequence[TransportLeg]
) -> Iterator[tuple[TransportLeg, datetime | None]]:
    for leg in transport_legs:
        yield leg, None
    # Deprecated per-day legs fall back to their day's date
    for day in trip.days:
        for leg in day.legs:
            yield leg, day.date


def project(
    trip: Trip,
    flights: Sequence[Flight],
    hotels: Sequence[Hotel],
    transport_legs: Sequence[TransportLeg] | None = None,
    *,
    airport_lookup: AirportTimezoneLookup = airport_timezone,
) -> Projection:
    """Project every flight segment, hotel stay and transport leg onto the home axis.

    Args:
        trip: Trip aggregate supplying days and the two clocks
        flights: Bookings whose outbound and return segments are projected
        hotels: Stays, projected on the destination clock
        transport_legs: Ground legs; defaults to ``trip.transport_legs``
        airport_lookup: Injected IATA code to IANA zone lookup

    Returns:
        Projection with events ordered by (start, kind, id), the midnight
        grid, and the events skipped for unparseable input. A trip without
        days projects to an empty result.
    """
    started = time.perf_counter()
    settings = get_settings()
    events_log = StructuredTimelineLogger()
    metrics = PrometheusTimelineMetrics()

    if not trip.days:
        metrics.record_latency("empty", (time.perf_counter() - started) * 1000)
        return Projection()

    legs = trip.transport_legs if transport_legs is None else transport_legs
    frame = AxisFrame(
        trip_start=trip.days[0].date,
        total_days=len(trip.days),
        context=ZoneContext.from_trip(trip, airport_lookup),
    )
    slack = settings.render_slack_hours

    events: list[TimelineEvent] = []
    skipped: list[SkippedEvent] = []

    def skip(kind: EventKind, source_id: str, error: UnparseableValueError) -> None:
        skipped.append(SkippedEvent(kind=kind.value, source_id=source_id, reason=str(error)))
        events_log.log_skip(kind.value, source_id, str(error), field=error.field)
        metrics.inc_skipped(kind.value, error.field)

    def keep(kind: EventKind, event: TimelineEvent) -> None:
        if frame.contains(event.start_hours, event.end_hours, slack):
            events.append(event)
        else:
            metrics.inc_dropped(kind.value)

    for flight in flights:
        for direction, index, segment in flight.iter_segments():
            try:
                event = normalize_flight_segment(flight, direction, index, segment, frame)
            except UnparseableValueError as e:
                skip(EventKind.flight, f"{flight.id}:{segment.id}", e)
                continue
            keep(EventKind.flight, event)

    for hotel in hotels:
        try:
            hotel_event = normalize_hotel(hotel, frame)
        except UnparseableValueError as e:
            skip(EventKind.hotel, hotel.id, e)
            continue
        keep(EventKind.hotel, hotel_event)

    for leg, fallback_date in _all_legs(trip, legs):
        try:
            leg_event = normalize_transport_leg(leg, frame, fallback_date)
        except UnparseableValueError as e:
            skip(EventKind.transport, leg.id, e)
            continue
        keep(EventKind.transport, leg_event)

    events.sort(key=lambda e: (e.start_hours, _KIND_ORDER[e.kind], e.event_id))

    midnights = build_midnights(frame.trip_start, frame.total_days, trip.home_tz, trip.dest_tz)

    latency_ms = (time.perf_counter() - started) * 1000
    metrics.record_latency("ok", latency_ms)
    events_log.log_projection(frame.total_days, len(events), len(midnights), len(skipped), latency_ms)

    return Projection(
        events=events,
        midnights=midnights,
        skipped=skipped,
        total_days=frame.total_days,
    )
