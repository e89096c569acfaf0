"""Lodging costs, cap checks, and nights spent at the destination."""

import logging
from collections.abc import Mapping, Sequence
from datetime import datetime, timedelta

from perdiem.adapters.fx import convert
from perdiem.expenses.accrual import RatesLookup, effective_day_rates, no_rates
from perdiem.models.common import HotelCostMode
from perdiem.models.expenses import LodgingStatus
from perdiem.models.itinerary import Flight, Hotel
from perdiem.models.trip import Day, LodgingParams, Trip
from perdiem.timeline.clock import parse_local_calendar_date, parse_local_time_of_day

logger = logging.getLogger(__name__)

NIGHT_CHECK_HOUR = 20
DEFAULT_SEGMENT_TIME = "12:00p"
HOME_PORT = "home"

# Settings used when a night is switched on without its own lodging data
DEFAULT_LODGING = LodgingParams(rate=185.0, tax=25.0)


def hotel_nights(hotel: Hotel, reference_year: int | None = None) -> int | None:
    """Number of nights between check-in and check-out, or None if unparseable."""
    check_in = parse_local_calendar_date(hotel.check_in, reference_year)
    check_out = parse_local_calendar_date(hotel.check_out, reference_year)
    if check_in is None or check_out is None:
        return None
    return max((check_out.date() - check_in.date()).days, 0)


def nightly_costs(hotel: Hotel, reference_year: int | None = None) -> list[float] | None:
    """Per-night cost list for a hotel in its own currency.

    ``nightly`` repeats the nightly rate, ``total`` spreads the total evenly,
    and ``per_night`` uses the entered list, padded with zeros or truncated
    to the stay length. Returns None when the stay dates do not parse.
    """
    nights = hotel_nights(hotel, reference_year)
    if nights is None:
        return None
    if nights == 0:
        return []

    if hotel.cost_mode == HotelCostMode.total:
        total = hotel.total_cost or 0.0
        return [round(total / nights, 2)] * nights
    if hotel.cost_mode == HotelCostMode.per_night:
        costs = list(hotel.per_night_costs[:nights])
        return costs + [0.0] * (nights - len(costs))
    return [hotel.nightly_rate or 0.0] * nights


def hotel_total(hotel: Hotel, reference_year: int | None = None) -> float | None:
    """Total stay cost in the hotel's currency."""
    if hotel.cost_mode == HotelCostMode.total:
        return hotel.total_cost
    costs = nightly_costs(hotel, reference_year)
    if costs is None:
        return None
    return round(sum(costs), 2)


def lodging_status(
    day_index: int,
    day: Day,
    fx_rates: Mapping[str, float],
    table_cap: float | None = None,
    currency: str = "USD",
) -> LodgingStatus:
    """Compare one night's lodging with its cap.

    Foreign lodging compares rate plus tax; domestic lodging compares the rate
    alone. The red zone starts above ``cap * (1 + overage_cap_percent / 100)``.
    The day's ``max_lodging`` wins over ``table_cap``.
    """
    params = day.lodging
    cap = params.max_lodging if params.max_lodging is not None else table_cap

    amount: float | None = None
    if params.rate is not None:
        raw = params.rate + params.tax if day.is_foreign_lodging else params.rate
        amount = round(convert(raw, params.currency, currency, fx_rates), 2)

    if cap is None or amount is None:
        return LodgingStatus(
            day_index=day_index,
            amount=amount,
            cap=cap,
            cap_with_overage=None,
            is_over_cap=False,
            is_red_zone=False,
        )

    cap_with_overage = round(cap * (1 + params.overage_cap_percent / 100), 2)
    return LodgingStatus(
        day_index=day_index,
        amount=amount,
        cap=cap,
        cap_with_overage=cap_with_overage,
        is_over_cap=amount > cap,
        is_red_zone=amount > cap_with_overage,
    )


def lodging_statuses(
    trip: Trip,
    fx_rates: Mapping[str, float],
    rates_for: RatesLookup = no_rates,
    currency: str = "USD",
) -> list[LodgingStatus]:
    """Cap checks for every day, with the table lodging rate as fallback cap."""
    effective = effective_day_rates(trip.days, trip.dest_city, rates_for)
    return [
        lodging_status(idx, day, fx_rates, eff.lodging, currency)
        for idx, (day, eff) in enumerate(zip(trip.days, effective))
    ]


def _segment_instant(date_text: str, time_text: str, reference_year: int | None) -> datetime | None:
    on = parse_local_calendar_date(date_text, reference_year)
    hours = parse_local_time_of_day(time_text or DEFAULT_SEGMENT_TIME)
    if on is None or hours is None:
        return None
    return on.replace(hour=0, minute=0, second=0, microsecond=0) + timedelta(hours=hours)


def destination_stay(
    flights: Sequence[Flight], reference_year: int | None = None
) -> tuple[datetime, datetime] | None:
    """First non-home arrival and last non-home departure, in local wall time.

    Returns None when either end of the stay cannot be found.
    """
    arrivals: list[datetime] = []
    departures: list[datetime] = []
    for flight in flights:
        for _, _, seg in flight.iter_segments():
            if seg.arr_port and seg.arr_port.strip().lower() != HOME_PORT:
                instant = _segment_instant(seg.arr_date, seg.arr_time, reference_year)
                if instant is not None:
                    arrivals.append(instant)
            if seg.dep_port and seg.dep_port.strip().lower() != HOME_PORT:
                instant = _segment_instant(seg.dep_date, seg.dep_time, reference_year)
                if instant is not None:
                    departures.append(instant)

    if not arrivals or not departures:
        return None
    return min(arrivals), max(departures)


def nights_at_destination(flights: Sequence[Flight], days: Sequence[Day]) -> list[bool]:
    """Which days end with a night at the destination.

    A night is spent on day D when 8 PM on D falls strictly inside the stay.
    """
    reference_year = days[0].date.year if days else None
    stay = destination_stay(flights, reference_year)
    if stay is None:
        return [False] * len(days)

    start, end = stay
    nights = []
    for day in days:
        night = day.date.replace(hour=NIGHT_CHECK_HOUR, minute=0, second=0, microsecond=0)
        nights.append(start < night < end)
    return nights


def populate_lodging(
    days: Sequence[Day], flights: Sequence[Flight], defaults: LodgingParams = DEFAULT_LODGING
) -> list[Day]:
    """Copies of ``days`` with lodging switched on only for destination nights.

    Nights that already carry a rate keep it; others take ``defaults``.
    Days without a destination night have their lodging cleared. Without a
    derivable stay the days are returned unchanged.
    """
    reference_year = days[0].date.year if days else None
    if destination_stay(flights, reference_year) is None:
        return [d.model_copy(deep=True) for d in days]

    result = []
    for day, night in zip(days, nights_at_destination(flights, days)):
        params = day.lodging
        if night:
            lodging = params.model_copy(
                update={
                    "rate": params.rate if params.rate is not None else defaults.rate,
                    "tax": params.tax or defaults.tax,
                    "hotel_name": params.hotel_name or defaults.hotel_name,
                    "currency": params.currency or defaults.currency,
                }
            )
        else:
            lodging = params.model_copy(update={"rate": None, "tax": 0.0, "hotel_name": ""})
        result.append(day.model_copy(update={"lodging": lodging}, deep=True))

    logger.debug(f"Populated lodging for {sum(1 for d in result if d.lodging.rate is not None)} nights")
    return result
