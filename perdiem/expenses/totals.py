"""Trip totals in a reporting currency."""

from collections.abc import Iterator, Mapping

from perdiem.adapters.fx import convert
from perdiem.config import get_settings
from perdiem.expenses.accrual import RatesLookup, accrue_trip, no_rates, total_mie
from perdiem.expenses.lodging import hotel_total
from perdiem.models.common import TransportMode
from perdiem.models.expenses import TripTotals
from perdiem.models.itinerary import TransportLeg
from perdiem.models.snapshot import TripSnapshot
from perdiem.models.trip import Trip


def _legs(trip: Trip) -> Iterator[TransportLeg]:
    yield from trip.transport_legs
    for day in trip.days:
        yield from day.legs


def leg_cost(leg: TransportLeg, fx_rates: Mapping[str, float], currency: str = "USD") -> float:
    """Cost of one leg; ``drive`` amounts are miles billed at the mileage rate."""
    amount = leg.amount
    if leg.mode == TransportMode.drive:
        amount *= get_settings().mileage_rate
    return convert(amount, leg.currency, currency, fx_rates)


def trip_totals(
    snapshot: TripSnapshot,
    fx_rates: Mapping[str, float],
    rates_for: RatesLookup = no_rates,
    currency: str | None = None,
) -> TripTotals:
    """Sum travel, lodging, M&IE and fees for a trip.

    Travel is flight fares plus ground legs. Lodging is each day's rate plus
    tax. ``booked_lodging`` is the hotel bookings priced by their cost mode;
    it is reported for comparison and stays out of the grand total. ``mie``
    is None when no day has a known M&IE rate, and the grand total then
    covers only the known components.

    Raises:
        UnknownCurrencyError: An amount uses a currency missing from ``fx_rates``
    """
    currency = currency or get_settings().reporting_currency
    trip = snapshot.trip

    travel = sum(convert(f.amount, f.currency, currency, fx_rates) for f in snapshot.flights)
    travel += sum(leg_cost(leg, fx_rates, currency) for leg in _legs(trip))

    lodging = sum(
        convert(d.lodging.rate + d.lodging.tax, d.lodging.currency, currency, fx_rates)
        for d in trip.days
        if d.lodging.rate is not None
    )

    reference_year = trip.start_date.year if trip.start_date else None
    booked = 0.0
    for hotel in snapshot.hotels:
        cost = hotel_total(hotel, reference_year)
        if cost is not None:
            booked += convert(cost, hotel.currency, currency, fx_rates)

    mie = total_mie(accrue_trip(trip, rates_for))
    if mie is not None:
        mie = convert(mie, "USD", currency, fx_rates)

    fees = convert(trip.registration_fee, trip.registration_currency, currency, fx_rates)

    grand = travel + lodging + fees + (mie or 0.0)
    return TripTotals(
        currency=currency,
        travel=round(travel, 2),
        lodging=round(lodging, 2),
        booked_lodging=round(booked, 2),
        mie=round(mie, 2) if mie is not None else None,
        fees=round(fees, 2),
        grand=round(grand, 2),
    )
