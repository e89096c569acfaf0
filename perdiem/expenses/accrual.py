"""Per-diem M&IE accrual per trip day.

First and last days of a multi-day trip accrue 75% of the M&IE rate; every
other day, and the only day of a one-day trip, accrues 100%. The rate splits
into breakfast, lunch, dinner and incidentals by a fixed ratio table, and a
day's total sums only the components the traveler claims.
"""

from collections.abc import Callable, Sequence
from datetime import datetime

from perdiem.models.per_diem import (
    DayAccrual,
    DayPerDiem,
    EffectiveDayRates,
    MealBreakdown,
    PerDiemRates,
)
from perdiem.models.trip import Day, MealFlags, Trip
from perdiem.timeline.clock import format_date

RatesLookup = Callable[[str, datetime], PerDiemRates]

PARTIAL_DAY_PERCENT = 75
FULL_DAY_PERCENT = 100

# GSA CONUS split of the M&IE rate
MEAL_RATIOS_US = MealBreakdown(breakfast=0.2353, lunch=0.2794, dinner=0.4118, incidentals=0.0735)
# State Department OCONUS split
MEAL_RATIOS_FOREIGN = MealBreakdown(breakfast=0.15, lunch=0.25, dinner=0.35, incidentals=0.25)

MEALS = ("breakfast", "lunch", "dinner", "incidentals")


def no_rates(location: str, on: datetime) -> PerDiemRates:
    """Lookup that never finds table data."""
    return PerDiemRates(found=False)


def day_percent(day_index: int, total_days: int) -> int:
    """75 on the first and last day of a multi-day trip, else 100."""
    if total_days > 1 and day_index in (0, total_days - 1):
        return PARTIAL_DAY_PERCENT
    return FULL_DAY_PERCENT


def meal_breakdown(base_mie: float, is_foreign: bool, percent: int = FULL_DAY_PERCENT) -> MealBreakdown:
    """Split an M&IE rate into per-meal amounts scaled by ``percent``."""
    ratios = MEAL_RATIOS_FOREIGN if is_foreign else MEAL_RATIOS_US
    scale = percent / 100
    return MealBreakdown(
        **{meal: round(base_mie * getattr(ratios, meal) * scale, 2) for meal in MEALS}
    )


def accrue(
    day_index: int,
    total_days: int,
    base_mie: float | None,
    meal_flags: MealFlags,
    is_foreign: bool,
) -> DayAccrual:
    """Compute one day's M&IE.

    Args:
        day_index: 0-based position of the day in the trip
        total_days: Number of days in the trip
        base_mie: Full-day M&IE rate, or None when no rate is known
        meal_flags: Components the traveler claims
        is_foreign: Use the foreign ratio table

    Returns:
        DayAccrual whose total equals the sum of the claimed per-meal amounts.
        With no rate, ``found`` is False and ``total``/``per_meal`` are None.
    """
    percent = day_percent(day_index, total_days)
    is_first_or_last = percent == PARTIAL_DAY_PERCENT

    if base_mie is None:
        return DayAccrual(
            total=None,
            percent=percent,
            per_meal=None,
            is_first_or_last=is_first_or_last,
            found=False,
        )

    per_meal = meal_breakdown(base_mie, is_foreign, percent)
    total = sum(getattr(per_meal, meal) for meal in MEALS if getattr(meal_flags, meal))

    return DayAccrual(
        total=round(total, 2),
        percent=percent,
        per_meal=per_meal,
        is_first_or_last=is_first_or_last,
        found=True,
    )


def _cascade(
    explicit: float | None, looked_up: PerDiemRates, field: str, last: float | None
) -> tuple[float | None, bool, float | None]:
    # explicit day value > table lookup > inherited from the previous day
    if explicit is not None:
        return explicit, False, explicit
    table_value = getattr(looked_up, field)
    if looked_up.found and table_value is not None:
        return table_value, False, table_value
    if last is not None:
        return last, True, last
    return None, False, None


def effective_day_rates(
    days: Sequence[Day],
    dest_city: str,
    rates_for: RatesLookup = no_rates,
) -> list[EffectiveDayRates]:
    """Resolve each day's location, lodging and M&IE rates.

    A blank location inherits the previous day's (the destination city for
    the first day). Rates come from the day's own value, then the rate table,
    then the previous day's rate.
    """
    results: list[EffectiveDayRates] = []
    last_location = dest_city or ""
    last_lodging: float | None = None
    last_mie: float | None = None

    for day in days:
        if day.location:
            location, location_inherited = day.location, False
            last_location = day.location
        else:
            location, location_inherited = last_location, True

        rates = rates_for(location, day.date) if location else PerDiemRates(found=False)

        lodging, lodging_inherited, last_lodging = _cascade(
            day.lodging_rate, rates, "lodging", last_lodging
        )
        mie, mie_inherited, last_mie = _cascade(day.mie_base, rates, "mie", last_mie)

        results.append(
            EffectiveDayRates(
                location=location,
                location_inherited=location_inherited,
                lodging=lodging,
                lodging_inherited=lodging_inherited,
                mie=mie,
                mie_inherited=mie_inherited,
                rates=rates,
            )
        )

    return results


def accrue_trip(trip: Trip, rates_for: RatesLookup = no_rates) -> list[DayPerDiem]:
    """Per-diem rows for every day of a trip."""
    effective = effective_day_rates(trip.days, trip.dest_city, rates_for)
    total_days = len(trip.days)

    rows = []
    for idx, (day, eff) in enumerate(zip(trip.days, effective)):
        accrual = accrue(
            idx,
            total_days,
            eff.mie,
            day.meals,
            day.is_foreign_mie or eff.rates.is_foreign,
        )
        rows.append(
            DayPerDiem(day_index=idx, date=format_date(day.date), effective=eff, accrual=accrual)
        )
    return rows


def total_mie(rows: Sequence[DayPerDiem]) -> float | None:
    """Sum of accrued M&IE, or None when no day has a known rate."""
    known = [r.accrual.total for r in rows if r.accrual.total is not None]
    if not known:
        return None
    return round(sum(known), 2)
