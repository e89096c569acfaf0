"""Tests for per-diem M&IE accrual and rate cascading."""

from datetime import datetime

import pytest

from perdiem.expenses.accrual import (
    accrue,
    accrue_trip,
    day_percent,
    effective_day_rates,
    meal_breakdown,
    total_mie,
)
from perdiem.models import Day, MealFlags, PerDiemRates, Trip
from perdiem.models.trip import build_days

ALL_MEALS = MealFlags()


def fake_rates(location: str, on: datetime) -> PerDiemRates:
    """Lookup that only knows Madrid."""
    if location == "Madrid":
        return PerDiemRates(lodging=210.0, mie=128.0, is_foreign=True, found=True)
    return PerDiemRates(found=False)


def test_first_and_last_day_accrue_75_percent() -> None:
    """Test the partial-day rule on a 5-day trip."""
    assert accrue(0, 5, 100, ALL_MEALS, False).percent == 75
    assert accrue(4, 5, 100, ALL_MEALS, False).percent == 75
    assert accrue(2, 5, 100, ALL_MEALS, False).percent == 100
    assert accrue(0, 5, 100, ALL_MEALS, False).is_first_or_last


def test_single_day_trip_is_exempt() -> None:
    """Test that a one-day trip accrues the full rate."""
    result = accrue(0, 1, 100, ALL_MEALS, False)
    assert result.percent == 100
    assert not result.is_first_or_last
    assert day_percent(0, 1) == 100


def test_us_meal_breakdown() -> None:
    """Test the domestic ratio table at full rate."""
    per_meal = meal_breakdown(100, is_foreign=False)
    assert per_meal.breakfast == 23.53
    assert per_meal.lunch == 27.94
    assert per_meal.dinner == 41.18
    assert per_meal.incidentals == 7.35


def test_foreign_meal_breakdown_at_partial_rate() -> None:
    """Test the foreign ratio table scaled to 75%."""
    result = accrue(0, 3, 100, ALL_MEALS, True)
    assert result.per_meal.breakfast == 11.25
    assert result.per_meal.lunch == 18.75
    assert result.per_meal.dinner == 26.25
    assert result.per_meal.incidentals == 18.75
    assert result.total == 75.0


@pytest.mark.parametrize("meal", ["breakfast", "lunch", "dinner", "incidentals"])
@pytest.mark.parametrize("is_foreign", [False, True])
def test_unclaimed_meal_reduces_total_by_its_amount(meal: str, is_foreign: bool) -> None:
    """Test that disabling one meal removes exactly its scaled amount."""
    full = accrue(0, 4, 79, ALL_MEALS, is_foreign)
    partial = accrue(0, 4, 79, MealFlags(**{meal: False}), is_foreign)

    assert full.total - partial.total == pytest.approx(getattr(full.per_meal, meal))
    assert partial.per_meal == full.per_meal


def test_total_is_sum_of_claimed_meals() -> None:
    """Test that total equals the claimed per-meal amounts."""
    result = accrue(1, 3, 68, MealFlags(breakfast=False, incidentals=False), False)
    assert result.total == round(result.per_meal.lunch + result.per_meal.dinner, 2)


def test_partial_day_total_sums_rounded_meals() -> None:
    """Test that a 75% day totals its rounded meals, within a cent of the scaled rate."""
    result = accrue(0, 3, 100, ALL_MEALS, False)
    meals = result.per_meal

    assert result.total == round(meals.breakfast + meals.lunch + meals.dinner + meals.incidentals, 2)
    assert result.total == pytest.approx(75.0, abs=0.011)


def test_missing_rate_is_not_zero() -> None:
    """Test that an unknown rate yields found=False and no totals."""
    result = accrue(0, 3, None, ALL_MEALS, False)
    assert not result.found
    assert result.total is None
    assert result.per_meal is None
    assert result.percent == 75


def test_zero_rate_is_found() -> None:
    """Test that a zero rate is a real value."""
    result = accrue(1, 3, 0, ALL_MEALS, False)
    assert result.found
    assert result.total == 0


def test_effective_rates_cascade() -> None:
    """Test explicit, lookup and inherited values."""
    days = build_days(datetime(2026, 4, 12), datetime(2026, 4, 14))
    days[1] = days[1].model_copy(update={"location": "Santander", "mie_base": 104.0})

    rates = effective_day_rates(days, "Madrid", fake_rates)

    assert rates[0].location == "Madrid"
    assert rates[0].location_inherited
    assert rates[0].mie == 128.0
    assert not rates[0].mie_inherited
    assert rates[0].lodging == 210.0

    assert rates[1].location == "Santander"
    assert not rates[1].location_inherited
    assert rates[1].mie == 104.0
    assert not rates[1].mie_inherited
    assert rates[1].lodging == 210.0
    assert rates[1].lodging_inherited

    assert rates[2].location == "Santander"
    assert rates[2].location_inherited
    assert rates[2].mie == 104.0
    assert rates[2].mie_inherited


def test_effective_rates_without_any_data() -> None:
    """Test that no location and no table leaves rates unknown."""
    days = build_days(datetime(2026, 4, 12), datetime(2026, 4, 13))

    rates = effective_day_rates(days, "")

    assert all(r.mie is None and r.lodging is None for r in rates)
    assert all(not r.rates.found for r in rates)


def test_accrue_trip_uses_foreign_table_from_lookup() -> None:
    """Test per-day rows for a Madrid trip."""
    trip = Trip(
        home_tz="America/New_York",
        dest_tz="Europe/Madrid",
        dest_city="Madrid",
        days=build_days(datetime(2026, 4, 12), datetime(2026, 4, 14)),
    )

    rows = accrue_trip(trip, fake_rates)

    assert [r.accrual.percent for r in rows] == [75, 100, 75]
    assert [r.date for r in rows] == ["2026-04-12", "2026-04-13", "2026-04-14"]
    assert rows[1].accrual.per_meal.breakfast == round(128 * 0.15, 2)
    assert total_mie(rows) == round(96.0 + 128.0 + 96.0, 2)


def test_total_mie_is_none_without_rates() -> None:
    """Test that unknown M&IE totals stay None."""
    trip = Trip(
        home_tz="America/New_York",
        dest_tz="America/New_York",
        days=[Day(date="2026-04-12")],
    )
    assert total_mie(accrue_trip(trip)) is None
