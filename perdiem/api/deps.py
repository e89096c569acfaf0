"""Shared FastAPI dependencies."""

from functools import lru_cache

from perdiem.adapters.fx import load_fx_rates
from perdiem.adapters.per_diem_rates import rates_for
from perdiem.db.inmemory import InMemoryTripRepository
from perdiem.db.repositories import TripRepository
from perdiem.expenses.accrual import RatesLookup


@lru_cache
def get_trip_repository() -> TripRepository:
    """Process-wide trip store."""
    return InMemoryTripRepository()


def get_rates_lookup() -> RatesLookup:
    return rates_for


def get_fx_rates() -> dict[str, float]:
    return load_fx_rates()
