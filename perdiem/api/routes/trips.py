"""Trip endpoints - store, load, and derive timelines and expenses."""

import logging
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel

from perdiem.adapters.fx import UnknownCurrencyError
from perdiem.api.deps import get_fx_rates, get_rates_lookup, get_trip_repository
from perdiem.db.repositories import TripRepository
from perdiem.expenses.accrual import RatesLookup, accrue_trip, total_mie
from perdiem.expenses.lodging import lodging_statuses
from perdiem.expenses.totals import trip_totals
from perdiem.models.expenses import LodgingStatus, TripTotals
from perdiem.models.per_diem import DayPerDiem
from perdiem.models.snapshot import TripSnapshot
from perdiem.models.timeline import Projection
from perdiem.models.violations import Violation
from perdiem.timeline.projector import project
from perdiem.verification.verifiers import run_verifiers

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trips", tags=["trips"])

Repo = Annotated[TripRepository, Depends(get_trip_repository)]
Rates = Annotated[RatesLookup, Depends(get_rates_lookup)]
FxTable = Annotated[dict[str, float], Depends(get_fx_rates)]


class TripSummaryResponse(BaseModel):
    """Response item for GET /trips and PUT /trips/{name}."""

    name: str
    start_date: str | None
    total_days: int
    updated_at: datetime | None = None


class PerDiemResponse(BaseModel):
    """Response for GET /trips/{name}/per-diem."""

    days: list[DayPerDiem]
    total_mie: float | None


def _load(repo: TripRepository, name: str) -> TripSnapshot:
    snapshot = repo.get_trip(name)
    if snapshot is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Trip {name!r} not found")
    return snapshot


def _unknown_currency(e: UnknownCurrencyError) -> HTTPException:
    return HTTPException(status_code=422, detail=str(e))


@router.get("", response_model=list[TripSummaryResponse])
async def list_trips(repo: Repo) -> list[TripSummaryResponse]:
    """List stored trips ordered by name."""
    return [
        TripSummaryResponse(
            name=s.name, start_date=s.start_date, total_days=s.total_days, updated_at=s.updated_at
        )
        for s in repo.list_trips()
    ]


@router.put("/{name}", response_model=TripSummaryResponse)
async def save_trip(name: str, snapshot: TripSnapshot, repo: Repo) -> TripSummaryResponse:
    """Store a snapshot under ``name``, replacing any previous one.

    The stored trip takes the name from the path.
    """
    snapshot = snapshot.model_copy(update={"trip": snapshot.trip.model_copy(update={"name": name})})
    repo.save_trip(name, snapshot)
    logger.info(f"[PUT /trips/{name}] days={snapshot.trip.total_days}")

    start = snapshot.trip.start_date
    return TripSummaryResponse(
        name=name,
        start_date=start.strftime("%Y-%m-%d") if start else None,
        total_days=snapshot.trip.total_days,
    )


@router.get("/{name}", response_model=TripSnapshot)
async def get_trip(name: str, repo: Repo) -> TripSnapshot:
    """Load a stored snapshot."""
    return _load(repo, name)


@router.delete("/{name}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_trip(name: str, repo: Repo) -> Response:
    """Delete a stored trip."""
    if not repo.delete_trip(name):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Trip {name!r} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{name}/timeline", response_model=Projection)
async def get_timeline(name: str, repo: Repo) -> Projection:
    """Project the stored trip onto the home-timezone axis."""
    snapshot = _load(repo, name)
    return project(snapshot.trip, snapshot.flights, snapshot.hotels)


@router.get("/{name}/per-diem", response_model=PerDiemResponse)
async def get_per_diem(name: str, repo: Repo, rates_for: Rates) -> PerDiemResponse:
    """Per-day M&IE accrual with the rates in force each day."""
    snapshot = _load(repo, name)
    rows = accrue_trip(snapshot.trip, rates_for)
    return PerDiemResponse(days=rows, total_mie=total_mie(rows))


@router.get("/{name}/lodging", response_model=list[LodgingStatus])
async def get_lodging(name: str, repo: Repo, rates_for: Rates, fx_rates: FxTable) -> list[LodgingStatus]:
    """Nightly lodging compared with its cap."""
    snapshot = _load(repo, name)
    try:
        return lodging_statuses(snapshot.trip, fx_rates, rates_for)
    except UnknownCurrencyError as e:
        raise _unknown_currency(e) from e


@router.get("/{name}/totals", response_model=TripTotals)
async def get_totals(name: str, repo: Repo, rates_for: Rates, fx_rates: FxTable) -> TripTotals:
    """Reimbursable totals in the reporting currency."""
    snapshot = _load(repo, name)
    try:
        return trip_totals(snapshot, fx_rates, rates_for)
    except UnknownCurrencyError as e:
        raise _unknown_currency(e) from e


@router.get("/{name}/violations", response_model=list[Violation])
async def get_violations(
    name: str, repo: Repo, rates_for: Rates, fx_rates: FxTable
) -> list[Violation]:
    """Advisory findings for layovers, hotel stays and lodging caps."""
    snapshot = _load(repo, name)
    projection = project(snapshot.trip, snapshot.flights, snapshot.hotels)
    try:
        statuses = lodging_statuses(snapshot.trip, fx_rates, rates_for)
    except UnknownCurrencyError as e:
        raise _unknown_currency(e) from e
    return run_verifiers(projection, statuses)
