"""Inline projection endpoint."""

import logging

from fastapi import APIRouter

from perdiem.models.snapshot import TripSnapshot
from perdiem.models.timeline import Projection
from perdiem.timeline.projector import project

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/timeline", tags=["timeline"])


@router.post("/project", response_model=Projection)
async def project_snapshot(snapshot: TripSnapshot) -> Projection:
    """Project an inline snapshot without storing it.

    Args:
        snapshot: Trip state as produced by ``TripSnapshot.to_state``

    Returns:
        Projection of flights, hotels and transport legs on the home axis
    """
    logger.info(f"[POST /timeline/project] days={snapshot.trip.total_days}, flights={len(snapshot.flights)}")
    return project(snapshot.trip, snapshot.flights, snapshot.hotels)
