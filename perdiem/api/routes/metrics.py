"""Prometheus metrics endpoint."""

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


@router.get("/metrics")
async def metrics() -> Response:
    """Prometheus metrics endpoint.

    Exposes all registered Prometheus metrics including:
    - projection_latency_ms{outcome}
    - timeline_events_skipped_total{kind, reason}
    - timeline_events_dropped_total{kind}
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
