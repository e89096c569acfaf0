"""Health check endpoints."""

import json
from datetime import datetime
from typing import Any

from fastapi import APIRouter, Response

from perdiem.adapters.fx import load_fx_rates
from perdiem.adapters.per_diem_rates import default_table

router = APIRouter()


async def check_rate_tables() -> tuple[bool, str]:
    """Check that the per-diem rate tables load and answer lookups.

    Returns:
        (is_ok, status_message)
    """
    try:
        table = default_table()
        table.rates_for("", datetime.now())
        return (True, f"ok ({len(table.locations)} locations)")
    except (OSError, ValueError) as e:
        return (False, f"error: {type(e).__name__}")


async def check_fx_rates() -> tuple[bool, str]:
    """Check that the FX rate table loads.

    Returns:
        (is_ok, status_message)
    """
    try:
        rates = load_fx_rates()
        return (True, f"ok ({len(rates)} currencies)")
    except (OSError, ValueError, KeyError) as e:
        return (False, f"error: {type(e).__name__}")


@router.get("/health")
async def health() -> dict[str, str]:
    """Simple health check for Docker/k8s.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}


@router.get("/healthz", response_model=None)
async def healthz() -> dict[str, Any] | Response:
    """Health check with reference-data status.

    Returns:
        200 with component status if rate and FX tables load
        503 if either fails
    """
    rates_ok, rates_status = await check_rate_tables()
    fx_ok, fx_status = await check_fx_rates()

    core_ok = rates_ok and fx_ok
    response_body = {
        "status": "ok" if core_ok else "degraded",
        "components": {
            "per_diem_rates": rates_status,
            "fx_rates": fx_status,
        },
    }

    if not core_ok:
        return Response(
            content=json.dumps(response_body),
            status_code=503,
            media_type="application/json",
        )

    return response_body
