"""FastAPI application."""

from fastapi import FastAPI

from perdiem.api.routes.health import router as health_router
from perdiem.api.routes.metrics import router as metrics_router
from perdiem.api.routes.timeline import router as timeline_router
from perdiem.api.routes.trips import router as trips_router
from perdiem.config import get_settings
from perdiem.utils.logging import configure_logging

configure_logging(get_settings().log_level)

app = FastAPI(title="Per Diem Timeline API", version="0.1.0")

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(trips_router, tags=["trips"])
app.include_router(timeline_router, tags=["timeline"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Per Diem Timeline API", "version": "0.1.0"}
