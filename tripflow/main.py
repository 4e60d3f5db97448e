"""FastAPI application."""

from fastapi import FastAPI

from tripflow.api.routes.health import router as health_router
from tripflow.api.routes.itinerary import router as itinerary_router
from tripflow.api.routes.metrics import router as metrics_router
from tripflow.api.routes.trips import router as trips_router
from tripflow.config import get_settings
from tripflow.utils.logging import configure_logging

configure_logging(get_settings().log_level)

app = FastAPI(title="TripFlow API", version="0.1.0")

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(trips_router, tags=["trips"])
app.include_router(itinerary_router, tags=["itinerary"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "TripFlow API", "version": "0.1.0"}
