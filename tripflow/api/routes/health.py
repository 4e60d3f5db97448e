"""Health check endpoints.

- /health: liveness, always ok
- /healthz: storage mode and reachability, AI availability
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Response

from tripflow.api.deps import get_gateway
from tripflow.config import Settings, get_settings
from tripflow.db.gateway import InstrumentedGateway, TripGateway
from tripflow.db.sql_gateway import SqlTripGateway

router = APIRouter()


async def check_storage(gateway: TripGateway) -> tuple[bool, str]:
    """Check persistence backend.

    Returns:
        (is_ok, status_message)
    """
    inner = gateway.inner if isinstance(gateway, InstrumentedGateway) else gateway
    if not isinstance(inner, SqlTripGateway):
        return (True, "local")

    try:
        await inner.ping()
        return (True, "ok")
    except Exception as e:
        return (False, f"error: {type(e).__name__}")


def check_ai(settings: Settings) -> str:
    """Report whether AI generation is configured."""
    api_key = settings.openai_api_key
    if api_key and api_key.get_secret_value():
        return "configured"
    return "not_configured"


@router.get("/health")
async def health() -> dict[str, str]:
    """Simple health check for Docker/k8s.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}


@router.get("/healthz", response_model=None)
async def healthz(
    gateway: Annotated[TripGateway, Depends(get_gateway)],
) -> dict[str, Any] | Response:
    """Health check endpoint.

    Returns:
        200 with component status if storage is reachable
        503 if the remote store is unreachable
    """
    storage_ok, storage_status = await check_storage(gateway)

    response_body = {
        "status": "ok" if storage_ok else "degraded",
        "components": {
            "storage": storage_status,
            "ai": check_ai(get_settings()),
        },
    }

    if not storage_ok:
        import json

        return Response(
            content=json.dumps(response_body),
            status_code=503,
            media_type="application/json",
        )

    return response_body
