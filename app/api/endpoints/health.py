"""Health check endpoints: liveness with service status, and readiness."""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
    ServicesStatus,
)
from app.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

router = APIRouter()


async def _services_status(request: Request) -> ServicesStatus:
    store = request.app.state.user_store
    cache = getattr(request.app.state, "cache", None)
    database = await store.ping()
    cache_ok = await cache.ping() if cache is not None else False
    return ServicesStatus(database=database, cache=cache_ok)


@router.get("", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Return ok plus database/cache reachability. Failures of the check itself are 500s."""
    services = await _services_status(request)
    return HealthResponse(timestamp=utc_now(), services=services)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Store unreachable", "model": ReadinessErrorResponse}},
)
async def readiness_check(request: Request) -> ReadinessResponse | JSONResponse:
    """Return 200 if the user store answers; 503 otherwise. The cache is optional."""
    if await request.app.state.user_store.ping():
        return ReadinessResponse()
    logger.warning("Readiness check failed: user store unreachable")
    return JSONResponse(
        status_code=503,
        content=ReadinessErrorResponse(message="User store unreachable").model_dump(),
    )
