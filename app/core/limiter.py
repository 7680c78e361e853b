"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules (auth) can use
the same instance without circular imports. create_app() toggles
limiter.enabled from RATE_LIMIT_ENABLED.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from app.schemas.envelope import error_body

limiter = Limiter(key_func=get_remote_address)

# Single source of truth for rate limit strings and decorators.
AUTH_LIMIT = "10/minute"
WRITE_ENDPOINT_LIMIT = "120/minute"

limit_auth = limiter.limit(AUTH_LIMIT)
limit_writes = limiter.limit(WRITE_ENDPOINT_LIMIT)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Return 429 in the failure envelope, with the limiter's Retry-After headers."""
    response = JSONResponse(
        status_code=429,
        content=error_body(f"Rate limit exceeded: {exc.detail}"),
    )
    return request.app.state.limiter._inject_headers(
        response, request.state.view_rate_limit
    )
