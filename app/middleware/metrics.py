"""Request metrics and access log middleware.

Observes http_requests_total / http_request_duration_seconds per
(method, route template, status) and logs one line per request. The
route label is the matched path template (e.g. /api/users/{user_id}),
never the raw path, to keep label cardinality bounded. Raw ASGI.
"""

import logging
import re
import time
from typing import Callable

from app.shared.telemetry.metrics import AppMetrics

logger = logging.getLogger("app.access")

UNMATCHED_ROUTE = "unmatched"
_PARAM = re.compile(r"\{(\w+)(?::\w+)?\}")


def _route_template(scope: dict) -> str:
    """Full template of the matched route, e.g. /api/users/{user_id}.

    The matched route's path can be relative to the router it was included
    from. Filling its parameters from path_params gives the concrete tail of
    the request path; whatever precedes that tail is the include prefix.
    """
    route = scope.get("route")
    if route is None:
        return UNMATCHED_ROUTE
    route_path = getattr(route, "path", "")
    params = scope.get("path_params", {})
    concrete = _PARAM.sub(lambda m: str(params.get(m.group(1), m.group(0))), route_path)
    path = scope.get("path", "")
    prefix = path[: len(path) - len(concrete)] if path.endswith(concrete) else ""
    return (prefix + route_path) or UNMATCHED_ROUTE


def MetricsMiddleware(app: Callable, metrics: AppMetrics) -> Callable:
    """Record request count, latency and in-flight gauge. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        status_code = 500
        start = time.perf_counter()

        async def send_wrapper(message: dict) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        metrics.http_requests_in_progress.inc()
        try:
            await app(scope, receive, send_wrapper)
        finally:
            duration = time.perf_counter() - start
            metrics.http_requests_in_progress.dec()
            method = scope.get("method", "")
            metrics.observe_request(method, _route_template(scope), status_code, duration)
            logger.info(
                "%s %s %s %.1fms",
                method,
                scope.get("path", ""),
                status_code,
                duration * 1000,
            )

    return asgi_app
