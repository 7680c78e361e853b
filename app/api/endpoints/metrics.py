"""Prometheus pull endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from app.api.dependencies import get_metrics
from app.shared.telemetry.metrics import AppMetrics

router = APIRouter()


@router.get("", include_in_schema=False)
def metrics(app_metrics: Annotated[AppMetrics, Depends(get_metrics)]) -> Response:
    """Expose counters and histograms in the Prometheus text format."""
    body, content_type = app_metrics.render()
    return Response(content=body, media_type=content_type)
