"""Shared telemetry: logging setup, Prometheus metrics, OpenTelemetry tracing."""

from app.shared.telemetry.logging import RequestIdFilter, get_logger, setup_logging
from app.shared.telemetry.metrics import AppMetrics
from app.shared.telemetry.telemetry import Telemetry

__all__ = [
    "AppMetrics",
    "RequestIdFilter",
    "Telemetry",
    "get_logger",
    "setup_logging",
]
