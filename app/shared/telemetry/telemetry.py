"""OpenTelemetry tracing setup (optional, TELEMETRY_ENABLED).

Exporters: console (development), otlp (gRPC collector; Jaeger accepts
OTLP on 4317) or none. Instruments FastAPI, SQLAlchemy, Redis and
logging when a tracer provider is active.
"""

import logging

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.instrumentation.redis import RedisInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from sqlalchemy.ext.asyncio import AsyncEngine

from app.core.config import Settings

logger = logging.getLogger(__name__)

EXCLUDED_URLS = "/health,/health/ready,/metrics"


def _build_exporter(exporter_type: str, otlp_endpoint: str | None) -> SpanExporter | None:
    if exporter_type == "otlp":
        if not otlp_endpoint:
            logger.warning("TELEMETRY_EXPORTER=otlp without TELEMETRY_OTLP_ENDPOINT; using console")
            return ConsoleSpanExporter()
        return OTLPSpanExporter(
            endpoint=otlp_endpoint, insecure=otlp_endpoint.startswith("http://")
        )
    if exporter_type == "none":
        return None
    if exporter_type != "console":
        logger.warning("Unknown exporter type '%s', using console", exporter_type)
    return ConsoleSpanExporter()


class Telemetry:
    """Owns the tracer provider for one application instance."""

    def __init__(self, service_name: str, service_version: str, environment: str = "development") -> None:
        self.service_name = service_name
        self.service_version = service_version
        self.environment = environment
        self.tracer_provider: TracerProvider | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Telemetry":
        telemetry = cls(settings.app_name, settings.app_version, settings.telemetry_environment)
        telemetry.setup(
            settings.telemetry_exporter,
            settings.telemetry_otlp_endpoint,
            settings.telemetry_sample_rate,
        )
        return telemetry

    @property
    def active(self) -> bool:
        return self.tracer_provider is not None

    def setup(
        self,
        exporter_type: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> None:
        """Create the tracer provider and register it globally.

        Failures are logged and leave telemetry inactive; the service runs without tracing.
        """
        try:
            resource = Resource(
                attributes={
                    SERVICE_NAME: self.service_name,
                    SERVICE_VERSION: self.service_version,
                    "deployment.environment": self.environment,
                }
            )
            provider = TracerProvider(
                resource=resource, sampler=ParentBased(TraceIdRatioBased(sample_rate))
            )
            exporter = _build_exporter(exporter_type, otlp_endpoint)
            if exporter is not None:
                provider.add_span_processor(BatchSpanProcessor(exporter))
            trace.set_tracer_provider(provider)
            self.tracer_provider = provider
            logger.info(
                "OpenTelemetry initialized: service=%s, exporter=%s, sample_rate=%s",
                self.service_name,
                exporter_type,
                sample_rate,
            )
        except Exception:
            logger.exception("Failed to initialize telemetry")
            self.tracer_provider = None

    def instrument_sqlalchemy(self, engine: AsyncEngine) -> None:
        if not self.active:
            return
        SQLAlchemyInstrumentor().instrument(
            engine=engine.sync_engine, tracer_provider=self.tracer_provider
        )
        logger.info("SQLAlchemy instrumentation enabled")

    def instrument_redis(self) -> None:
        if not self.active:
            return
        RedisInstrumentor().instrument(tracer_provider=self.tracer_provider)
        logger.info("Redis instrumentation enabled")

    def instrument_logging(self) -> None:
        """Inject otelTraceID/otelSpanID into log records (format left unchanged)."""
        if not self.active:
            return
        LoggingInstrumentor().instrument(tracer_provider=self.tracer_provider, set_logging_format=False)

    def shutdown(self) -> None:
        """Flush pending spans and stop the provider."""
        if self.tracer_provider is None:
            return
        try:
            self.tracer_provider.shutdown()
            logger.info("Telemetry shutdown complete")
        except Exception:
            logger.exception("Error during telemetry shutdown")
        finally:
            self.tracer_provider = None


def instrument_fastapi(app: FastAPI) -> None:
    """Wrap the app with request spans; spans go to whichever provider is registered later."""
    FastAPIInstrumentor.instrument_app(app, excluded_urls=EXCLUDED_URLS)
    logger.info("FastAPI instrumentation enabled")
