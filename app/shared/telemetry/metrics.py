"""Prometheus metrics for the user service.

Exposes request counters/histograms and business counters (registrations,
logins by outcome, cache lookups) on a dedicated CollectorRegistry, pulled
through GET /metrics.
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    Info,
    generate_latest,
)

from app.domain.enums import LoginOutcome

HTTP_DURATION_BUCKETS = (0.005, 0.01, 0.05, 0.1, 0.3, 0.5, 1.0, 3.0, 5.0, 10.0)


class AppMetrics:
    """Prometheus metrics holder. One instance per app (own registry, safe in tests)."""

    def __init__(
        self,
        registry: CollectorRegistry | None = None,
        app_name: str = "user-service",
        app_version: str = "1.0.0",
    ) -> None:
        """Initialize metrics on registry (a fresh CollectorRegistry by default)."""
        self.registry = registry or CollectorRegistry()

        self.http_requests_total = Counter(
            "http_requests_total",
            "Total number of HTTP requests",
            ["method", "route", "status"],
            registry=self.registry,
        )
        self.http_request_duration_seconds = Histogram(
            "http_request_duration_seconds",
            "Duration of HTTP requests in seconds",
            ["method", "route", "status"],
            buckets=HTTP_DURATION_BUCKETS,
            registry=self.registry,
        )
        self.http_requests_in_progress = Gauge(
            "http_requests_in_progress",
            "Number of HTTP requests currently being handled",
            registry=self.registry,
        )
        self.user_registrations_total = Counter(
            "user_registrations_total",
            "Total number of user registrations",
            registry=self.registry,
        )
        self.user_logins_total = Counter(
            "user_logins_total",
            "Total number of user logins",
            ["status"],
            registry=self.registry,
        )
        self.cache_lookups_total = Counter(
            "cache_lookups_total",
            "Cache-aside lookups by key type and result",
            ["key_type", "result"],
            registry=self.registry,
        )
        Info(
            "app",
            "Information about the user service",
            registry=self.registry,
        ).info({"name": app_name, "version": app_version})

    def observe_request(self, method: str, route: str, status: int, duration: float) -> None:
        labels = {"method": method, "route": route, "status": str(status)}
        self.http_requests_total.labels(**labels).inc()
        self.http_request_duration_seconds.labels(**labels).observe(duration)

    def record_registration(self) -> None:
        self.user_registrations_total.inc()

    def record_login(self, success: bool) -> None:
        outcome = LoginOutcome.SUCCESS if success else LoginOutcome.FAILURE
        self.user_logins_total.labels(status=outcome.value).inc()

    def record_cache_lookup(self, key_type: str, hit: bool) -> None:
        self.cache_lookups_total.labels(key_type=key_type, result="hit" if hit else "miss").inc()

    def render(self) -> tuple[bytes, str]:
        """Return (exposition body, content type) for the /metrics endpoint."""
        return generate_latest(self.registry), CONTENT_TYPE_LATEST
