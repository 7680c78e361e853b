"""Health check API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class ServicesStatus(BaseModel):
    """Reachability of backing services."""

    database: bool = Field(..., description="User store reachable")
    cache: bool = Field(..., description="Redis cache reachable (False when not used)")


class HealthResponse(BaseModel):
    """Response for GET /health (liveness plus service status)."""

    success: bool = True
    status: str = Field(default="ok", description="Service status")
    message: str = "Server is healthy"
    timestamp: datetime
    services: ServicesStatus


class ReadinessResponse(BaseModel):
    """Response for GET /health/ready when ready."""

    status: str = Field(default="ok", description="Readiness status")


class ReadinessErrorResponse(BaseModel):
    """Response for GET /health/ready when the store is unreachable (503)."""

    status: str = Field(default="not_ready", description="Readiness status")
    message: str = Field(..., description="Reason (e.g. database unreachable)")
