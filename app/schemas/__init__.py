"""API request/response schemas (Pydantic)."""

from app.schemas.auth import LoginRequest, SignupRequest
from app.schemas.envelope import ApiResponse, PaginationInfo, error_body
from app.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
    ServicesStatus,
)
from app.schemas.user import UserCreateRequest, UserResponse, UserUpdateRequest

__all__ = [
    "ApiResponse",
    "HealthResponse",
    "LoginRequest",
    "PaginationInfo",
    "ReadinessErrorResponse",
    "ReadinessResponse",
    "ServicesStatus",
    "SignupRequest",
    "UserCreateRequest",
    "UserResponse",
    "UserUpdateRequest",
    "error_body",
]
