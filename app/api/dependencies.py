"""Presentation-layer dependency injection.

Services are built once per process in the lifespan (composition root,
app.core.lifespan) and stored on app.state; routes depend only on these
Depends() providers, never on infrastructure directly.
"""

from __future__ import annotations

from fastapi import Request

from app.application.services.auth_service import AuthService
from app.application.services.user_service import UserService
from app.core.constants import MAX_USER_ID
from app.domain.exceptions import ValidationException
from app.shared.telemetry.metrics import AppMetrics


def get_user_service(request: Request) -> UserService:
    """UserService for this app (CachedUserService on the postgres backend)."""
    return request.app.state.user_service


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_metrics(request: Request) -> AppMetrics:
    return request.app.state.metrics


def parse_user_id(user_id: str) -> int:
    """Path parameter -> positive BIGINT; anything else is a 400 before any store access."""
    if not (user_id.isascii() and user_id.isdigit()):
        raise ValidationException("Invalid user ID", field="id")
    value = int(user_id)
    if value < 1 or value > MAX_USER_ID:
        raise ValidationException("Invalid user ID", field="id")
    return value
