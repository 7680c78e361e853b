"""API router aggregation.

Health and metrics live at the root (/health, /metrics); the user API
lives under /api (/api/auth, /api/users).
"""

from fastapi import APIRouter

from app.api.endpoints import auth, health, metrics, users

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])

root_router = APIRouter()
root_router.include_router(health.router, prefix="/health", tags=["health"])
root_router.include_router(metrics.router, prefix="/metrics", tags=["metrics"])
