"""Response envelope shared by every JSON endpoint.

{success, data?, message?, error?, details?, source?, pagination?}; routes
use response_model_exclude_unset so keys that were not set are omitted.
"""

from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class PaginationInfo(BaseModel):
    """Pagination block for paged list responses."""

    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: int = Field(..., alias="totalPages")


class ApiResponse(BaseModel, Generic[T]):
    """Success or failure envelope."""

    success: bool
    data: T | None = None
    message: str | None = None
    error: str | None = None
    details: Any = None
    source: Literal["cache", "database"] | None = None
    pagination: PaginationInfo | None = None


def error_body(message: str, details: Any = None) -> dict[str, Any]:
    """Failure envelope as a plain dict (used by exception handlers and middleware)."""
    body: dict[str, Any] = {"success": False, "error": message}
    if details:
        body["details"] = details
    return body
