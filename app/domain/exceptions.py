"""Domain exceptions for the user service.

Defines domain-level exceptions that represent business rule violations
and infrastructure failures surfaced to callers. Presentation layer maps
them to HTTP responses in exception handlers.
"""

from typing import Any


class UserServiceException(Exception):
    """Base exception for all user-service errors.

    Presentation layer maps these to HTTP responses using message,
    error_code, and details.

    Attributes:
        message: Human-readable error description (safe to return to clients).
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(UserServiceException):
    """Raised when input validation fails (missing or malformed fields)."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        errors: list[dict[str, str]] | None = None,
    ) -> None:
        """Initialize with message and optional field name or field errors.

        Args:
            message: Description of the validation failure.
            field: Optional field that failed validation.
            errors: Optional list of {"field", "message"} entries.
        """
        details: dict[str, Any] = {}
        if field:
            details["field"] = field
        if errors:
            details["errors"] = errors
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(UserServiceException):
    """Raised when login credentials are invalid."""

    def __init__(self, message: str = "Invalid email or password") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class UserAlreadyExistsException(UserServiceException):
    """Raised when creating a user whose email is already registered."""

    def __init__(self, email: str | None = None) -> None:
        """Initialize; the email is kept out of details to avoid echoing PII."""
        super().__init__(
            "User with this email already exists",
            "USER_ALREADY_EXISTS",
            {},
        )
        self.email = email


class DuplicateEmailException(UserServiceException):
    """Raised when updating a user to an email owned by a different user."""

    def __init__(self) -> None:
        super().__init__(
            "Email is already taken by another user",
            "DUPLICATE_EMAIL",
            {},
        )


class ResourceNotFoundException(UserServiceException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str | int) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'user').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type.capitalize()} not found",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": str(resource_id)},
        )


class InfrastructureException(UserServiceException):
    """Raised when the persistent store fails. Driver detail is logged, never returned."""

    def __init__(
        self,
        message: str = "User store operation failed",
        error_code: str = "INFRASTRUCTURE_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, details)


class StoreUnavailableException(InfrastructureException):
    """Raised when no store connection could be acquired in time (retryable)."""

    def __init__(self) -> None:
        super().__init__(
            "User store is temporarily unavailable; retry later",
            "STORE_UNAVAILABLE",
            {"retryable": True},
        )
