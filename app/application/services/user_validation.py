"""Explicit validation step for user input.

Each validator returns a ValidationResult instead of raising, so callers
decide how to surface failures (services raise ValidationException; the
API client can show field errors). No store access happens here.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from email_validator import EmailNotValidError, validate_email

from app.application.dtos.user import UserUpdate
from app.domain.exceptions import ValidationException

NAME_MAX_LENGTH = 255
AGE_MAX = 150


@dataclass
class ValidationResult:
    """Outcome of a validation step. ok is True when no field errors were recorded."""

    message: str = "Validation failed"
    errors: list[dict[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add(self, field_name: str, message: str) -> None:
        self.errors.append({"field": field_name, "message": message})

    def raise_for_errors(self) -> None:
        """Raise ValidationException carrying the field errors, if any."""
        if not self.ok:
            raise ValidationException(self.message, errors=self.errors)


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _check_email(result: ValidationResult, email: str) -> None:
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        result.add("email", "Invalid email address")


def _check_name(result: ValidationResult, name: str) -> None:
    if len(name) > NAME_MAX_LENGTH:
        result.add("name", f"Name must be at most {NAME_MAX_LENGTH} characters")


def _check_age(result: ValidationResult, age: int | None) -> None:
    if age is not None and not 0 <= age <= AGE_MAX:
        result.add("age", f"Age must be between 0 and {AGE_MAX}")


def validate_user_create(
    name: str | None, email: str | None, age: int | None = None
) -> ValidationResult:
    """Name and email are required and non-empty; age is optional."""
    result = ValidationResult(message="Name and email are required")
    if _blank(name):
        result.add("name", "Name is required")
    if _blank(email):
        result.add("email", "Email is required")
    if not result.ok:
        return result
    result.message = "Invalid user data"
    _check_name(result, name)
    _check_email(result, email)
    _check_age(result, age)
    return result


def validate_user_update(update: UserUpdate, *, partial: bool) -> ValidationResult:
    """PUT (partial=False) requires name and email; PATCH requires at least one field."""
    if not partial:
        return validate_user_create(update.name, update.email, update.age)
    result = ValidationResult(message="At least one of name, email or age is required")
    if not update.changes():
        result.add("body", "No fields to update")
        return result
    result.message = "Invalid user data"
    if update.name is not None:
        if _blank(update.name):
            result.add("name", "Name must not be empty")
        else:
            _check_name(result, update.name)
    if update.email is not None:
        if _blank(update.email):
            result.add("email", "Email must not be empty")
        else:
            _check_email(result, update.email)
    _check_age(result, update.age)
    return result


def validate_signup(
    name: str | None, email: str | None, password: str | None, age: int | None = None
) -> ValidationResult:
    result = ValidationResult(message="Name, email, and password are required")
    if _blank(name):
        result.add("name", "Name is required")
    if _blank(email):
        result.add("email", "Email is required")
    if not password:
        result.add("password", "Password is required")
    if not result.ok:
        return result
    return validate_user_create(name, email, age)


def validate_login(email: str | None, password: str | None) -> ValidationResult:
    result = ValidationResult(message="Email and password are required")
    if _blank(email):
        result.add("email", "Email is required")
    if not password:
        result.add("password", "Password is required")
    return result
