"""Tests for the explicit validation step (no store access)."""

from app.application.dtos.user import UserUpdate
from app.application.services.user_validation import (
    validate_login,
    validate_signup,
    validate_user_create,
    validate_user_update,
)


def _fields(result) -> set[str]:
    return {e["field"] for e in result.errors}


def test_create_valid() -> None:
    result = validate_user_create("Alice", "alice@example.com", 30)
    assert result.ok


def test_create_missing_fields() -> None:
    result = validate_user_create(None, "")
    assert not result.ok
    assert result.message == "Name and email are required"
    assert _fields(result) == {"name", "email"}


def test_create_malformed_email() -> None:
    result = validate_user_create("Alice", "alice@")
    assert result.message == "Invalid user data"
    assert _fields(result) == {"email"}


def test_create_age_out_of_range() -> None:
    assert _fields(validate_user_create("Alice", "alice@example.com", -1)) == {"age"}
    assert _fields(validate_user_create("Alice", "alice@example.com", 151)) == {"age"}


def test_create_name_too_long() -> None:
    assert _fields(validate_user_create("x" * 256, "alice@example.com")) == {"name"}


def test_put_requires_both() -> None:
    result = validate_user_update(UserUpdate(name="Alice"), partial=False)
    assert _fields(result) == {"email"}


def test_patch_needs_a_field() -> None:
    result = validate_user_update(UserUpdate(), partial=True)
    assert not result.ok
    assert result.message == "At least one of name, email or age is required"


def test_patch_single_field() -> None:
    assert validate_user_update(UserUpdate(age=40), partial=True).ok


def test_patch_blank_name() -> None:
    assert _fields(validate_user_update(UserUpdate(name=""), partial=True)) == {"name"}


def test_signup_requires_password() -> None:
    result = validate_signup("Alice", "alice@example.com", None)
    assert result.message == "Name, email, and password are required"
    assert _fields(result) == {"password"}


def test_signup_valid() -> None:
    assert validate_signup("Alice", "alice@example.com", "pw").ok


def test_login_requires_both() -> None:
    result = validate_login("", None)
    assert result.message == "Email and password are required"
    assert _fields(result) == {"email", "password"}
