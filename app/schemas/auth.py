"""Auth API schemas."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Request body for POST /api/auth/login."""

    email: str | None = Field(default=None, max_length=255)
    password: str | None = Field(default=None, max_length=1024)


class SignupRequest(BaseModel):
    """Request body for POST /api/auth/signup. The password is hashed, never echoed."""

    name: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    password: str | None = Field(default=None, max_length=1024)
    age: int | None = None
