"""Auth API: signup and login.

No token is issued; login returns the user record. Both routes are rate
limited per client address.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.dependencies import get_auth_service
from app.application.services.auth_service import AuthService
from app.core.limiter import limit_auth
from app.schemas.auth import LoginRequest, SignupRequest
from app.schemas.envelope import ApiResponse
from app.schemas.user import UserResponse

router = APIRouter()

Auth = Annotated[AuthService, Depends(get_auth_service)]


@router.post(
    "/signup",
    response_model=ApiResponse[UserResponse],
    response_model_exclude_unset=True,
    status_code=201,
)
@limit_auth
async def signup(request: Request, body: SignupRequest, auth: Auth):
    """Register a user; the password is stored as a bcrypt hash and never echoed."""
    user = await auth.signup(body.name, body.email, body.password, body.age)
    return ApiResponse(
        success=True,
        data=UserResponse.from_record(user),
        message="User created successfully",
    )


@router.post(
    "/login",
    response_model=ApiResponse[UserResponse],
    response_model_exclude_unset=True,
)
@limit_auth
async def login(request: Request, body: LoginRequest, auth: Auth):
    """Verify email and password; 401 with a generic message on any mismatch."""
    user = await auth.login(body.email, body.password)
    return ApiResponse(
        success=True,
        data=UserResponse.from_record(user),
        message="Login successful",
    )
