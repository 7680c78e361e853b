"""Async HTTP client for the user service API (httpx).

Every method unwraps the response envelope and returns ClientUser
values. Non-2xx answers, transport errors and malformed payloads all
raise ApiClientError carrying an operation-level message plus the
server's error text and status when there is one.
"""

from __future__ import annotations

from typing import Any

import httpx

from app.client.models import ApiUser, ClientUser

DEFAULT_TIMEOUT = 10.0


class ApiClientError(Exception):
    """Raised when a call to the user service fails."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        server_error: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.server_error = server_error


class UserApiClient:
    """Typed wrapper over /api/users and /api/auth.

    Pass base_url to let the client own its httpx.AsyncClient, or pass an
    existing client (e.g. one bound to an ASGI transport in tests).
    Use as an async context manager or call aclose().
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        if http_client is None and base_url is None:
            raise ValueError("base_url or http_client is required")
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> UserApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def _call(
        self, method: str, url: str, failure: str, json: dict[str, Any] | None = None
    ) -> Any:
        """Send the request and return the envelope's `data` field."""
        try:
            resp = await self._http.request(method, url, json=json)
        except httpx.HTTPError as e:
            raise ApiClientError(failure, server_error=str(e)) from e
        try:
            body = resp.json()
        except ValueError:
            body = None
        if resp.is_error or not isinstance(body, dict) or not body.get("success"):
            server_error = body.get("error") if isinstance(body, dict) else None
            raise ApiClientError(failure, status_code=resp.status_code, server_error=server_error)
        return body.get("data")

    def _user(self, data: Any, failure: str) -> ClientUser:
        try:
            return ClientUser.from_api(ApiUser.from_json(data))
        except (KeyError, TypeError, ValueError) as e:
            raise ApiClientError(failure, server_error=f"Malformed user payload: {e}") from e

    async def get_users(self) -> list[ClientUser]:
        failure = "Failed to fetch users"
        data = await self._call("GET", "/api/users", failure)
        if not isinstance(data, list):
            raise ApiClientError(failure, server_error="Expected a list of users")
        return [self._user(item, failure) for item in data]

    async def get_user(self, user_id: str | int) -> ClientUser:
        failure = "Failed to fetch user"
        return self._user(await self._call("GET", f"/api/users/{user_id}", failure), failure)

    async def create_user(self, name: str, email: str, age: int | None = None) -> ClientUser:
        failure = "Failed to create user"
        payload: dict[str, Any] = {"name": name, "email": email}
        if age is not None:
            payload["age"] = age
        return self._user(await self._call("POST", "/api/users", failure, payload), failure)

    async def update_user(
        self,
        user_id: str | int,
        *,
        name: str | None = None,
        email: str | None = None,
        age: int | None = None,
    ) -> ClientUser:
        """Partial update (PATCH); only the given fields are sent."""
        failure = "Failed to update user"
        payload = {k: v for k, v in (("name", name), ("email", email), ("age", age)) if v is not None}
        return self._user(
            await self._call("PATCH", f"/api/users/{user_id}", failure, payload), failure
        )

    async def delete_user(self, user_id: str | int) -> None:
        await self._call("DELETE", f"/api/users/{user_id}", "Failed to delete user")

    async def login(self, email: str, password: str) -> ClientUser:
        failure = "Login failed"
        data = await self._call(
            "POST", "/api/auth/login", failure, {"email": email, "password": password}
        )
        return self._user(data, failure)

    async def signup(
        self, name: str, email: str, password: str, age: int | None = None
    ) -> ClientUser:
        failure = "Signup failed"
        payload: dict[str, Any] = {"name": name, "email": email, "password": password}
        if age is not None:
            payload["age"] = age
        data = await self._call("POST", "/api/auth/signup", failure, payload)
        return self._user(data, failure)
