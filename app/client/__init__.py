"""Typed async client for the user service API."""

from app.client.api_client import ApiClientError, UserApiClient
from app.client.models import ApiUser, ClientUser

__all__ = ["ApiClientError", "ApiUser", "ClientUser", "UserApiClient"]
