"""Google OAuth 2.0 authorization code flow."""
import logging
from typing import Any
from urllib.parse import urlencode

import httpx
from pydantic import ValidationError

from goal_tracker.config import Settings, get_settings
from goal_tracker.schemas.user import GoogleProfile

logger = logging.getLogger(__name__)

GOOGLE_SCOPES = [
    "https://www.googleapis.com/auth/userinfo.profile",
    "https://www.googleapis.com/auth/userinfo.email",
]


class OAuthError(Exception):
    """Raised when the identity provider exchange fails."""


class GoogleOAuthService:
    """Builds the consent URL and trades an authorization code for a profile."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings
        self.transport = transport

    def get_authorization_url(self) -> str:
        """Get the consent screen URL. Has no side effects."""
        options = {
            "redirect_uri": self.settings.oauth_redirect_uri,
            "client_id": self.settings.google_client_id,
            "access_type": "offline",
            "response_type": "code",
            "prompt": "consent",
            "scope": " ".join(GOOGLE_SCOPES),
        }
        return f"{self.settings.google_auth_url}?{urlencode(options)}"

    async def fetch_profile(self, code: str | None) -> GoogleProfile:
        """Exchange an authorization code for the user's Google profile.

        Any transport error, non-2xx response or malformed payload is raised
        as OAuthError. Nothing is retried.
        """
        if not code:
            raise OAuthError("Missing authorization code")

        try:
            async with httpx.AsyncClient(transport=self.transport, timeout=10.0) as client:
                tokens = await self._exchange_code(client, code)
                return await self._fetch_userinfo(client, tokens)
        except httpx.HTTPError as e:
            raise OAuthError(f"Identity provider request failed: {e}") from e

    async def _exchange_code(self, client: httpx.AsyncClient, code: str) -> dict[str, Any]:
        values = {
            "code": code,
            "client_id": self.settings.google_client_id,
            "client_secret": self.settings.google_client_secret,
            "redirect_uri": self.settings.oauth_redirect_uri,
            "grant_type": "authorization_code",
        }
        response = await client.post(self.settings.google_token_url, data=values)
        response.raise_for_status()
        tokens = _json_object(response)
        if not tokens.get("access_token"):
            raise OAuthError("Token response has no access_token")
        return tokens

    async def _fetch_userinfo(self, client: httpx.AsyncClient, tokens: dict[str, Any]) -> GoogleProfile:
        params = {"alt": "json", "access_token": tokens["access_token"]}
        headers = {}
        if tokens.get("id_token"):
            headers["Authorization"] = f"Bearer {tokens['id_token']}"
        response = await client.get(self.settings.google_userinfo_url, params=params, headers=headers)
        response.raise_for_status()
        try:
            return GoogleProfile.model_validate(_json_object(response))
        except ValidationError as e:
            raise OAuthError(f"Malformed userinfo response: {e}") from e


def _json_object(response: httpx.Response) -> dict[str, Any]:
    try:
        payload = response.json()
    except ValueError as e:
        raise OAuthError(f"Invalid JSON from {response.url}") from e
    if not isinstance(payload, dict):
        raise OAuthError(f"Unexpected payload from {response.url}")
    return payload


def get_oauth_service() -> GoogleOAuthService:
    """Get the OAuth service instance."""
    return GoogleOAuthService(get_settings())
