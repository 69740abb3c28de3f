"""Google OAuth 2.0 client for the authorization code flow."""

from dataclasses import dataclass
from typing import Protocol
from urllib.parse import urlencode

import httpx

_AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
_TOKEN_URL = "https://oauth2.googleapis.com/token"
_USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"
_SCOPES = ("openid", "profile", "email")


class GoogleOAuthClient(Protocol):
    """Interface for the Google login flow."""

    def authorization_url(self, state: str) -> str:
        """Return the consent screen URL for a login attempt."""

    async def fetch_profile(self, code: str) -> dict[str, object]:
        """Exchange an authorization code and return the user's profile."""


@dataclass
class HttpxGoogleOAuthClient(GoogleOAuthClient):
    """Google OAuth client implemented with httpx."""

    client_id: str | None
    client_secret: str | None
    redirect_uri: str
    http_client: httpx.AsyncClient
    timeout: float = 10.0

    @classmethod
    def create(
        cls,
        client_id: str | None,
        client_secret: str | None,
        redirect_uri: str,
        timeout: float = 10.0,
    ) -> "HttpxGoogleOAuthClient":
        """Create a Google OAuth client with a managed httpx session."""
        return cls(
            client_id=client_id,
            client_secret=client_secret,
            redirect_uri=redirect_uri,
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    def authorization_url(self, state: str) -> str:
        """Return the consent screen URL for a login attempt."""
        query = urlencode(
            {
                "client_id": self.client_id or "",
                "redirect_uri": self.redirect_uri,
                "response_type": "code",
                "scope": " ".join(_SCOPES),
                "state": state,
            }
        )
        return f"{_AUTHORIZE_URL}?{query}"

    async def fetch_profile(self, code: str) -> dict[str, object]:
        """Exchange an authorization code and return the user's profile."""
        token_response = await self.http_client.post(
            _TOKEN_URL,
            data={
                "code": code,
                "client_id": self.client_id or "",
                "client_secret": self.client_secret or "",
                "redirect_uri": self.redirect_uri,
                "grant_type": "authorization_code",
            },
            timeout=self.timeout,
        )
        token_response.raise_for_status()
        access_token = token_response.json()["access_token"]
        profile_response = await self.http_client.get(
            _USERINFO_URL,
            headers={"Authorization": f"Bearer {access_token}"},
            timeout=self.timeout,
        )
        profile_response.raise_for_status()
        return profile_response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
