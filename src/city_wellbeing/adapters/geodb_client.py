"""GeoDB Cities API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

_RAPIDAPI_HOST = "wft-geo-db.p.rapidapi.com"


class GeoDbClient(Protocol):
    """Interface for GeoDB city lookups."""

    async def find_cities(self, name_prefix: str, limit: int = 1) -> dict[str, object]:
        """Search cities by name prefix, most populous first."""


@dataclass
class HttpxGeoDbClient(GeoDbClient):
    """HTTPX-backed GeoDB client served through RapidAPI."""

    api_key: str | None
    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 10.0

    @classmethod
    def create(
        cls, api_key: str | None, base_url: str, timeout: float = 10.0
    ) -> "HttpxGeoDbClient":
        """Create a GeoDB client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def find_cities(self, name_prefix: str, limit: int = 1) -> dict[str, object]:
        """Search cities by name prefix, most populous first."""
        response = await self.http_client.get(
            f"{self.base_url}/cities",
            params={
                "namePrefix": name_prefix,
                "limit": limit,
                "includeDeleted": "none",
                "sort": "-population",
            },
            headers={
                "x-rapidapi-key": self.api_key or "",
                "x-rapidapi-host": _RAPIDAPI_HOST,
            },
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
