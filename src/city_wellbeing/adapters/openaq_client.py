"""OpenAQ air quality API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class OpenAqClient(Protocol):
    """Interface for OpenAQ measurement lookups."""

    async def latest_measurements(
        self,
        latitude: float,
        longitude: float,
        *,
        radius_m: int = 10000,
        parameter: str = "pm25",
        limit: int = 1,
    ) -> dict[str, object]:
        """Return the latest measurements near a coordinate."""


@dataclass
class HttpxOpenAqClient(OpenAqClient):
    """HTTPX-backed OpenAQ client."""

    api_key: str | None
    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 10.0

    @classmethod
    def create(
        cls, api_key: str | None, base_url: str, timeout: float = 10.0
    ) -> "HttpxOpenAqClient":
        """Create an OpenAQ client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def latest_measurements(
        self,
        latitude: float,
        longitude: float,
        *,
        radius_m: int = 10000,
        parameter: str = "pm25",
        limit: int = 1,
    ) -> dict[str, object]:
        """Return the latest measurements near a coordinate."""
        headers = {"Authorization": self.api_key} if self.api_key else {}
        response = await self.http_client.get(
            f"{self.base_url}/latest",
            params={
                "coordinates": f"{latitude},{longitude}",
                "radius": radius_m,
                "limit": limit,
                "parameter": parameter,
            },
            headers=headers,
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
