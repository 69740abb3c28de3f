"""OpenWeatherMap current weather client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class OpenWeatherClient(Protocol):
    """Interface for current weather lookups."""

    async def current_weather(
        self, latitude: float, longitude: float
    ) -> dict[str, object]:
        """Return current conditions in standard (Kelvin) units."""


@dataclass
class HttpxOpenWeatherClient(OpenWeatherClient):
    """HTTPX-backed OpenWeatherMap client."""

    api_key: str | None
    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 10.0

    @classmethod
    def create(
        cls, api_key: str | None, base_url: str, timeout: float = 10.0
    ) -> "HttpxOpenWeatherClient":
        """Create an OpenWeatherMap client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def current_weather(
        self, latitude: float, longitude: float
    ) -> dict[str, object]:
        """Return current conditions in standard (Kelvin) units."""
        response = await self.http_client.get(
            f"{self.base_url}/weather",
            params={
                "lat": latitude,
                "lon": longitude,
                "appid": self.api_key or "",
                "units": "standard",
            },
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
