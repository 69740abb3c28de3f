"""Current temperature lookups."""

from dataclasses import dataclass

from city_wellbeing.adapters.openweather_client import OpenWeatherClient
from city_wellbeing.domain.errors import UpstreamError
from city_wellbeing.domain.locations import WeatherReading


@dataclass
class WeatherService:
    """Fetches the current temperature; failures are fatal to the caller."""

    client: OpenWeatherClient

    async def fetch(self, latitude: float, longitude: float) -> WeatherReading:
        """Return the current temperature in Kelvin."""
        try:
            payload = await self.client.current_weather(latitude, longitude)
            main = payload["main"]
            return WeatherReading(temperature=float(main["temp"]))
        except Exception as exc:
            raise UpstreamError(f"OpenWeatherMap Error: {exc}") from exc
