"""Air quality lookups with a fixed fallback reading."""

import logging
from dataclasses import dataclass

from city_wellbeing.adapters.openaq_client import OpenAqClient
from city_wellbeing.domain.locations import AirQualityReading, default_air_quality

_SEARCH_RADIUS_M = 10000

_logger = logging.getLogger(__name__)


@dataclass
class AirQualityService:
    """Fetches the nearest PM2.5 reading, degrading to a default value."""

    client: OpenAqClient
    search_radius_m: int = _SEARCH_RADIUS_M

    async def fetch(self, latitude: float, longitude: float) -> AirQualityReading:
        """Return the latest PM2.5 reading near the coordinates.

        Never raises: failures and empty results yield the default reading.
        """
        try:
            payload = await self.client.latest_measurements(
                latitude,
                longitude,
                radius_m=self.search_radius_m,
                parameter="pm25",
                limit=1,
            )
        except Exception as exc:
            _logger.warning("OpenAQ Error: %s. Using default AQ value.", exc)
            return default_air_quality()

        measurement = _first_measurement(payload)
        if measurement is None:
            return default_air_quality()
        try:
            return AirQualityReading(
                value=float(measurement["value"]),
                unit=str(measurement.get("unit") or default_air_quality().unit),
            )
        except (KeyError, TypeError, ValueError) as exc:
            _logger.warning("OpenAQ Error: %s. Using default AQ value.", exc)
            return default_air_quality()


def _first_measurement(payload: object) -> dict[str, object] | None:
    if not isinstance(payload, dict):
        return None
    results = payload.get("results")
    if not isinstance(results, list) or not results:
        return None
    first_result = results[0]
    if not isinstance(first_result, dict):
        return None
    measurements = first_result.get("measurements")
    if not isinstance(measurements, list) or not measurements:
        return None
    first = measurements[0]
    return first if isinstance(first, dict) else None
