"""Aggregation of city, air quality and weather data into score inputs."""

import asyncio
import logging
from dataclasses import dataclass

from city_wellbeing.domain.locations import (
    AggregationContext,
    RawScoreInputs,
    default_air_quality,
)
from city_wellbeing.services.air_quality import AirQualityService
from city_wellbeing.services.cities import CityResolver
from city_wellbeing.services.weather import WeatherService

_logger = logging.getLogger(__name__)


@dataclass
class ScoreAggregationService:
    """Resolves a city, then enriches it with air quality and weather."""

    city_resolver: CityResolver
    air_quality_service: AirQualityService
    weather_service: WeatherService

    async def aggregate(self, city_name: str) -> RawScoreInputs:
        """Return the raw inputs for a city's wellbeing score.

        The city is resolved first. Air quality and weather are then fetched
        concurrently and both are awaited. A weather failure fails the whole
        aggregation; an air quality failure is replaced by the default reading.
        """
        context = AggregationContext(city_name=city_name)
        context.location = await self.city_resolver.resolve(city_name)
        await self._enrich(context)
        return context.to_raw_inputs()

    async def _enrich(self, context: AggregationContext) -> None:
        location = context.location
        if location is None:
            raise RuntimeError("Location must be resolved before enrichment")
        air_quality_result, weather_result = await asyncio.gather(
            self.air_quality_service.fetch(location.latitude, location.longitude),
            self.weather_service.fetch(location.latitude, location.longitude),
            return_exceptions=True,
        )
        if isinstance(weather_result, BaseException):
            raise weather_result
        if isinstance(air_quality_result, BaseException):
            _logger.warning(
                "Air quality lookup failed for %s: %s",
                location.city,
                air_quality_result,
            )
            air_quality_result = default_air_quality()
        context.air_quality = air_quality_result
        context.weather = weather_result
