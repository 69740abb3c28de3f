"""Domain models for city lookups and enrichment readings."""

from dataclasses import dataclass

DEFAULT_AIR_QUALITY_VALUE = 15.0
DEFAULT_AIR_QUALITY_UNIT = "µg/m³"


@dataclass(frozen=True)
class Location:
    """Canonical city location resolved from a free-text name."""

    city: str
    country: str
    latitude: float
    longitude: float
    population: int


@dataclass(frozen=True)
class AirQualityReading:
    """A PM2.5 measurement near a location."""

    value: float
    unit: str
    fallback: bool = False


@dataclass(frozen=True)
class WeatherReading:
    """Current temperature in Kelvin."""

    temperature: float


def default_air_quality() -> AirQualityReading:
    """Return the reading used when no measurement is available."""
    return AirQualityReading(
        value=DEFAULT_AIR_QUALITY_VALUE,
        unit=DEFAULT_AIR_QUALITY_UNIT,
        fallback=True,
    )


@dataclass(frozen=True)
class RawScoreInputs:
    """Aggregated inputs the client turns into a wellbeing score."""

    city: str
    country: str
    population: int
    air_quality_raw: float
    temperature_raw: float

    def to_payload(self) -> dict[str, object]:
        """Return the JSON payload returned by the score endpoint."""
        return {
            "city": self.city,
            "country": self.country,
            "population": self.population,
            "airQualityRaw": self.air_quality_raw,
            "temperatureRaw": self.temperature_raw,
        }


@dataclass
class AggregationContext:
    """Per-request state threaded through the aggregation pipeline."""

    city_name: str
    location: Location | None = None
    air_quality: AirQualityReading | None = None
    weather: WeatherReading | None = None

    def to_raw_inputs(self) -> RawScoreInputs:
        """Merge the resolved location and readings into score inputs."""
        if self.location is None or self.weather is None:
            raise RuntimeError("Aggregation context is incomplete")
        air_quality = self.air_quality or default_air_quality()
        return RawScoreInputs(
            city=self.location.city,
            country=self.location.country,
            population=self.location.population,
            air_quality_raw=air_quality.value,
            temperature_raw=self.weather.temperature,
        )
