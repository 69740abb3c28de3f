"""Pydantic models for request payloads."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from city_wellbeing.domain.records import NewScoreRecord, WellbeingFactors


class WellbeingFactorsPayload(BaseModel):
    """Per-factor scores submitted with a record."""

    model_config = ConfigDict(allow_inf_nan=False)

    population_density: float = Field(alias="populationDensity")
    air_quality: float = Field(alias="airQuality")
    weather_comfort: float = Field(alias="weatherComfort")


class SaveRecordRequest(BaseModel):
    """Body of a save request for a finished score."""

    model_config = ConfigDict(allow_inf_nan=False)

    city: str = Field(min_length=1)
    country: str = Field(min_length=1)
    total_score: float = Field(alias="totalScore")
    wellbeing_factors: WellbeingFactorsPayload = Field(alias="wellbeingFactors")

    def to_record(self, user_id: UUID) -> NewScoreRecord:
        """Attach the owning user and convert to the domain model."""
        factors = self.wellbeing_factors
        return NewScoreRecord(
            user_id=user_id,
            city=self.city,
            country=self.country,
            total_score=self.total_score,
            wellbeing_factors=WellbeingFactors(
                population_density=factors.population_density,
                air_quality=factors.air_quality,
                weather_comfort=factors.weather_comfort,
            ),
        )
