"""Domain models for saved wellbeing records."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class WellbeingFactors:
    """Per-factor breakdown of a wellbeing score."""

    population_density: float
    air_quality: float
    weather_comfort: float

    def to_payload(self) -> dict[str, float]:
        """Return the camelCase JSON representation."""
        return {
            "populationDensity": self.population_density,
            "airQuality": self.air_quality,
            "weatherComfort": self.weather_comfort,
        }


@dataclass(frozen=True)
class NewScoreRecord:
    """A finished score submitted by a user, before persistence."""

    user_id: UUID
    city: str
    country: str
    total_score: float
    wellbeing_factors: WellbeingFactors


@dataclass(frozen=True)
class ScoreRecord:
    """A persisted wellbeing score owned by a user."""

    id: UUID
    user_id: UUID
    city: str
    country: str
    total_score: float
    wellbeing_factors: WellbeingFactors
    saved_at: datetime

    def to_payload(self) -> dict[str, object]:
        """Return the JSON representation used by the records API."""
        return {
            "id": str(self.id),
            "userId": str(self.user_id),
            "city": self.city,
            "country": self.country,
            "totalScore": self.total_score,
            "wellbeingFactors": self.wellbeing_factors.to_payload(),
            "savedAt": self.saved_at.isoformat(),
        }
