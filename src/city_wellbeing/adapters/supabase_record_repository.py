"""Supabase repository for saved score records."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from city_wellbeing.domain.errors import PersistenceError
from city_wellbeing.domain.records import NewScoreRecord, ScoreRecord, WellbeingFactors
from city_wellbeing.services.records import RecordRepository

_COLUMNS = "id, user_id, city, country, total_score, wellbeing_factors, saved_at"


@dataclass
class SupabaseRecordRepository(RecordRepository):
    """Supabase implementation for score records."""

    client: Client

    def create_record(self, record: NewScoreRecord) -> ScoreRecord:
        """Insert a record and return the stored row."""
        response = (
            self.client.table("records")
            .insert(
                {
                    "user_id": str(record.user_id),
                    "city": record.city,
                    "country": record.country,
                    "total_score": record.total_score,
                    "wellbeing_factors": record.wellbeing_factors.to_payload(),
                    "saved_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise PersistenceError("Failed to create record in Supabase")
        return _parse_row(response.data[0])

    def list_by_user(self, user_id: UUID) -> list[ScoreRecord]:
        """Return a user's records, highest total score first."""
        response = (
            self.client.table("records")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("total_score", desc=True)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> ScoreRecord:
    factors = row["wellbeing_factors"]
    return ScoreRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        city=str(row["city"]),
        country=str(row["country"]),
        total_score=float(row["total_score"]),
        wellbeing_factors=WellbeingFactors(
            population_density=float(factors["populationDensity"]),
            air_quality=float(factors["airQuality"]),
            weather_comfort=float(factors["weatherComfort"]),
        ),
        saved_at=datetime.fromisoformat(str(row["saved_at"])),
    )
