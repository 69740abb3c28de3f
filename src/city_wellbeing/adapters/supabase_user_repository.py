"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from city_wellbeing.domain.errors import PersistenceError
from city_wellbeing.domain.models import UserRecord
from city_wellbeing.services.users import UserRepository

_COLUMNS = "id, google_id, display_name, email, created_at"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_by_google_id(self, google_id: str) -> UserRecord | None:
        """Return the user for a Google subject id, if present."""
        response = (
            self.client.table("users")
            .select(_COLUMNS)
            .eq("google_id", google_id)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_row(response.data[0])
        return None

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user with the given id, if present."""
        response = (
            self.client.table("users")
            .select(_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_row(response.data[0])
        return None

    def create_user(
        self, google_id: str, display_name: str, email: str | None
    ) -> UserRecord:
        """Create a new user row and return it."""
        response = (
            self.client.table("users")
            .insert(
                {
                    "google_id": google_id,
                    "display_name": display_name,
                    "email": email,
                    "created_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise PersistenceError("Failed to create user in Supabase")
        return _parse_row(response.data[0])


def _parse_row(row: dict[str, object]) -> UserRecord:
    created_raw = row.get("created_at")
    created_at = (
        datetime.fromisoformat(created_raw)
        if isinstance(created_raw, str) and created_raw
        else datetime.now(tz=UTC)
    )
    email = row.get("email")
    return UserRecord(
        id=UUID(str(row["id"])),
        google_id=str(row["google_id"]),
        display_name=str(row.get("display_name") or ""),
        email=str(email) if email else None,
        created_at=created_at,
    )
