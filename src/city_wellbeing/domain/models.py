"""Domain models for users."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    google_id: str
    display_name: str
    email: str | None
    created_at: datetime


@dataclass(frozen=True)
class ExternalProfile:
    """Identity returned by the OAuth provider after a successful login."""

    external_id: str
    display_name: str
    email: str | None = None
