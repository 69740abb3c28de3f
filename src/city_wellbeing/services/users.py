"""User-related business logic."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from city_wellbeing.domain.models import UserRecord

_logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_by_google_id(self, google_id: str) -> UserRecord | None:
        """Return the user for a Google subject id, if present."""

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user with the given id, if present."""

    def create_user(
        self, google_id: str, display_name: str, email: str | None
    ) -> UserRecord:
        """Create and return a new user record."""


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository

    def find_or_create_user(
        self, external_id: str, display_name: str, email: str | None
    ) -> UserRecord:
        """Return the user for an external identity, creating it on first login."""
        existing = self.repository.get_by_google_id(external_id)
        if existing:
            _logger.info("User found and authenticated: %s", display_name)
            return existing

        created = self.repository.create_user(external_id, display_name, email)
        _logger.info("New user created and authenticated: %s", display_name)
        return created

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return a user by id."""
        return self.repository.get_by_id(user_id)
