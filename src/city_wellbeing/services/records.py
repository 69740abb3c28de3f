"""Saved score records."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from city_wellbeing.domain.errors import PersistenceError
from city_wellbeing.domain.records import NewScoreRecord, ScoreRecord

_logger = logging.getLogger(__name__)


class RecordRepository(Protocol):
    """Persistence interface for score records."""

    def create_record(self, record: NewScoreRecord) -> ScoreRecord:
        """Insert a record and return the stored row."""

    def list_by_user(self, user_id: UUID) -> list[ScoreRecord]:
        """Return a user's records, highest total score first."""


@dataclass
class RecordService:
    """Stores finished scores and lists them for their owner."""

    repository: RecordRepository

    def save_record(self, record: NewScoreRecord) -> ScoreRecord:
        """Persist a finished score for its owner."""
        try:
            return self.repository.create_record(record)
        except PersistenceError:
            raise
        except Exception as exc:
            _logger.exception("Error saving record", extra={"user_id": record.user_id})
            raise PersistenceError(str(exc)) from exc

    def list_records(self, user_id: UUID) -> list[ScoreRecord]:
        """Return the user's records sorted by total score, descending."""
        try:
            records = self.repository.list_by_user(user_id)
        except PersistenceError:
            raise
        except Exception as exc:
            _logger.exception("Error fetching records", extra={"user_id": user_id})
            raise PersistenceError(str(exc)) from exc
        return sorted(records, key=lambda record: record.total_score, reverse=True)
