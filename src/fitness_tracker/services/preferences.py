"""User preference service."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.errors import ValidationError
from fitness_tracker.domain.models import FitnessLevel, UserPreferences

logger = logging.getLogger(__name__)

PREFERENCE_FIELDS = ("fitness_level", "daily_calorie_goal", "notifications_enabled")
FITNESS_LEVELS = {level.value for level in FitnessLevel}


class PreferencesRepository(Protocol):
    """Persistence interface for user preferences."""

    def get(self, user_id: UUID) -> UserPreferences | None:
        """Return the preferences row for a user, if present."""

    def create(self, preferences: UserPreferences) -> UserPreferences:
        """Insert a preferences row, returning the stored row.

        Implementations return the existing row when one was created
        concurrently for the same user.
        """

    def update(self, user_id: UUID, changes: dict[str, object]) -> UserPreferences:
        """Apply changes to a user's preferences and return the new row."""


@dataclass
class PreferenceService:
    """Get-or-create access to per-user preferences."""

    repository: PreferencesRepository

    def get(self, user_id: UUID) -> UserPreferences:
        """Return preferences, creating the default row on first access."""
        existing = self.repository.get(user_id)
        if existing is not None:
            return existing
        logger.info("Creating default preferences for user %s", user_id)
        return self.repository.create(UserPreferences(user_id=user_id))

    def update(self, user_id: UUID, fields: dict[str, object]) -> UserPreferences:
        """Update whitelisted preference fields."""
        changes = _validate_changes(fields)
        self.get(user_id)
        return self.repository.update(user_id, changes)


def _validate_changes(fields: dict[str, object]) -> dict[str, object]:
    changes = {
        key: fields[key]
        for key in PREFERENCE_FIELDS
        if key in fields and fields[key] is not None
    }
    if not changes:
        raise ValidationError("No preference fields to update")

    if "fitness_level" in changes and changes["fitness_level"] not in FITNESS_LEVELS:
        raise ValidationError(
            f"fitness_level must be one of {', '.join(sorted(FITNESS_LEVELS))}"
        )
    if "daily_calorie_goal" in changes:
        goal = changes["daily_calorie_goal"]
        if isinstance(goal, bool) or not isinstance(goal, int) or goal <= 0:
            raise ValidationError("daily_calorie_goal must be a positive integer")
    if "notifications_enabled" in changes and not isinstance(
        changes["notifications_enabled"], bool
    ):
        raise ValidationError("notifications_enabled must be a boolean")
    return changes
