"""Supabase repository for user preferences."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from fitness_tracker.adapters.supabase_errors import storage_errors
from fitness_tracker.domain.errors import ConflictError, InternalError, NotFoundError
from fitness_tracker.domain.models import UserPreferences
from fitness_tracker.services.preferences import PreferencesRepository

PREFERENCE_COLUMNS = (
    "user_id, fitness_level, daily_calorie_goal, notifications_enabled, updated_at"
)


@dataclass
class SupabasePreferencesRepository(PreferencesRepository):
    """Supabase implementation for user preferences."""

    client: Client

    def get(self, user_id: UUID) -> UserPreferences | None:
        """Return the stored preferences for a user."""
        with storage_errors("user_preferences.get"):
            response = (
                self.client.table("user_preferences")
                .select(PREFERENCE_COLUMNS)
                .eq("user_id", str(user_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_preferences(response.data[0])

    def create(self, preferences: UserPreferences) -> UserPreferences:
        """Insert a preferences row, tolerating a concurrent insert."""
        try:
            with storage_errors("user_preferences.create"):
                response = (
                    self.client.table("user_preferences")
                    .insert(
                        {
                            "user_id": str(preferences.user_id),
                            "fitness_level": preferences.fitness_level,
                            "daily_calorie_goal": preferences.daily_calorie_goal,
                            "notifications_enabled": preferences.notifications_enabled,
                        }
                    )
                    .execute()
                )
        except ConflictError:
            existing = self.get(preferences.user_id)
            if existing is None:
                raise
            return existing
        if not response.data:
            raise InternalError("Failed to create user preferences")
        return _parse_preferences(response.data[0])

    def update(self, user_id: UUID, changes: dict[str, object]) -> UserPreferences:
        """Update the user's preferences."""
        with storage_errors("user_preferences.update"):
            response = (
                self.client.table("user_preferences")
                .update(
                    {
                        **changes,
                        "updated_at": datetime.now(tz=UTC).isoformat(),
                    }
                )
                .eq("user_id", str(user_id))
                .execute()
            )
        if not response.data:
            raise NotFoundError("Preferences not found")
        return _parse_preferences(response.data[0])


def _parse_preferences(row: dict[str, object]) -> UserPreferences:
    updated_raw = row.get("updated_at")
    return UserPreferences(
        user_id=UUID(str(row["user_id"])),
        fitness_level=str(row.get("fitness_level") or "beginner"),
        daily_calorie_goal=int(row.get("daily_calorie_goal") or 2000),
        notifications_enabled=bool(row.get("notifications_enabled", True)),
        updated_at=(
            datetime.fromisoformat(updated_raw)
            if isinstance(updated_raw, str) and updated_raw
            else None
        ),
    )
