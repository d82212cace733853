"""Supabase-backed completed workout repository."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any
from uuid import UUID

from supabase import Client

from fitness_tracker.adapters.supabase_errors import storage_errors
from fitness_tracker.adapters.supabase_paging import fetch_pages
from fitness_tracker.domain.errors import InternalError
from fitness_tracker.domain.stats import WorkoutLifetimeTotals
from fitness_tracker.domain.workouts import CompletedWorkoutEntry, CompletedWorkoutInput
from fitness_tracker.services.workouts import WorkoutRepository

WORKOUT_COLUMNS = (
    "id, user_id, workout_template_id, workout_name, workout_type, "
    "planned_duration_minutes, actual_duration_minutes, intensity, completed_at, "
    "workout_date, notes"
)


@dataclass
class SupabaseWorkoutRepository(WorkoutRepository):
    """Supabase implementation for completed workouts."""

    client: Client

    def create_entry(  # noqa: PLR0913
        self,
        user_id: UUID,
        workout: CompletedWorkoutInput,
        planned_minutes: int,
        intensity: str,
        workout_date: date,
        completed_at: datetime,
    ) -> CompletedWorkoutEntry:
        """Insert a completed workout and return it."""
        with storage_errors("completed_workouts.create"):
            response = (
                self.client.table("completed_workouts")
                .insert(
                    {
                        "user_id": str(user_id),
                        "workout_template_id": workout.template_id,
                        "workout_name": workout.name,
                        "workout_type": workout.workout_type,
                        "planned_duration_minutes": planned_minutes,
                        "actual_duration_minutes": workout.actual_minutes,
                        "intensity": intensity,
                        "completed_at": completed_at.isoformat(),
                        "workout_date": workout_date.isoformat(),
                        "notes": workout.notes,
                    }
                )
                .execute()
            )
        if not response.data:
            raise InternalError("Failed to record workout")
        return _parse_workout(response.data[0])

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        """Delete an owned workout."""
        with storage_errors("completed_workouts.delete"):
            response = (
                self.client.table("completed_workouts")
                .delete()
                .eq("id", str(entry_id))
                .eq("user_id", str(user_id))
                .execute()
            )
        return bool(response.data)

    def list_between(
        self, user_id: UUID, start: date, end: date
    ) -> list[CompletedWorkoutEntry]:
        """Return workouts with a date in the inclusive range."""

        def query() -> Any:
            return (
                self.client.table("completed_workouts")
                .select(WORKOUT_COLUMNS)
                .eq("user_id", str(user_id))
                .gte("workout_date", start.isoformat())
                .lte("workout_date", end.isoformat())
                .order("completed_at", desc=True)
                .order("id")
            )

        rows = fetch_pages(query, "completed_workouts.list_between")
        return [_parse_workout(row) for row in rows]

    def list_entries(
        self, user_id: UUID, workout_date: date | None, limit: int
    ) -> list[CompletedWorkoutEntry]:
        """Return workouts newest first, optionally for one date."""
        with storage_errors("completed_workouts.list"):
            query = (
                self.client.table("completed_workouts")
                .select(WORKOUT_COLUMNS)
                .eq("user_id", str(user_id))
            )
            if workout_date is not None:
                query = query.eq("workout_date", workout_date.isoformat())
            response = query.order("completed_at", desc=True).limit(limit).execute()
        return [_parse_workout(row) for row in response.data or []]

    def recent_dates(self, user_id: UUID, limit: int) -> list[date]:
        """Return the newest distinct workout dates from the `workout_days` view."""
        with storage_errors("workout_days.recent"):
            response = (
                self.client.table("workout_days")
                .select("workout_date")
                .eq("user_id", str(user_id))
                .order("workout_date", desc=True)
                .limit(limit)
                .execute()
            )
        return [
            date.fromisoformat(str(row["workout_date"])) for row in response.data or []
        ]

    def lifetime_totals(self, user_id: UUID) -> WorkoutLifetimeTotals:
        """Read the `workout_lifetime_totals` rollup; no row means no workouts."""
        with storage_errors("workout_lifetime_totals.get"):
            response = (
                self.client.table("workout_lifetime_totals")
                .select("workout_count, total_minutes")
                .eq("user_id", str(user_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return WorkoutLifetimeTotals()
        row = response.data[0]
        return WorkoutLifetimeTotals(
            workout_count=int(row.get("workout_count") or 0),
            total_minutes=int(row.get("total_minutes") or 0),
        )


def _parse_workout(row: dict[str, object]) -> CompletedWorkoutEntry:
    actual = int(row.get("actual_duration_minutes") or 0)
    template_id = row.get("workout_template_id")
    return CompletedWorkoutEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("workout_name", "")),
        workout_type=str(row.get("workout_type", "")),
        planned_minutes=int(row.get("planned_duration_minutes") or actual),
        actual_minutes=actual,
        intensity=str(row.get("intensity") or "medium"),
        completed_at=datetime.fromisoformat(str(row["completed_at"])),
        workout_date=date.fromisoformat(str(row["workout_date"])),
        template_id=int(template_id) if template_id is not None else None,
        notes=row.get("notes"),
    )
