"""Lifetime activity statistics for a user."""

from dataclasses import dataclass
from uuid import UUID

from fitness_tracker.domain.rounding import round_half_up
from fitness_tracker.domain.stats import UserStatsOverview
from fitness_tracker.services.meals import MealRepository
from fitness_tracker.services.preferences import PreferenceService
from fitness_tracker.services.workouts import WorkoutRepository


@dataclass
class UserStatsService:
    """Combines both ledgers and preferences into a profile overview."""

    meal_repository: MealRepository
    workout_repository: WorkoutRepository
    preference_service: PreferenceService

    def overview(self, user_id: UUID) -> UserStatsOverview:
        """Return lifetime meal and workout totals aggregated in storage."""
        meals = self.meal_repository.lifetime_totals(user_id)
        workouts = self.workout_repository.lifetime_totals(user_id)
        return UserStatsOverview(
            days_tracked=meals.day_count,
            total_meal_entries=meals.entry_count,
            average_entry_calories=_average(meals.total_calories, meals.entry_count),
            total_workouts=workouts.workout_count,
            total_workout_minutes=workouts.total_minutes,
            average_workout_minutes=_average(
                workouts.total_minutes, workouts.workout_count
            ),
            preferences=self.preference_service.get(user_id),
        )


def _average(total: float, count: int) -> float:
    return round_half_up(total / count, 2) if count else 0.0
