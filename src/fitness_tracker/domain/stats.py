"""Domain models for user statistics."""

from dataclasses import dataclass

from fitness_tracker.domain.models import UserPreferences


@dataclass(frozen=True)
class UserStatsOverview:
    """Lifetime activity summary for a user."""

    days_tracked: int
    total_meal_entries: int
    average_entry_calories: float
    total_workouts: int
    total_workout_minutes: int
    average_workout_minutes: float
    preferences: UserPreferences


@dataclass(frozen=True)
class MealLifetimeTotals:
    """Storage-side rollup of every meal entry a user has logged."""

    entry_count: int = 0
    day_count: int = 0
    total_calories: float = 0.0


@dataclass(frozen=True)
class WorkoutLifetimeTotals:
    """Storage-side rollup of every workout a user has completed."""

    workout_count: int = 0
    total_minutes: int = 0
