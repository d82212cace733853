"""Workout ledger: completed workouts with daily and weekly rollups."""

from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from itertools import groupby
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.errors import NotFoundError, ValidationError
from fitness_tracker.domain.rounding import round_half_up
from fitness_tracker.domain.stats import WorkoutLifetimeTotals
from fitness_tracker.domain.workouts import (
    CompletedWorkoutEntry,
    CompletedWorkoutInput,
    Intensity,
    WeeklyWorkoutStats,
    WorkoutDaySummary,
    WorkoutDayView,
)
from fitness_tracker.services.clock import Clock
from fitness_tracker.services.history import bounded_history_limit

DEFAULT_HISTORY_LIMIT = 50
WEEK_DAYS = 7
INTENSITIES = {intensity.value for intensity in Intensity}


class WorkoutRepository(Protocol):
    """Persistence interface for completed workouts, scoped by owner."""

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

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        """Delete an owned entry. Return False when nothing matched."""

    def list_between(
        self, user_id: UUID, start: date, end: date
    ) -> list[CompletedWorkoutEntry]:
        """Return entries whose workout date lies in [start, end]."""

    def list_entries(
        self, user_id: UUID, workout_date: date | None, limit: int
    ) -> list[CompletedWorkoutEntry]:
        """Return at most `limit` entries newest first, optionally for one date."""

    def recent_dates(self, user_id: UUID, limit: int) -> list[date]:
        """Return at most `limit` distinct workout dates, newest first."""

    def lifetime_totals(self, user_id: UUID) -> WorkoutLifetimeTotals:
        """Return workout count and minutes over all of a user's workouts."""


@dataclass
class WorkoutLedgerService:
    """Service that records workouts and computes their aggregates."""

    repository: WorkoutRepository
    clock: Clock

    def complete_workout(
        self,
        user_id: UUID,
        workout: CompletedWorkoutInput,
        day: date | None = None,
    ) -> CompletedWorkoutEntry:
        """Record a finished workout for a date (today by default)."""
        if not workout.name or not workout.workout_type:
            raise ValidationError("Workout name and type are required")
        actual = _minutes(workout.actual_minutes, "actual_minutes")
        if actual is None:
            raise ValidationError("actual_minutes is required")
        planned = _minutes(workout.planned_minutes, "planned_minutes") or actual
        intensity = workout.intensity or Intensity.MEDIUM.value
        if intensity not in INTENSITIES:
            raise ValidationError(
                f"intensity must be one of {', '.join(sorted(INTENSITIES))}"
            )
        return self.repository.create_entry(
            user_id=user_id,
            workout=workout,
            planned_minutes=planned,
            intensity=intensity,
            workout_date=day or self.clock.today(),
            completed_at=self.clock.now(),
        )

    def remove_workout(self, user_id: UUID, entry_id: UUID) -> None:
        """Delete an owned workout."""
        if not self.repository.delete_entry(user_id, entry_id):
            raise NotFoundError("Workout not found")

    def list_completed(
        self, user_id: UUID, day: date | None = None, limit: int = DEFAULT_HISTORY_LIMIT
    ) -> list[CompletedWorkoutEntry]:
        """Return recent workouts, optionally for a single date."""
        bounded = bounded_history_limit(limit)
        entries = self.repository.list_entries(user_id, day, bounded)
        return _newest_first(entries)[:bounded]

    def today_view(self, user_id: UUID) -> WorkoutDayView:
        """Return today's workouts with counts and minutes."""
        today = self.clock.today()
        entries = _newest_first(
            [
                entry
                for entry in self.repository.list_between(user_id, today, today)
                if entry.workout_date == today
            ]
        )
        return WorkoutDayView(
            day=today,
            entries=entries,
            total_count=len(entries),
            total_minutes=sum(entry.actual_minutes for entry in entries),
            per_type_counts=_type_counts(entries),
        )

    def weekly_stats(self, user_id: UUID) -> WeeklyWorkoutStats:
        """Aggregate the trailing seven days including today."""
        end = self.clock.today()
        start = end - timedelta(days=WEEK_DAYS - 1)
        entries = [
            entry
            for entry in self.repository.list_between(user_id, start, end)
            if start <= entry.workout_date <= end
        ]
        total_workouts = len(entries)
        total_minutes = sum(entry.actual_minutes for entry in entries)
        average = (
            int(round_half_up(total_minutes / total_workouts)) if total_workouts else 0
        )
        return WeeklyWorkoutStats(
            start=start,
            end=end,
            total_workouts=total_workouts,
            total_minutes=total_minutes,
            average_minutes=average,
            active_day_count=len({entry.workout_date for entry in entries}),
            per_type_counts=_type_counts(entries),
        )

    def history(
        self, user_id: UUID, limit: int = DEFAULT_HISTORY_LIMIT
    ) -> list[WorkoutDaySummary]:
        """Return per-day workout summaries, newest date first."""
        bounded = bounded_history_limit(limit)
        dates = self.repository.recent_dates(user_id, bounded)
        if not dates:
            return []
        entries = sorted(
            self.repository.list_between(user_id, min(dates), max(dates)),
            key=lambda entry: entry.workout_date,
            reverse=True,
        )
        summaries: list[WorkoutDaySummary] = []
        for workout_date, group in groupby(entries, key=lambda entry: entry.workout_date):
            day_entries = list(group)
            summaries.append(
                WorkoutDaySummary(
                    workout_date=workout_date,
                    workout_count=len(day_entries),
                    total_minutes=sum(entry.actual_minutes for entry in day_entries),
                    workout_types=sorted({entry.workout_type for entry in day_entries}),
                )
            )
            if len(summaries) == bounded:
                break
        return summaries


def _minutes(value: int | None, name: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be a whole number of minutes")
    if value <= 0:
        raise ValidationError(f"{name} must be greater than 0")
    return value


def _type_counts(entries: list[CompletedWorkoutEntry]) -> dict[str, int]:
    return dict(Counter(entry.workout_type for entry in entries))


def _newest_first(entries: list[CompletedWorkoutEntry]) -> list[CompletedWorkoutEntry]:
    return sorted(entries, key=lambda entry: entry.completed_at, reverse=True)
