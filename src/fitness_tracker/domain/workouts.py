"""Domain models for the workout ledger and catalog."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID


class Intensity(StrEnum):
    """Workout intensity."""

    LIGHT = "light"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class WorkoutType:
    """Workout catalog category."""

    id: int
    name: str
    description: str | None = None
    template_count: int = 0


@dataclass(frozen=True)
class WorkoutTemplate:
    """Read-only catalog workout."""

    id: int
    name: str
    duration_minutes: int
    intensity: str
    fitness_level: str
    type_id: int | None = None
    type_name: str | None = None
    description: str | None = None
    equipment: str | None = None


@dataclass(frozen=True)
class CompletedWorkoutInput:
    """Caller-supplied data for a finished workout."""

    name: str | None
    workout_type: str | None
    actual_minutes: int | None
    planned_minutes: int | None = None
    intensity: str | None = None
    template_id: int | None = None
    notes: str | None = None


@dataclass(frozen=True)
class CompletedWorkoutEntry:
    """Completed workout. Name, type and intensity are denormalized."""

    id: UUID
    user_id: UUID
    name: str
    workout_type: str
    planned_minutes: int
    actual_minutes: int
    intensity: str
    completed_at: datetime
    workout_date: date
    template_id: int | None = None
    notes: str | None = None


@dataclass(frozen=True)
class WorkoutDayView:
    """Workouts for a single date."""

    day: date
    entries: list[CompletedWorkoutEntry]
    total_count: int
    total_minutes: int
    per_type_counts: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class WeeklyWorkoutStats:
    """Rolling seven-day workout aggregate."""

    start: date
    end: date
    total_workouts: int
    total_minutes: int
    average_minutes: int
    active_day_count: int
    per_type_counts: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class WorkoutDaySummary:
    """Per-day rollup used by the workout history."""

    workout_date: date
    workout_count: int
    total_minutes: int
    workout_types: list[str]
