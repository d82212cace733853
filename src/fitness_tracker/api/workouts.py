"""Workout catalog, workout ledger and preference endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Query, Request, status

from fitness_tracker.api.dependencies import current_user, get_container
from fitness_tracker.api.schemas import (  # noqa: TC001
    CompletedWorkoutRequest,
    PreferencesUpdateRequest,
)
from fitness_tracker.domain.models import UserRecord  # noqa: TC001
from fitness_tracker.domain.workouts import CompletedWorkoutInput
from fitness_tracker.services.workouts import DEFAULT_HISTORY_LIMIT

router = APIRouter(prefix="/api/workouts", tags=["workouts"])


@router.get("/types")
async def list_types(
    request: Request, _user: UserRecord = Depends(current_user)
) -> dict[str, object]:
    """Return workout types with template counts."""
    container = get_container(request)
    return {"types": container.workout_catalog_service.list_types()}


@router.get("/templates")
async def list_templates(  # noqa: PLR0913
    request: Request,
    fitness_level: str | None = None,
    type_id: int | None = None,
    limit: int = 50,
    _user: UserRecord = Depends(current_user),
) -> dict[str, object]:
    """Return workout templates filtered by level and type."""
    container = get_container(request)
    templates = container.workout_catalog_service.list_templates(
        fitness_level, type_id, limit
    )
    return {"templates": templates}


@router.get("/random")
async def random_templates(
    request: Request,
    fitness_level: str | None = None,
    count: int = 5,
    _user: UserRecord = Depends(current_user),
) -> dict[str, object]:
    """Return a random pick of workout templates."""
    container = get_container(request)
    templates = container.workout_catalog_service.random_templates(
        fitness_level, count
    )
    return {"templates": templates}


@router.post("/completed", status_code=status.HTTP_201_CREATED)
async def complete_workout(
    body: CompletedWorkoutRequest,
    request: Request,
    user: UserRecord = Depends(current_user),
) -> dict[str, object]:
    """Record a finished workout."""
    container = get_container(request)
    entry = container.workout_ledger_service.complete_workout(
        user.id,
        CompletedWorkoutInput(
            name=body.workout_name,
            workout_type=body.workout_type,
            actual_minutes=body.actual_duration_minutes,
            planned_minutes=body.planned_duration_minutes,
            intensity=body.intensity,
            template_id=body.workout_template_id,
            notes=body.notes,
        ),
        body.workout_date,
    )
    return {"message": "Workout recorded", "workout": entry}


@router.get("/completed")
async def list_completed(
    request: Request,
    day: date | None = Query(default=None, alias="date"),
    limit: int = DEFAULT_HISTORY_LIMIT,
    user: UserRecord = Depends(current_user),
) -> dict[str, object]:
    """Return recent workouts, optionally for a single date."""
    container = get_container(request)
    workouts = container.workout_ledger_service.list_completed(user.id, day, limit)
    return {"workouts": workouts}


@router.delete("/completed/{entry_id}")
async def remove_workout(
    entry_id: UUID, request: Request, user: UserRecord = Depends(current_user)
) -> dict[str, object]:
    """Delete a recorded workout."""
    container = get_container(request)
    container.workout_ledger_service.remove_workout(user.id, entry_id)
    return {"message": "Workout removed"}


@router.get("/today")
async def today(
    request: Request, user: UserRecord = Depends(current_user)
) -> dict[str, object]:
    """Return today's workouts with counts and minutes."""
    container = get_container(request)
    return {"today": container.workout_ledger_service.today_view(user.id)}


@router.get("/weekly-stats")
async def weekly_stats(
    request: Request, user: UserRecord = Depends(current_user)
) -> dict[str, object]:
    """Return the trailing seven-day aggregate."""
    container = get_container(request)
    return {"stats": container.workout_ledger_service.weekly_stats(user.id)}


@router.get("/history")
async def workout_history(
    request: Request,
    limit: int = DEFAULT_HISTORY_LIMIT,
    user: UserRecord = Depends(current_user),
) -> dict[str, object]:
    """Return per-day workout summaries, newest first."""
    container = get_container(request)
    return {"history": container.workout_ledger_service.history(user.id, limit)}


@router.get("/preferences")
async def get_preferences(
    request: Request, user: UserRecord = Depends(current_user)
) -> dict[str, object]:
    """Return the user's preferences, creating defaults on first access."""
    container = get_container(request)
    return {"preferences": container.preference_service.get(user.id)}


@router.put("/preferences")
async def update_preferences(
    body: PreferencesUpdateRequest,
    request: Request,
    user: UserRecord = Depends(current_user),
) -> dict[str, object]:
    """Update whitelisted preference fields."""
    container = get_container(request)
    preferences = container.preference_service.update(
        user.id, body.model_dump(exclude_unset=True)
    )
    return {"message": "Preferences updated", "preferences": preferences}
