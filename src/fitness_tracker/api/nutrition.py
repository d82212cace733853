"""Food catalog and meal ledger endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Query, Request, status

from fitness_tracker.api.dependencies import current_user, get_container
from fitness_tracker.api.schemas import (  # noqa: TC001
    MealCreateRequest,
    MealUpdateRequest,
)
from fitness_tracker.domain.models import UserRecord  # noqa: TC001
from fitness_tracker.services.meals import DEFAULT_HISTORY_LIMIT

router = APIRouter(prefix="/api/nutrition", tags=["nutrition"])


@router.get("/foods")
async def list_foods(
    request: Request, _user: UserRecord = Depends(current_user)
) -> dict[str, object]:
    """Return the full food catalog."""
    container = get_container(request)
    return {"foods": container.food_catalog_service.list_foods()}


@router.get("/foods/{food_id}")
async def get_food(
    food_id: int, request: Request, _user: UserRecord = Depends(current_user)
) -> dict[str, object]:
    """Return one catalog food."""
    container = get_container(request)
    return {"food": container.food_catalog_service.get(food_id)}


@router.get("/categories")
async def list_categories(
    request: Request, _user: UserRecord = Depends(current_user)
) -> dict[str, object]:
    """Return food categories with product counts."""
    container = get_container(request)
    return {"categories": container.food_catalog_service.list_categories()}


@router.get("/search")
async def search_foods(
    request: Request,
    q: str | None = None,
    category_id: int | None = None,
    _user: UserRecord = Depends(current_user),
) -> dict[str, object]:
    """Search foods by name."""
    container = get_container(request)
    return {"foods": container.food_catalog_service.search(q, category_id)}


@router.post("/meals", status_code=status.HTTP_201_CREATED)
async def add_meal(
    body: MealCreateRequest,
    request: Request,
    user: UserRecord = Depends(current_user),
) -> dict[str, object]:
    """Log a portion of a catalog food."""
    container = get_container(request)
    entry = container.meal_ledger_service.add_meal(
        user.id, body.food_item_id, body.quantity_grams, body.meal_date
    )
    return {"message": "Meal added", "meal": entry}


@router.get("/meals")
async def day_view(
    request: Request,
    day: date | None = Query(default=None, alias="date"),
    user: UserRecord = Depends(current_user),
) -> dict[str, object]:
    """Return a date's meals and totals (today by default)."""
    container = get_container(request)
    return {"daily": container.meal_ledger_service.day_view(user.id, day)}


@router.get("/meals/{entry_id}")
async def get_meal(
    entry_id: UUID, request: Request, user: UserRecord = Depends(current_user)
) -> dict[str, object]:
    """Return one logged meal with its portion totals."""
    container = get_container(request)
    return {"meal": container.meal_ledger_service.get_meal(user.id, entry_id)}


@router.put("/meals/{entry_id}")
async def update_meal(
    entry_id: UUID,
    body: MealUpdateRequest,
    request: Request,
    user: UserRecord = Depends(current_user),
) -> dict[str, object]:
    """Change the quantity of a logged meal."""
    container = get_container(request)
    entry = container.meal_ledger_service.update_quantity(
        user.id, entry_id, body.quantity_grams
    )
    return {"message": "Meal updated", "meal": entry}


@router.delete("/meals/{entry_id}")
async def remove_meal(
    entry_id: UUID, request: Request, user: UserRecord = Depends(current_user)
) -> dict[str, object]:
    """Delete a logged meal."""
    container = get_container(request)
    container.meal_ledger_service.remove_meal(user.id, entry_id)
    return {"message": "Meal removed"}


@router.delete("/meals")
async def clear_day(
    request: Request,
    day: date | None = Query(default=None, alias="date"),
    user: UserRecord = Depends(current_user),
) -> dict[str, object]:
    """Delete every meal of a date (today by default)."""
    container = get_container(request)
    removed = container.meal_ledger_service.clear_day(user.id, day)
    return {"message": "Day cleared", "deleted_count": removed}


@router.get("/history")
async def meal_history(
    request: Request,
    limit: int = DEFAULT_HISTORY_LIMIT,
    user: UserRecord = Depends(current_user),
) -> dict[str, object]:
    """Return per-day meal summaries, newest first."""
    container = get_container(request)
    return {"history": container.meal_ledger_service.history(user.id, limit)}
