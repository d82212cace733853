"""Domain models for the meal ledger."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from fitness_tracker.domain.nutrition import FoodItem, MacroProfile


@dataclass(frozen=True)
class MealEntryRecord:
    """Stored meal entry. Nutrient totals are never persisted."""

    id: UUID
    user_id: UUID
    food: FoodItem
    quantity_grams: float
    meal_date: date
    consumed_at: datetime | None = None


@dataclass(frozen=True)
class MealEntry:
    """Meal entry with totals derived from its quantity."""

    id: UUID
    food_item_id: int
    food_name: str
    category_name: str | None
    quantity_grams: float
    meal_date: date
    consumed_at: datetime | None
    per_100g: MacroProfile
    totals: MacroProfile


@dataclass(frozen=True)
class MealDayView:
    """All entries for one user and date with their aggregate."""

    day: date
    entries: list[MealEntry]
    totals: MacroProfile
    entry_count: int


@dataclass(frozen=True)
class MealDaySummary:
    """Per-day rollup used by the meal history."""

    meal_date: date
    entry_count: int
    totals: MacroProfile
