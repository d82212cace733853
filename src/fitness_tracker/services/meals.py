"""Meal ledger: per-user, per-day food log with derived nutrient totals."""

import math
from dataclasses import dataclass
from datetime import UTC, date, datetime
from itertools import groupby
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.errors import NotFoundError, ValidationError
from fitness_tracker.domain.meals import (
    MealDaySummary,
    MealDayView,
    MealEntry,
    MealEntryRecord,
)
from fitness_tracker.domain.nutrition import MacroProfile
from fitness_tracker.domain.stats import MealLifetimeTotals
from fitness_tracker.services.catalog import FoodCatalogRepository
from fitness_tracker.services.clock import Clock
from fitness_tracker.services.history import bounded_history_limit

DEFAULT_HISTORY_LIMIT = 30
_EARLIEST = datetime.min.replace(tzinfo=UTC)


class MealRepository(Protocol):
    """Persistence interface for meal entries.

    Every lookup is scoped by owner, so another user's entry is reported
    exactly like a missing one.
    """

    def create_entry(
        self,
        user_id: UUID,
        food_item_id: int,
        quantity_grams: float,
        meal_date: date,
        consumed_at: datetime,
    ) -> MealEntryRecord:
        """Insert an entry and return it with its food item."""

    def get_entry(self, user_id: UUID, entry_id: UUID) -> MealEntryRecord | None:
        """Return an entry owned by the user, if present."""

    def update_quantity(
        self, user_id: UUID, entry_id: UUID, quantity_grams: float
    ) -> MealEntryRecord | None:
        """Set the quantity of an owned entry and return it, if present."""

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        """Delete an owned entry. Return False when nothing matched."""

    def delete_day(self, user_id: UUID, meal_date: date) -> int:
        """Delete all of a user's entries for a date and return the count."""

    def list_day(self, user_id: UUID, meal_date: date) -> list[MealEntryRecord]:
        """Return a user's entries for a date."""

    def list_between(
        self, user_id: UUID, start: date, end: date
    ) -> list[MealEntryRecord]:
        """Return entries whose meal date lies in [start, end]."""

    def recent_dates(self, user_id: UUID, limit: int) -> list[date]:
        """Return at most `limit` distinct meal dates, newest first."""

    def lifetime_totals(self, user_id: UUID) -> MealLifetimeTotals:
        """Return entry, day and calorie totals over all of a user's meals."""


@dataclass
class MealLedgerService:
    """Service that records meals and aggregates them per day."""

    food_repository: FoodCatalogRepository
    repository: MealRepository
    clock: Clock

    def add_meal(
        self,
        user_id: UUID,
        food_item_id: int,
        quantity_grams: float,
        day: date | None = None,
    ) -> MealEntry:
        """Log a quantity of a catalog food for a date (today by default)."""
        _check_quantity(quantity_grams)
        if self.food_repository.get_food(food_item_id) is None:
            raise NotFoundError("Food item not found")
        record = self.repository.create_entry(
            user_id=user_id,
            food_item_id=food_item_id,
            quantity_grams=float(quantity_grams),
            meal_date=day or self.clock.today(),
            consumed_at=self.clock.now(),
        )
        return to_meal_entry(record)

    def update_quantity(
        self, user_id: UUID, entry_id: UUID, quantity_grams: float
    ) -> MealEntry:
        """Replace the quantity of an owned entry."""
        _check_quantity(quantity_grams)
        record = self.repository.update_quantity(
            user_id, entry_id, float(quantity_grams)
        )
        if record is None:
            raise NotFoundError("Meal entry not found")
        return to_meal_entry(record)

    def get_meal(self, user_id: UUID, entry_id: UUID) -> MealEntry:
        """Return one owned entry."""
        record = self.repository.get_entry(user_id, entry_id)
        if record is None:
            raise NotFoundError("Meal entry not found")
        return to_meal_entry(record)

    def remove_meal(self, user_id: UUID, entry_id: UUID) -> None:
        """Delete an owned entry."""
        if not self.repository.delete_entry(user_id, entry_id):
            raise NotFoundError("Meal entry not found")

    def clear_day(self, user_id: UUID, day: date | None = None) -> int:
        """Delete every entry of a date and return how many were removed."""
        return self.repository.delete_day(user_id, day or self.clock.today())

    def day_view(self, user_id: UUID, day: date | None = None) -> MealDayView:
        """Return a date's entries with their aggregate totals."""
        target = day or self.clock.today()
        records = self.repository.list_day(user_id, target)
        entries = [
            to_meal_entry(record)
            for record in sorted(
                records, key=lambda item: item.consumed_at or _EARLIEST, reverse=True
            )
            if record.meal_date == target
        ]
        return MealDayView(
            day=target,
            entries=entries,
            totals=sum_totals(entries),
            entry_count=len(entries),
        )

    def history(
        self, user_id: UUID, limit: int = DEFAULT_HISTORY_LIMIT
    ) -> list[MealDaySummary]:
        """Return per-day summaries, newest date first."""
        bounded = bounded_history_limit(limit)
        dates = self.repository.recent_dates(user_id, bounded)
        if not dates:
            return []
        records = self.repository.list_between(user_id, min(dates), max(dates))
        entries = sorted(
            (to_meal_entry(record) for record in records),
            key=lambda entry: entry.meal_date,
            reverse=True,
        )
        summaries: list[MealDaySummary] = []
        for meal_date, group in groupby(entries, key=lambda entry: entry.meal_date):
            day_entries = list(group)
            summaries.append(
                MealDaySummary(
                    meal_date=meal_date,
                    entry_count=len(day_entries),
                    totals=sum_totals(day_entries),
                )
            )
            if len(summaries) == bounded:
                break
        return summaries


def portion_totals(per_100g: MacroProfile, quantity_grams: float) -> MacroProfile:
    """Derive a portion's nutrients from densities per 100 g."""
    factor = quantity_grams / 100.0
    return MacroProfile(
        calories=per_100g.calories * factor,
        protein_g=per_100g.protein_g * factor,
        fat_g=per_100g.fat_g * factor,
        carbs_g=per_100g.carbs_g * factor,
    ).rounded(2)


def to_meal_entry(record: MealEntryRecord) -> MealEntry:
    """Attach derived totals to a stored entry."""
    return MealEntry(
        id=record.id,
        food_item_id=record.food.id,
        food_name=record.food.name,
        category_name=record.food.category_name,
        quantity_grams=record.quantity_grams,
        meal_date=record.meal_date,
        consumed_at=record.consumed_at,
        per_100g=record.food.macros,
        totals=portion_totals(record.food.macros, record.quantity_grams),
    )


def sum_totals(entries: list[MealEntry]) -> MacroProfile:
    """Sum entry totals and round the aggregate to 2 decimals."""
    total = MacroProfile.zero()
    for entry in entries:
        total = total + entry.totals
    return total.rounded(2)


def _check_quantity(quantity_grams: float) -> None:
    if (
        isinstance(quantity_grams, bool)
        or not isinstance(quantity_grams, int | float)
        or not math.isfinite(quantity_grams)
        or quantity_grams <= 0
    ):
        raise ValidationError("Quantity must be greater than 0")
