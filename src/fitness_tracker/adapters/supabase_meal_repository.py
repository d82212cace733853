"""Supabase-backed meal ledger repository."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any
from uuid import UUID

from supabase import Client

from fitness_tracker.adapters.supabase_catalog_repository import FOOD_COLUMNS, parse_food
from fitness_tracker.adapters.supabase_errors import storage_errors
from fitness_tracker.adapters.supabase_paging import fetch_pages
from fitness_tracker.domain.errors import InternalError
from fitness_tracker.domain.meals import MealEntryRecord
from fitness_tracker.domain.stats import MealLifetimeTotals
from fitness_tracker.services.meals import MealRepository

MEAL_COLUMNS = (
    f"id, user_id, food_item_id, quantity_grams, meal_date, consumed_at, "
    f"food_items({FOOD_COLUMNS})"
)


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for daily meal entries."""

    client: Client

    def create_entry(
        self,
        user_id: UUID,
        food_item_id: int,
        quantity_grams: float,
        meal_date: date,
        consumed_at: datetime,
    ) -> MealEntryRecord:
        """Insert an entry and return it joined with its food item."""
        with storage_errors("daily_meals.create"):
            response = (
                self.client.table("daily_meals")
                .insert(
                    {
                        "user_id": str(user_id),
                        "food_item_id": food_item_id,
                        "quantity_grams": quantity_grams,
                        "meal_date": meal_date.isoformat(),
                        "consumed_at": consumed_at.isoformat(),
                    }
                )
                .execute()
            )
        if not response.data:
            raise InternalError("Failed to create meal entry")
        record = self.get_entry(user_id, UUID(str(response.data[0]["id"])))
        if record is None:
            raise InternalError("Created meal entry could not be read back")
        return record

    def get_entry(self, user_id: UUID, entry_id: UUID) -> MealEntryRecord | None:
        """Return an owned entry, if present."""
        with storage_errors("daily_meals.get"):
            response = (
                self.client.table("daily_meals")
                .select(MEAL_COLUMNS)
                .eq("id", str(entry_id))
                .eq("user_id", str(user_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def update_quantity(
        self, user_id: UUID, entry_id: UUID, quantity_grams: float
    ) -> MealEntryRecord | None:
        """Set the quantity of an owned entry."""
        with storage_errors("daily_meals.update_quantity"):
            response = (
                self.client.table("daily_meals")
                .update({"quantity_grams": quantity_grams})
                .eq("id", str(entry_id))
                .eq("user_id", str(user_id))
                .execute()
            )
        if not response.data:
            return None
        return self.get_entry(user_id, entry_id)

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        """Delete an owned entry."""
        with storage_errors("daily_meals.delete"):
            response = (
                self.client.table("daily_meals")
                .delete()
                .eq("id", str(entry_id))
                .eq("user_id", str(user_id))
                .execute()
            )
        return bool(response.data)

    def delete_day(self, user_id: UUID, meal_date: date) -> int:
        """Delete all of a user's entries for a date."""
        with storage_errors("daily_meals.delete_day"):
            response = (
                self.client.table("daily_meals")
                .delete()
                .eq("user_id", str(user_id))
                .eq("meal_date", meal_date.isoformat())
                .execute()
            )
        return len(response.data or [])

    def list_day(self, user_id: UUID, meal_date: date) -> list[MealEntryRecord]:
        """Return a user's entries for one date, newest first."""
        with storage_errors("daily_meals.list_day"):
            response = (
                self.client.table("daily_meals")
                .select(MEAL_COLUMNS)
                .eq("user_id", str(user_id))
                .eq("meal_date", meal_date.isoformat())
                .order("consumed_at", desc=True)
                .execute()
            )
        return [_parse_meal(row) for row in response.data or []]

    def list_between(
        self, user_id: UUID, start: date, end: date
    ) -> list[MealEntryRecord]:
        """Return entries with a meal date in the inclusive range."""

        def query() -> Any:
            return (
                self.client.table("daily_meals")
                .select(MEAL_COLUMNS)
                .eq("user_id", str(user_id))
                .gte("meal_date", start.isoformat())
                .lte("meal_date", end.isoformat())
                .order("meal_date", desc=True)
                .order("id")
            )

        rows = fetch_pages(query, "daily_meals.list_between")
        return [_parse_meal(row) for row in rows]

    def recent_dates(self, user_id: UUID, limit: int) -> list[date]:
        """Return the newest distinct meal dates from the `meal_days` view."""
        with storage_errors("meal_days.recent"):
            response = (
                self.client.table("meal_days")
                .select("meal_date")
                .eq("user_id", str(user_id))
                .order("meal_date", desc=True)
                .limit(limit)
                .execute()
            )
        return [
            date.fromisoformat(str(row["meal_date"])) for row in response.data or []
        ]

    def lifetime_totals(self, user_id: UUID) -> MealLifetimeTotals:
        """Read the `meal_lifetime_totals` rollup; no row means no meals."""
        with storage_errors("meal_lifetime_totals.get"):
            response = (
                self.client.table("meal_lifetime_totals")
                .select("entry_count, day_count, total_calories")
                .eq("user_id", str(user_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return MealLifetimeTotals()
        row = response.data[0]
        return MealLifetimeTotals(
            entry_count=int(row.get("entry_count") or 0),
            day_count=int(row.get("day_count") or 0),
            total_calories=float(row.get("total_calories") or 0.0),
        )


def _parse_meal(row: dict[str, object]) -> MealEntryRecord:
    food_row = row.get("food_items")
    if not isinstance(food_row, dict):
        raise InternalError("Meal entry is missing its food item")
    consumed_raw = row.get("consumed_at")
    return MealEntryRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        food=parse_food(food_row),
        quantity_grams=float(row.get("quantity_grams") or 0.0),
        meal_date=date.fromisoformat(str(row["meal_date"])),
        consumed_at=(
            datetime.fromisoformat(consumed_raw)
            if isinstance(consumed_raw, str) and consumed_raw
            else None
        ),
    )
