"""Supabase repositories for the read-only food and workout catalogs."""

from dataclasses import dataclass

from supabase import Client

from fitness_tracker.adapters.supabase_errors import storage_errors
from fitness_tracker.domain.nutrition import FoodCategory, FoodItem, MacroProfile
from fitness_tracker.domain.workouts import WorkoutTemplate, WorkoutType
from fitness_tracker.services.catalog import (
    FoodCatalogRepository,
    WorkoutCatalogRepository,
)

FOOD_COLUMNS = (
    "id, name, category_id, description, calories_per_100g, protein_per_100g, "
    "fat_per_100g, carbs_per_100g, food_categories(name)"
)
TEMPLATE_COLUMNS = (
    "id, name, type_id, duration_minutes, intensity, fitness_level, description, "
    "equipment, workout_types(name)"
)


@dataclass
class SupabaseFoodCatalogRepository(FoodCatalogRepository):
    """Supabase-backed food catalog."""

    client: Client

    def get_food(self, food_id: int) -> FoodItem | None:
        """Return a food item by id, if present."""
        with storage_errors("food_items.get"):
            response = (
                self.client.table("food_items")
                .select(FOOD_COLUMNS)
                .eq("id", food_id)
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return parse_food(response.data[0])

    def list_foods(self) -> list[FoodItem]:
        """Return all food items ordered by name."""
        with storage_errors("food_items.list"):
            response = (
                self.client.table("food_items")
                .select(FOOD_COLUMNS)
                .order("name", desc=False)
                .execute()
            )
        return [parse_food(row) for row in response.data or []]

    def search_foods(
        self, term: str, category_id: int | None, limit: int
    ) -> list[FoodItem]:
        """Return foods whose name contains the term."""
        with storage_errors("food_items.search"):
            query = (
                self.client.table("food_items")
                .select(FOOD_COLUMNS)
                .ilike("name", f"%{term}%")
            )
            if category_id is not None:
                query = query.eq("category_id", category_id)
            response = query.order("name", desc=False).limit(limit).execute()
        return [parse_food(row) for row in response.data or []]

    def list_categories(self) -> list[FoodCategory]:
        """Return categories with their product counts."""
        with storage_errors("food_categories.list"):
            response = (
                self.client.table("food_categories")
                .select("id, name, description, food_items(count)")
                .order("name", desc=False)
                .execute()
            )
        return [
            FoodCategory(
                id=int(row["id"]),
                name=str(row.get("name", "")),
                description=row.get("description"),
                product_count=_embedded_count(row.get("food_items")),
            )
            for row in response.data or []
        ]


@dataclass
class SupabaseWorkoutCatalogRepository(WorkoutCatalogRepository):
    """Supabase-backed workout catalog."""

    client: Client

    def list_types(self) -> list[WorkoutType]:
        """Return workout types with their template counts."""
        with storage_errors("workout_types.list"):
            response = (
                self.client.table("workout_types")
                .select("id, name, description, workout_templates(count)")
                .order("name", desc=False)
                .execute()
            )
        return [
            WorkoutType(
                id=int(row["id"]),
                name=str(row.get("name", "")),
                description=row.get("description"),
                template_count=_embedded_count(row.get("workout_templates")),
            )
            for row in response.data or []
        ]

    def list_templates(
        self, fitness_level: str | None, type_id: int | None, limit: int | None
    ) -> list[WorkoutTemplate]:
        """Return templates ordered by fitness level then name."""
        with storage_errors("workout_templates.list"):
            query = self.client.table("workout_templates").select(TEMPLATE_COLUMNS)
            if fitness_level is not None:
                query = query.eq("fitness_level", fitness_level)
            if type_id is not None:
                query = query.eq("type_id", type_id)
            query = query.order("fitness_level", desc=False).order("name", desc=False)
            if limit is not None:
                query = query.limit(limit)
            response = query.execute()
        return [_parse_template(row) for row in response.data or []]


def parse_food(row: dict[str, object]) -> FoodItem:
    """Parse a food_items row, with its embedded category, into a domain model."""
    category = row.get("food_categories")
    return FoodItem(
        id=int(row["id"]),
        name=str(row.get("name", "")),
        category_id=int(row["category_id"]) if row.get("category_id") else None,
        category_name=category.get("name") if isinstance(category, dict) else None,
        description=row.get("description"),
        macros=MacroProfile(
            calories=float(row.get("calories_per_100g") or 0.0),
            protein_g=float(row.get("protein_per_100g") or 0.0),
            fat_g=float(row.get("fat_per_100g") or 0.0),
            carbs_g=float(row.get("carbs_per_100g") or 0.0),
        ),
    )


def _parse_template(row: dict[str, object]) -> WorkoutTemplate:
    workout_type = row.get("workout_types")
    return WorkoutTemplate(
        id=int(row["id"]),
        name=str(row.get("name", "")),
        duration_minutes=int(row.get("duration_minutes") or 0),
        intensity=str(row.get("intensity", "")),
        fitness_level=str(row.get("fitness_level", "")),
        type_id=int(row["type_id"]) if row.get("type_id") else None,
        type_name=workout_type.get("name") if isinstance(workout_type, dict) else None,
        description=row.get("description"),
        equipment=row.get("equipment"),
    )


def _embedded_count(value: object) -> int:
    if isinstance(value, list) and value and isinstance(value[0], dict):
        return int(value[0].get("count", 0))
    return 0
