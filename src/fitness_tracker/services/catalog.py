"""Read-only food and workout catalogs."""

import random
from dataclasses import dataclass, field
from typing import Protocol

from fitness_tracker.domain.errors import NotFoundError, ValidationError
from fitness_tracker.domain.models import FitnessLevel
from fitness_tracker.domain.nutrition import FoodCategory, FoodItem
from fitness_tracker.domain.workouts import WorkoutTemplate, WorkoutType

MIN_SEARCH_LENGTH = 2
SEARCH_PAGE_SIZE = 20
MAX_TEMPLATE_LIMIT = 100
MAX_RANDOM_COUNT = 20
FITNESS_LEVELS = {level.value for level in FitnessLevel}


class FoodCatalogRepository(Protocol):
    """Persistence interface for the food catalog."""

    def get_food(self, food_id: int) -> FoodItem | None:
        """Return a food item by id, if present."""

    def list_foods(self) -> list[FoodItem]:
        """Return all food items ordered by name."""

    def search_foods(
        self, term: str, category_id: int | None, limit: int
    ) -> list[FoodItem]:
        """Return foods whose name contains the term, case-insensitively."""

    def list_categories(self) -> list[FoodCategory]:
        """Return categories with product counts ordered by name."""


class WorkoutCatalogRepository(Protocol):
    """Persistence interface for workout types and templates."""

    def list_types(self) -> list[WorkoutType]:
        """Return workout types with template counts ordered by name."""

    def list_templates(
        self, fitness_level: str | None, type_id: int | None, limit: int | None
    ) -> list[WorkoutTemplate]:
        """Return templates ordered by fitness level then name."""


@dataclass
class FoodCatalogService:
    """Passthrough access to the food catalog."""

    repository: FoodCatalogRepository

    def get(self, food_id: int) -> FoodItem:
        """Return a food item or raise NotFoundError."""
        food = self.repository.get_food(food_id)
        if food is None:
            raise NotFoundError("Food item not found")
        return food

    def list_foods(self) -> list[FoodItem]:
        """Return the full catalog."""
        return self.repository.list_foods()

    def list_categories(self) -> list[FoodCategory]:
        """Return all food categories."""
        return self.repository.list_categories()

    def search(self, term: str | None, category_id: int | None = None) -> list[FoodItem]:
        """Search foods by name, optionally within a category."""
        cleaned = (term or "").strip()
        if len(cleaned) < MIN_SEARCH_LENGTH:
            raise ValidationError(
                f"Search term must be at least {MIN_SEARCH_LENGTH} characters"
            )
        results = self.repository.search_foods(cleaned, category_id, SEARCH_PAGE_SIZE)
        return sorted(results, key=lambda food: food.name.lower())[:SEARCH_PAGE_SIZE]


@dataclass
class WorkoutCatalogService:
    """Passthrough access to workout templates."""

    repository: WorkoutCatalogRepository
    rng: random.Random = field(default_factory=random.Random)

    def list_types(self) -> list[WorkoutType]:
        """Return all workout types."""
        return self.repository.list_types()

    def list_templates(
        self,
        fitness_level: str | None = None,
        type_id: int | None = None,
        limit: int = 50,
    ) -> list[WorkoutTemplate]:
        """Return templates filtered by level and type."""
        _check_fitness_level(fitness_level)
        bounded = _bounded(limit, MAX_TEMPLATE_LIMIT, "limit")
        return self.repository.list_templates(fitness_level, type_id, bounded)

    def random_templates(
        self, fitness_level: str | None = None, count: int = 5
    ) -> list[WorkoutTemplate]:
        """Return a random sample of templates."""
        _check_fitness_level(fitness_level)
        bounded = _bounded(count, MAX_RANDOM_COUNT, "count")
        templates = self.repository.list_templates(fitness_level, None, None)
        return self.rng.sample(templates, min(bounded, len(templates)))


def _check_fitness_level(fitness_level: str | None) -> None:
    if fitness_level is not None and fitness_level not in FITNESS_LEVELS:
        raise ValidationError(
            f"fitness_level must be one of {', '.join(sorted(FITNESS_LEVELS))}"
        )


def _bounded(value: int, ceiling: int, name: str) -> int:
    if value < 1:
        raise ValidationError(f"{name} must be at least 1")
    return min(value, ceiling)
