"""Nutrition catalog domain models."""

from dataclasses import dataclass

from fitness_tracker.domain.rounding import round_half_up


@dataclass(frozen=True)
class MacroProfile:
    """Calories and macronutrients, either per 100 g or for a portion."""

    calories: float
    protein_g: float
    fat_g: float
    carbs_g: float

    @classmethod
    def zero(cls) -> "MacroProfile":
        """Return an all-zero profile."""
        return cls(0.0, 0.0, 0.0, 0.0)

    def __add__(self, other: "MacroProfile") -> "MacroProfile":
        return MacroProfile(
            calories=self.calories + other.calories,
            protein_g=self.protein_g + other.protein_g,
            fat_g=self.fat_g + other.fat_g,
            carbs_g=self.carbs_g + other.carbs_g,
        )

    def rounded(self, digits: int = 2) -> "MacroProfile":
        """Return a copy with each value rounded."""
        return MacroProfile(
            calories=round_half_up(self.calories, digits),
            protein_g=round_half_up(self.protein_g, digits),
            fat_g=round_half_up(self.fat_g, digits),
            carbs_g=round_half_up(self.carbs_g, digits),
        )


@dataclass(frozen=True)
class FoodCategory:
    """Food catalog category."""

    id: int
    name: str
    description: str | None = None
    product_count: int = 0


@dataclass(frozen=True)
class FoodItem:
    """Catalog food with nutrient density per 100 g."""

    id: int
    name: str
    macros: MacroProfile
    category_id: int | None = None
    category_name: str | None = None
    description: str | None = None
