"""Domain types flowing through the indexing pipeline."""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class ExtractedIngredient:
    """Structured fields extracted from a raw ingredient line."""

    quantity: str | None
    unit: str | None
    name: str


@dataclass(frozen=True)
class NutritionPer100g:
    """Macro-nutrients for 100 grams of an ingredient."""

    calories: float = 0.0
    protein: float = 0.0
    fat: float = 0.0
    carbohydrates: float = 0.0

    @classmethod
    def zero(cls) -> "NutritionPer100g":
        return cls()

    def scaled(self, factor: float) -> "NutritionPer100g":
        """Multiply every field by factor."""
        return NutritionPer100g(
            calories=self.calories * factor,
            protein=self.protein * factor,
            fat=self.fat * factor,
            carbohydrates=self.carbohydrates * factor,
        )

    def __add__(self, other: "NutritionPer100g") -> "NutritionPer100g":
        return NutritionPer100g(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            fat=self.fat + other.fat,
            carbohydrates=self.carbohydrates + other.carbohydrates,
        )

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class IngredientRecord:
    """Everything the pipeline learned about one ingredient line."""

    raw_line: str
    extracted: ExtractedIngredient
    normalized_name: str
    nutrition: NutritionPer100g
    converted_grams: int

    def to_index_fields(self) -> dict[str, Any]:
        """Flatten into the columns written to the ingredient index."""
        return {
            "ingredient": self.extracted.name,
            "normalized_name": self.normalized_name,
            "quantity": self.extracted.quantity,
            "unit": self.extracted.unit,
            "converted_grams": self.converted_grams,
            **self.nutrition.to_dict(),
        }


@dataclass(frozen=True)
class NutritionSummary:
    """Per-serving nutrition totals for a recipe."""

    calories: int
    protein: float
    fat: float
    carbohydrates: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class InvalidRecipeError(ValueError):
    """Raised when a recipe cannot be indexed as submitted."""
