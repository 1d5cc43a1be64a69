"""Per-serving nutrition aggregation."""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from recipeindex.pipeline.models import (
    IngredientRecord,
    InvalidRecipeError,
    NutritionPer100g,
    NutritionSummary,
)


def _round_half_up(value: float, places: int) -> Decimal:
    exponent = Decimal(1).scaleb(-places)
    return Decimal(repr(value)).quantize(exponent, rounding=ROUND_HALF_UP)


def aggregate(records: Iterable[IngredientRecord], servings: int) -> NutritionSummary:
    """
    Combine ingredient nutrition into a per-serving summary.

    Each record's per-100g values are scaled by converted_grams / 100, summed
    and divided by servings. Calories are rounded to a whole number, the other
    fields to two decimals (halves round away from zero).

    Raises:
        InvalidRecipeError: If servings is less than 1.
    """
    if servings < 1:
        raise InvalidRecipeError(f"servings must be at least 1, got {servings}")

    total = NutritionPer100g.zero()
    for record in records:
        total = total + record.nutrition.scaled(record.converted_grams / 100)

    return NutritionSummary(
        calories=int(_round_half_up(total.calories / servings, 0)),
        protein=float(_round_half_up(total.protein / servings, 2)),
        fat=float(_round_half_up(total.fat / servings, 2)),
        carbohydrates=float(_round_half_up(total.carbohydrates / servings, 2)),
    )
