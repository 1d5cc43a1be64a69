"""Ingredient normalization and nutrition aggregation pipeline."""

from recipeindex.pipeline.aggregate import aggregate
from recipeindex.pipeline.models import (
    ExtractedIngredient,
    IngredientRecord,
    InvalidRecipeError,
    NutritionPer100g,
    NutritionSummary,
)

__all__ = [
    "ExtractedIngredient",
    "IngredientRecord",
    "InvalidRecipeError",
    "NutritionPer100g",
    "NutritionSummary",
    "aggregate",
]
