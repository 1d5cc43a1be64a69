"""Persistent stores for recipes, the ingredient index and nutrition summaries."""

from recipeindex.storage.base import (
    IndexStore,
    NutritionSummaryStore,
    RecipeStore,
    StoreError,
)
from recipeindex.storage.index import RecipeIngredientIndex
from recipeindex.storage.reverse_index import RedisReverseIndex, create_redis_client
from recipeindex.storage.sql import SqlIngredientIndex, SqlNutritionSummaryStore, SqlRecipeStore

__all__ = [
    "IndexStore",
    "NutritionSummaryStore",
    "RecipeIngredientIndex",
    "RecipeStore",
    "RedisReverseIndex",
    "SqlIngredientIndex",
    "SqlNutritionSummaryStore",
    "SqlRecipeStore",
    "StoreError",
    "create_redis_client",
]
