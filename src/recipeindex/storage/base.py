"""Persistence interfaces used by the ingestion pipeline.

Every store fails open: errors are raised as StoreError and abort the
pipeline invocation that triggered them.
"""

from abc import ABC, abstractmethod
from typing import Any

from recipeindex.pipeline.models import IngredientRecord, NutritionSummary
from recipeindex.schemas import RecipeSubmission


class StoreError(Exception):
    """Raised when a persistent store rejects a read or write."""

    def __init__(self, message: str, store: str | None = None, cause: Any = None):
        super().__init__(message)
        self.store = store
        self.cause = cause


class RecipeStore(ABC):
    """Stores submitted recipes."""

    @abstractmethod
    async def insert(self, recipe: RecipeSubmission) -> int:
        """Insert a recipe and return its new id."""
        pass


class IndexStore(ABC):
    """Stores per-ingredient index entries."""

    @abstractmethod
    async def write(self, recipe_id: int, record: IngredientRecord) -> None:
        """Record that recipe_id contains the ingredient described by record."""
        pass


class NutritionSummaryStore(ABC):
    """Stores one nutrition summary per recipe."""

    @abstractmethod
    async def upsert(self, recipe_id: int, summary: NutritionSummary) -> None:
        """Insert or replace the summary for recipe_id."""
        pass
