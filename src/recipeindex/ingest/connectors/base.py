"""Base interfaces for the language-model backed collaborators."""

from abc import ABC, abstractmethod
from typing import Any

from recipeindex.ingest.outcome import Outcome
from recipeindex.pipeline.models import ExtractedIngredient, NutritionPer100g


class ConnectorError(Exception):
    """Base exception for connector errors."""

    def __init__(self, message: str, status_code: int | None = None, response: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class IngredientExtractor(ABC):
    """Turns a free-text ingredient line into structured fields."""

    @abstractmethod
    async def extract(self, raw_line: str) -> Outcome[ExtractedIngredient]:
        """
        Extract quantity, unit and name from an ingredient line.

        Never raises: on failure returns a Fallback with quantity "1", no unit
        and the normalized line as the name.
        """
        pass


class NutritionLookup(ABC):
    """Looks up macro-nutrients per 100 grams of an ingredient."""

    @abstractmethod
    async def lookup(self, normalized_name: str) -> Outcome[NutritionPer100g]:
        """
        Get nutrition for 100 grams of the named ingredient.

        Never raises: on failure returns a Fallback of all zeros.
        """
        pass


class UnitConverter(ABC):
    """Converts a quantity of an ingredient into grams."""

    @abstractmethod
    async def convert_to_grams(
        self,
        quantity: float | None,
        unit: str | None,
        ingredient_name: str,
    ) -> Outcome[int]:
        """
        Convert a quantity to grams.

        Never raises: a missing quantity or any failure yields 0 grams.
        """
        pass
