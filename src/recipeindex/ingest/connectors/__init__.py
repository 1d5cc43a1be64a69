"""Connector interfaces for language-model backed collaborators."""

from recipeindex.ingest.connectors.base import (
    ConnectorError,
    IngredientExtractor,
    NutritionLookup,
    UnitConverter,
)
from recipeindex.ingest.connectors.extractor import LLMIngredientExtractor
from recipeindex.ingest.connectors.llm import LLMClient
from recipeindex.ingest.connectors.nutrition import LLMNutritionLookup
from recipeindex.ingest.connectors.units import LLMUnitConverter

__all__ = [
    "ConnectorError",
    "IngredientExtractor",
    "LLMClient",
    "LLMIngredientExtractor",
    "LLMNutritionLookup",
    "LLMUnitConverter",
    "NutritionLookup",
    "UnitConverter",
]
