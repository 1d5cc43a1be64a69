"""Normalize free-form ingredient text into lookup keys and numbers."""

from recipeindex.normalize.names import normalize_ingredient
from recipeindex.normalize.quantity import parse_quantity

__all__ = [
    "normalize_ingredient",
    "parse_quantity",
]
