"""FastAPI dependencies resolving the collaborators built at startup."""

from fastapi import Request

from recipeindex.pipeline.service import RecipeIngestionService
from recipeindex.storage import RedisReverseIndex, SqlNutritionSummaryStore, SqlRecipeStore


def get_ingestion_service(request: Request) -> RecipeIngestionService:
    """Get the ingestion service."""
    return request.app.state.ingestion_service


def get_recipe_store(request: Request) -> SqlRecipeStore:
    """Get the recipe store."""
    return request.app.state.recipe_store


def get_summary_store(request: Request) -> SqlNutritionSummaryStore:
    """Get the nutrition summary store."""
    return request.app.state.summary_store


def get_reverse_index(request: Request) -> RedisReverseIndex:
    """Get the ingredient reverse index."""
    return request.app.state.reverse_index
