"""API routers for the recipeindex application."""

from recipeindex.routers.ingestion import router as ingestion_router
from recipeindex.routers.recipes import router as recipes_router

__all__ = [
    "ingestion_router",
    "recipes_router",
]
