"""API routes for reading recipes, their nutrition and the ingredient index."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, status

from recipeindex.logging_config import get_logger
from recipeindex.normalize import normalize_ingredient
from recipeindex.routers.dependencies import (
    get_recipe_store,
    get_reverse_index,
    get_summary_store,
)
from recipeindex.schemas import (
    IngredientRecipesResponse,
    NutritionSummaryResponse,
    RecipeResponse,
)
from recipeindex.storage import RedisReverseIndex, SqlNutritionSummaryStore, SqlRecipeStore

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["recipes"])


@router.get("/recipes/{recipe_id}", response_model=RecipeResponse)
async def get_recipe(
    recipe_id: Annotated[int, Path(ge=1)],
    store: SqlRecipeStore = Depends(get_recipe_store),
) -> RecipeResponse:
    """Get a recipe with its indexed ingredients and nutrition summary."""
    recipe = await store.get(recipe_id)
    if recipe is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Recipe {recipe_id} not found",
        )
    return RecipeResponse.model_validate(recipe)


@router.get("/recipes/{recipe_id}/nutrition", response_model=NutritionSummaryResponse)
async def get_recipe_nutrition(
    recipe_id: Annotated[int, Path(ge=1)],
    store: SqlNutritionSummaryStore = Depends(get_summary_store),
) -> NutritionSummaryResponse:
    """Get the per-serving nutrition summary of a recipe."""
    summary = await store.get(recipe_id)
    if summary is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No nutrition info for recipe {recipe_id}",
        )
    return NutritionSummaryResponse.model_validate(summary)


@router.get("/ingredients/{name}/recipes", response_model=IngredientRecipesResponse)
async def get_recipes_by_ingredient(
    name: str,
    index: RedisReverseIndex = Depends(get_reverse_index),
) -> IngredientRecipesResponse:
    """
    Find recipes containing an ingredient.

    The name is normalized the same way ingredients are when indexed, so
    "Tomatoes" finds recipes indexed under "tomato".
    """
    normalized = normalize_ingredient(name)
    if not normalized:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Ingredient name is empty after normalization",
        )

    recipe_ids = await index.recipe_ids(normalized)
    logger.info(f"Found {len(recipe_ids)} recipes with '{normalized}'")
    return IngredientRecipesResponse(
        ingredient=normalized,
        recipe_ids=recipe_ids,
        total=len(recipe_ids),
    )
