"""PostgreSQL-backed stores."""

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from recipeindex.logging_config import get_logger
from recipeindex.models import NutritionInfo, Recipe, RecipeIngredient
from recipeindex.pipeline.models import IngredientRecord, NutritionSummary
from recipeindex.schemas import RecipeSubmission
from recipeindex.storage.base import (
    IndexStore,
    NutritionSummaryStore,
    RecipeStore,
    StoreError,
)

logger = get_logger(__name__)


class SqlRecipeStore(RecipeStore):
    """Recipes table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def insert(self, recipe: RecipeSubmission) -> int:
        row = Recipe(
            name=recipe.name,
            instructions=recipe.instructions,
            description=recipe.description,
            cook_time=recipe.cook_time,
            prep_time=recipe.prep_time,
            servings=recipe.servings,
            user_id=None,
        )
        try:
            async with self.session_factory() as session, session.begin():
                session.add(row)
                await session.flush()
                recipe_id = row.id
        except SQLAlchemyError as e:
            logger.error(f"Error inserting recipe '{recipe.name}': {e}")
            raise StoreError(f"Error inserting recipe: {e}", store="recipes", cause=e) from e

        return recipe_id

    async def get(self, recipe_id: int) -> Recipe | None:
        """Get a recipe with its indexed ingredients and nutrition summary."""
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(Recipe)
                    .where(Recipe.id == recipe_id)
                    .options(selectinload(Recipe.ingredients), selectinload(Recipe.nutrition))
                )
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise StoreError(f"Error reading recipe {recipe_id}: {e}", store="recipes", cause=e) from e


class SqlIngredientIndex(IndexStore):
    """Ingredient index rows.

    Each write commits in its own transaction, so rows written before a
    failing sibling write stay committed.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def write(self, recipe_id: int, record: IngredientRecord) -> None:
        row = RecipeIngredient(recipe_id=recipe_id, **record.to_index_fields())
        try:
            async with self.session_factory() as session, session.begin():
                session.add(row)
        except SQLAlchemyError as e:
            logger.error(f"Error in index_ingredient for '{record.extracted.name}': {e}")
            raise StoreError(
                f"Error in index_ingredient for {record.extracted.name}: {e}",
                store="recipe_ingredients",
                cause=e,
            ) from e


class SqlNutritionSummaryStore(NutritionSummaryStore):
    """Nutrition summaries, unique on recipe id."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def upsert(self, recipe_id: int, summary: NutritionSummary) -> None:
        stmt = insert(NutritionInfo).values(recipe_id=recipe_id, **summary.to_dict())
        stmt = stmt.on_conflict_do_update(
            index_elements=["recipe_id"],
            set_={
                "calories": stmt.excluded.calories,
                "protein": stmt.excluded.protein,
                "fat": stmt.excluded.fat,
                "carbohydrates": stmt.excluded.carbohydrates,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        try:
            async with self.session_factory() as session, session.begin():
                await session.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Error updating nutrition info for recipe {recipe_id}: {e}")
            raise StoreError(
                f"Error updating nutrition info for recipe {recipe_id}: {e}",
                store="nutrition_info",
                cause=e,
            ) from e

        logger.info(f"Successfully updated nutrition info for recipe {recipe_id}")

    async def get(self, recipe_id: int) -> NutritionInfo | None:
        """Get the stored summary of a recipe."""
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(NutritionInfo).where(NutritionInfo.recipe_id == recipe_id)
                )
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise StoreError(
                f"Error reading nutrition info for recipe {recipe_id}: {e}",
                store="nutrition_info",
                cause=e,
            ) from e
