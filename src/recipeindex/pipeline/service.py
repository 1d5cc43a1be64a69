"""Recipe ingestion and indexing pipeline."""

import asyncio
from collections.abc import Sequence

from recipeindex.ingest.connectors.base import IngredientExtractor, NutritionLookup, UnitConverter
from recipeindex.logging_config import LoggingContext, get_logger
from recipeindex.normalize import normalize_ingredient, parse_quantity
from recipeindex.pipeline.aggregate import aggregate
from recipeindex.pipeline.fanout import gather_ordered
from recipeindex.pipeline.models import IngredientRecord, InvalidRecipeError, NutritionSummary
from recipeindex.schemas import RecipeSubmission
from recipeindex.storage.base import IndexStore, NutritionSummaryStore, RecipeStore

logger = get_logger(__name__)


def validate_recipe(ingredient_lines: Sequence[str], servings: int) -> None:
    """
    Reject recipes the pipeline cannot produce a meaningful summary for.

    Raises:
        InvalidRecipeError: If servings is below 1 or there are no ingredients.
    """
    if servings < 1:
        raise InvalidRecipeError(f"servings must be at least 1, got {servings}")
    if not ingredient_lines:
        raise InvalidRecipeError("recipe must have at least one ingredient")


class RecipeIndexingPipeline:
    """Enrich a recipe's ingredients with nutrition and index them."""

    def __init__(
        self,
        extractor: IngredientExtractor,
        nutrition: NutritionLookup,
        converter: UnitConverter,
        index_store: IndexStore,
        summary_store: NutritionSummaryStore,
    ):
        self.extractor = extractor
        self.nutrition = nutrition
        self.converter = converter
        self.index_store = index_store
        self.summary_store = summary_store

    async def build_record(self, raw_line: str) -> IngredientRecord:
        """
        Extract, normalize, look up and convert a single ingredient line.

        Collaborator failures degrade to their fallback values, so this only
        raises on programming errors.
        """
        extracted = (await self.extractor.extract(raw_line)).value
        normalized_name = normalize_ingredient(extracted.name)
        quantity = parse_quantity(extracted.quantity)

        nutrition, grams = await asyncio.gather(
            self.nutrition.lookup(normalized_name),
            self.converter.convert_to_grams(quantity, extracted.unit, extracted.name),
        )

        if nutrition.is_fallback or grams.is_fallback:
            logger.info(f"Ingredient '{raw_line}' indexed with degraded data")

        logger.debug(f"Processed ingredient '{raw_line}' as '{normalized_name}' ({grams.value}g)")
        return IngredientRecord(
            raw_line=raw_line,
            extracted=extracted,
            normalized_name=normalized_name,
            nutrition=nutrition.value,
            converted_grams=grams.value,
        )

    async def index(
        self,
        recipe_id: int,
        ingredient_lines: Sequence[str],
        servings: int,
    ) -> NutritionSummary:
        """
        Index every ingredient of a recipe and store its nutrition summary.

        Args:
            recipe_id: Identifier of the already-persisted recipe.
            ingredient_lines: Raw ingredient lines, e.g. "2 cups chopped onions".
            servings: Number of servings the recipe yields.

        Returns:
            The per-serving nutrition summary that was stored.

        Raises:
            InvalidRecipeError: If the recipe fails validation.
            StoreError: If an index write or the summary upsert fails. Index
                rows already written for other ingredients are kept.
        """
        validate_recipe(ingredient_lines, servings)

        with LoggingContext(recipe_id=recipe_id):
            logger.info(f"Indexing recipe with {len(ingredient_lines)} ingredients")

            records = await gather_ordered(self.build_record(line) for line in ingredient_lines)

            await gather_ordered(self.index_store.write(recipe_id, record) for record in records)

            summary = aggregate(records, servings)
            await self.summary_store.upsert(recipe_id, summary)

            logger.info(
                f"Finished indexing recipe: {summary.calories} kcal, "
                f"{summary.protein}g protein per serving"
            )
            return summary


class RecipeIngestionService:
    """Persist a submitted recipe and run it through the indexing pipeline."""

    def __init__(self, recipe_store: RecipeStore, pipeline: RecipeIndexingPipeline):
        self.recipe_store = recipe_store
        self.pipeline = pipeline

    async def ingest(self, submission: RecipeSubmission) -> int:
        """
        Store a recipe and index its ingredients.

        Validation happens before anything is written, so a rejected recipe
        leaves no trace in the stores.

        Returns:
            The new recipe id.
        """
        validate_recipe(submission.ingredients, submission.servings)

        recipe_id = await self.recipe_store.insert(submission)
        logger.info(f"Inserted recipe '{submission.name}' with id {recipe_id}")

        await self.pipeline.index(recipe_id, submission.ingredients, submission.servings)
        return recipe_id
