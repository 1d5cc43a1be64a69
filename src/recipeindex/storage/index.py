"""Ingredient index combining the SQL rows and the Redis reverse index."""

from recipeindex.logging_config import get_logger
from recipeindex.pipeline.models import IngredientRecord
from recipeindex.storage.base import IndexStore
from recipeindex.storage.reverse_index import RedisReverseIndex

logger = get_logger(__name__)


class RecipeIngredientIndex(IndexStore):
    """Write the detailed index row, then add the recipe to the reverse index.

    Names that normalize to nothing (e.g. "!!") keep their row but get no
    reverse-index entry, since no lookup can ever reach them.
    """

    def __init__(self, rows: IndexStore, reverse_index: RedisReverseIndex):
        self.rows = rows
        self.reverse_index = reverse_index

    async def write(self, recipe_id: int, record: IngredientRecord) -> None:
        await self.rows.write(recipe_id, record)

        if not record.normalized_name:
            logger.warning(f"Ingredient '{record.raw_line}' has no usable name, skipping reverse index")
            return

        await self.reverse_index.add(record.normalized_name, recipe_id)
