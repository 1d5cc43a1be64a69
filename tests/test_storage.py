"""Tests for the stores, with database and Redis clients mocked."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError

from recipeindex.models import Recipe, RecipeIngredient
from recipeindex.pipeline.models import (
    ExtractedIngredient,
    IngredientRecord,
    NutritionPer100g,
    NutritionSummary,
)
from recipeindex.storage import (
    RecipeIngredientIndex,
    RedisReverseIndex,
    SqlIngredientIndex,
    SqlNutritionSummaryStore,
    SqlRecipeStore,
    StoreError,
)

from fakes import InMemoryIndexStore


class FakeSession:
    """Async session stand-in recording what the store does."""

    def __init__(self, execute_error: Exception | None = None, flush_id: int = 1):
        self.added: list[object] = []
        self.executed: list[object] = []
        self.execute_error = execute_error
        self.flush_id = flush_id

    async def __aenter__(self) -> "FakeSession":
        return self

    async def __aexit__(self, *args) -> None:
        return None

    def begin(self) -> "FakeSession":
        return self

    def add(self, obj: object) -> None:
        self.added.append(obj)

    async def flush(self) -> None:
        for obj in self.added:
            obj.id = self.flush_id

    async def execute(self, stmt: object) -> MagicMock:
        if self.execute_error:
            raise self.execute_error
        self.executed.append(stmt)
        return MagicMock()


@pytest.fixture
def onion_record():
    return IngredientRecord(
        raw_line="2 cups chopped onions",
        extracted=ExtractedIngredient(quantity="2", unit="cups", name="onions"),
        normalized_name="onion",
        nutrition=NutritionPer100g(calories=40, protein=1.1, fat=0.1, carbohydrates=9.3),
        converted_grams=320,
    )


class TestRedisReverseIndex:
    """Tests for the Redis reverse index."""

    @pytest.mark.asyncio
    async def test_add_uses_set(self):
        """Test that recipe ids are added to a per-ingredient set."""
        client = AsyncMock()
        index = RedisReverseIndex(client, prefix="ingredient:")

        await index.add("onion", 42)

        client.sadd.assert_awaited_once_with("ingredient:onion", "42")

    @pytest.mark.asyncio
    async def test_recipe_ids_sorted_ints(self):
        """Test that members come back as sorted integers."""
        client = AsyncMock()
        client.smembers.return_value = {"10", "2", "7"}
        index = RedisReverseIndex(client)

        assert await index.recipe_ids("onion") == [2, 7, 10]
        client.smembers.assert_awaited_once_with("ingredient:onion")

    @pytest.mark.asyncio
    async def test_recipe_ids_unknown_ingredient(self):
        """Test that an unknown ingredient has no recipes."""
        client = AsyncMock()
        client.smembers.return_value = set()

        assert await RedisReverseIndex(client).recipe_ids("unobtainium") == []

    @pytest.mark.asyncio
    async def test_redis_error_raises_store_error(self):
        """Test that Redis failures fail open as StoreError."""
        client = AsyncMock()
        client.sadd.side_effect = RedisConnectionError("connection refused")

        with pytest.raises(StoreError) as exc_info:
            await RedisReverseIndex(client).add("onion", 1)

        assert exc_info.value.store == "redis"

    @pytest.mark.asyncio
    async def test_ping(self):
        """Test the health check in both states."""
        client = AsyncMock()
        client.ping.return_value = True
        assert await RedisReverseIndex(client).ping() is True

        client.ping.side_effect = RedisConnectionError("down")
        assert await RedisReverseIndex(client).ping() is False


class TestRecipeIngredientIndex:
    """Tests for the combined SQL + Redis index."""

    @pytest.mark.asyncio
    async def test_write_both(self, onion_record):
        """Test that a write lands in the rows and the reverse index."""
        rows = InMemoryIndexStore()
        reverse = AsyncMock(spec=RedisReverseIndex)
        index = RecipeIngredientIndex(rows, reverse)

        await index.write(3, onion_record)

        assert rows.entries == [(3, onion_record)]
        reverse.add.assert_awaited_once_with("onion", 3)

    @pytest.mark.asyncio
    async def test_row_failure_skips_reverse_index(self, onion_record):
        """Test that a failed row write does not touch Redis."""
        rows = InMemoryIndexStore(fail_for={"onions"})
        reverse = AsyncMock(spec=RedisReverseIndex)

        with pytest.raises(StoreError):
            await RecipeIngredientIndex(rows, reverse).write(3, onion_record)

        reverse.add.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_name_skips_reverse_index(self):
        """Test that a name normalizing to nothing is not added under a bare key."""
        record = IngredientRecord(
            raw_line="!!",
            extracted=ExtractedIngredient(quantity="1", unit=None, name="!!"),
            normalized_name="",
            nutrition=NutritionPer100g(),
            converted_grams=0,
        )
        rows = InMemoryIndexStore()
        reverse = AsyncMock(spec=RedisReverseIndex)

        await RecipeIngredientIndex(rows, reverse).write(4, record)

        assert rows.entries == [(4, record)]
        reverse.add.assert_not_awaited()


class TestSqlStores:
    """Tests for the SQL stores against a fake session."""

    @pytest.mark.asyncio
    async def test_insert_recipe_returns_id(self, chicken_submission):
        """Test that the generated id is returned and user_id is empty."""
        session = FakeSession(flush_id=17)
        store = SqlRecipeStore(MagicMock(return_value=session))

        recipe_id = await store.insert(chicken_submission)

        assert recipe_id == 17
        [row] = session.added
        assert isinstance(row, Recipe)
        assert row.name == "Grilled Chicken"
        assert row.servings == 2
        assert row.user_id is None

    @pytest.mark.asyncio
    async def test_index_row_fields(self, onion_record):
        """Test the columns written for an ingredient."""
        session = FakeSession()
        await SqlIngredientIndex(MagicMock(return_value=session)).write(5, onion_record)

        [row] = session.added
        assert isinstance(row, RecipeIngredient)
        assert row.recipe_id == 5
        assert row.ingredient == "onions"
        assert row.normalized_name == "onion"
        assert row.quantity == "2"
        assert row.unit == "cups"
        assert row.converted_grams == 320
        assert row.calories == 40
        assert row.carbohydrates == 9.3

    @pytest.mark.asyncio
    async def test_summary_upsert_on_recipe_id(self):
        """Test that the summary is written with ON CONFLICT on recipe_id."""
        session = FakeSession()
        store = SqlNutritionSummaryStore(MagicMock(return_value=session))

        await store.upsert(8, NutritionSummary(calories=165, protein=31, fat=3.6, carbohydrates=0))

        [stmt] = session.executed
        sql = str(stmt.compile(dialect=postgresql.dialect()))
        assert "INSERT INTO nutrition_info" in sql
        assert "ON CONFLICT (recipe_id) DO UPDATE" in sql
        assert "calories = excluded.calories" in sql

    @pytest.mark.asyncio
    async def test_summary_upsert_error(self):
        """Test that database errors fail open as StoreError."""
        error = OperationalError("INSERT", {}, Exception("connection lost"))
        store = SqlNutritionSummaryStore(MagicMock(return_value=FakeSession(execute_error=error)))

        with pytest.raises(StoreError) as exc_info:
            await store.upsert(8, NutritionSummary(calories=0, protein=0, fat=0, carbohydrates=0))

        assert exc_info.value.store == "nutrition_info"
        assert exc_info.value.cause is error
