"""Redis reverse index from ingredient name to recipe ids."""

from redis.asyncio import Redis
from redis.exceptions import RedisError

from recipeindex.config import Settings
from recipeindex.logging_config import get_logger
from recipeindex.storage.base import StoreError

logger = get_logger(__name__)


def create_redis_client(settings: Settings) -> Redis:
    """Create a Redis client for the configured URL."""
    return Redis.from_url(settings.redis_url, decode_responses=True)


class RedisReverseIndex:
    """One Redis set of recipe ids per normalized ingredient name.

    Sets make the index append-only and free of duplicates: re-indexing a
    recipe never adds its id twice.
    """

    def __init__(self, client: Redis, prefix: str = "ingredient:"):
        self.client = client
        self.prefix = prefix

    def key(self, ingredient: str) -> str:
        """Redis key holding the recipe ids for ingredient."""
        return f"{self.prefix}{ingredient}"

    async def add(self, ingredient: str, recipe_id: int) -> None:
        """Record that recipe_id contains ingredient."""
        try:
            await self.client.sadd(self.key(ingredient), str(recipe_id))
        except RedisError as e:
            logger.error(f"Error updating reverse index for '{ingredient}': {e}")
            raise StoreError(
                f"Error updating reverse index for {ingredient}: {e}",
                store="redis",
                cause=e,
            ) from e

        logger.debug(f"Updated reverse index for ingredient: {ingredient}")

    async def recipe_ids(self, ingredient: str) -> list[int]:
        """Get the ids of all recipes containing ingredient, ascending."""
        try:
            members = await self.client.smembers(self.key(ingredient))
        except RedisError as e:
            raise StoreError(
                f"Error reading reverse index for {ingredient}: {e}",
                store="redis",
                cause=e,
            ) from e

        return sorted(int(m) for m in members)

    async def ping(self) -> bool:
        """Check if Redis is reachable."""
        try:
            return bool(await self.client.ping())
        except RedisError as e:
            logger.warning(f"Redis health check failed: {e}")
            return False
