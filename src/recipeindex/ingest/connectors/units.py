"""Language-model unit conversion to grams."""

from recipeindex.ingest.connectors.base import ConnectorError, UnitConverter
from recipeindex.ingest.connectors.llm import LLMClient
from recipeindex.ingest.outcome import Fallback, Ok, Outcome
from recipeindex.logging_config import get_logger

logger = get_logger(__name__)

# Largest value the converted_grams integer column holds
MAX_GRAMS = 2**31 - 1

CONVERSION_PROMPT = (
    "How many grams is {query}? "
    "Respond with a single whole number of grams and nothing else."
)


def _format_quantity(quantity: float) -> str:
    if quantity == int(quantity):
        return str(int(quantity))
    return f"{quantity:g}"


def conversion_query(quantity: float, unit: str | None, ingredient_name: str) -> str:
    """Describe a quantity in words, e.g. "2 cups onion"."""
    parts = [_format_quantity(quantity), unit or "", ingredient_name]
    return " ".join(p.strip() for p in parts if p and p.strip())


class LLMUnitConverter(UnitConverter):
    """Convert quantities to grams by asking a language model."""

    def __init__(self, client: LLMClient):
        self.client = client

    async def convert_to_grams(
        self,
        quantity: float | None,
        unit: str | None,
        ingredient_name: str,
    ) -> Outcome[int]:
        if quantity is None:
            return Fallback(0, reason="no quantity")

        query = conversion_query(quantity, unit, ingredient_name)
        try:
            answer = await self.client.call(CONVERSION_PROMPT.format(query=query))
            grams = int(answer.strip())
        except (ConnectorError, ValueError) as e:
            logger.warning(f"Unit conversion failed for '{query}': {e}")
            return Fallback(0, reason=str(e))

        if not 0 <= grams <= MAX_GRAMS:
            logger.warning(f"Unit conversion for '{query}' returned out-of-range grams: {grams}")
            return Fallback(0, reason=f"grams out of range: {grams}")

        logger.debug(f"Converted '{query}' -> {grams}g")
        return Ok(grams)
