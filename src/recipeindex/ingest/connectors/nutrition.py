"""Language-model nutrition lookup."""

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from recipeindex.ingest.connectors.base import ConnectorError, NutritionLookup
from recipeindex.ingest.connectors.llm import LLMClient
from recipeindex.ingest.outcome import Fallback, Ok, Outcome
from recipeindex.logging_config import get_logger
from recipeindex.pipeline.models import NutritionPer100g

logger = get_logger(__name__)

NUTRITION_PROMPT = """
Provide the nutritional information for 100 grams of {ingredient}.
Return only a SINGLE JSON object with the following properties:
{{
  "calories": number,
  "protein": number (in grams),
  "fat": number (in grams),
  "carbohydrates": number (in grams)
}}
Do not include any explanations, additional text, or arrays. Return ONLY ONE JSON object.
"""


# Pure fat is about 900 kcal per 100g; a macro cannot weigh more than the 100g it is part of
MAX_CALORIES_PER_100G = 1000
MAX_GRAMS_PER_100G = 100


class NutritionPayload(BaseModel):
    """Shape of the model's nutrition answer.

    Strict mode rejects strings and booleans, so "12" or true is malformed.
    Infinity and NaN (which json.loads accepts) are rejected as well.
    """

    model_config = ConfigDict(strict=True, allow_inf_nan=False)

    calories: float = Field(ge=0, le=MAX_CALORIES_PER_100G)
    protein: float = Field(ge=0, le=MAX_GRAMS_PER_100G)
    fat: float = Field(ge=0, le=MAX_GRAMS_PER_100G)
    carbohydrates: float = Field(ge=0, le=MAX_GRAMS_PER_100G)


class LLMNutritionLookup(NutritionLookup):
    """Look up per-100g macro-nutrients by asking a language model."""

    def __init__(self, client: LLMClient):
        self.client = client

    async def lookup(self, normalized_name: str) -> Outcome[NutritionPer100g]:
        logger.debug(f"Getting nutrition info for: {normalized_name}")
        try:
            answer = await self.client.call_json(NUTRITION_PROMPT.format(ingredient=normalized_name))
            payload = NutritionPayload.model_validate(answer)
        except (ConnectorError, ValidationError) as e:
            logger.warning(f"Error getting nutrition info for '{normalized_name}': {e}")
            return Fallback(NutritionPer100g.zero(), reason=str(e))

        return Ok(
            NutritionPer100g(
                calories=payload.calories,
                protein=payload.protein,
                fat=payload.fat,
                carbohydrates=payload.carbohydrates,
            )
        )
