"""Language-model ingredient extraction."""

from typing import Any

from pydantic import BaseModel, ValidationError, field_validator

from recipeindex.ingest.connectors.base import ConnectorError, IngredientExtractor
from recipeindex.ingest.connectors.llm import LLMClient
from recipeindex.ingest.outcome import Fallback, Ok, Outcome
from recipeindex.logging_config import get_logger
from recipeindex.normalize import normalize_ingredient
from recipeindex.pipeline.models import ExtractedIngredient

logger = get_logger(__name__)

EXTRACTION_PROMPT = """
Extract the quantity, unit (if present), and main ingredient name from the following ingredient description:
"{line}"

Respond with a JSON object containing the following properties:
{{
  "quantity": number or fraction (as string),
  "unit": string (or null if not present),
  "name": string (main ingredient name)
}}
Do not include any explanations or additional text.
"""


class ExtractionPayload(BaseModel):
    """Shape of the model's extraction answer."""

    quantity: str | None = None
    unit: str | None = None
    name: str

    @field_validator("quantity", mode="before")
    @classmethod
    def quantity_as_text(cls, v: Any) -> Any:
        # Models often answer 2 instead of "2"
        if isinstance(v, bool):
            raise ValueError("quantity must be a number or string")
        if isinstance(v, (int, float)):
            return str(v)
        return v

    @field_validator("unit", mode="before")
    @classmethod
    def blank_unit_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be empty")
        return v


def default_extraction(raw_line: str) -> ExtractedIngredient:
    """Fallback used whenever extraction fails."""
    return ExtractedIngredient(quantity="1", unit=None, name=normalize_ingredient(raw_line))


class LLMIngredientExtractor(IngredientExtractor):
    """Extract structured ingredient fields by asking a language model."""

    def __init__(self, client: LLMClient):
        self.client = client

    async def extract(self, raw_line: str) -> Outcome[ExtractedIngredient]:
        try:
            answer = await self.client.call_json(EXTRACTION_PROMPT.format(line=raw_line))
            payload = ExtractionPayload.model_validate(answer)
        except (ConnectorError, ValidationError) as e:
            logger.warning(f"Error extracting ingredient info from '{raw_line}': {e}")
            return Fallback(default_extraction(raw_line), reason=str(e))

        logger.debug(
            f"Extracted '{raw_line}' -> quantity={payload.quantity}, "
            f"unit={payload.unit}, name={payload.name}"
        )
        return Ok(ExtractedIngredient(quantity=payload.quantity, unit=payload.unit, name=payload.name))
