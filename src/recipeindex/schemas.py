"""Request and response schemas shared by the API and the pipeline."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RecipeSubmission(BaseModel):
    """Recipe as submitted for ingestion."""

    name: str = Field(min_length=1)
    instructions: str = ""
    description: str | None = None
    cook_time: str | None = None
    prep_time: str | None = None
    servings: int = Field(ge=1, description="Number of servings the recipe yields")
    ingredients: list[str] = Field(min_length=1, description="Free-text ingredient lines")

    @field_validator("cook_time", "prep_time", mode="before")
    @classmethod
    def time_as_text(cls, v: Any) -> Any:
        # Accept 30 as well as "30 minutes"
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("ingredients")
    @classmethod
    def drop_blank_lines(cls, v: list[str]) -> list[str]:
        lines = [line.strip() for line in v if line.strip()]
        if not lines:
            raise ValueError("at least one non-empty ingredient is required")
        return lines


class IngestionResponse(BaseModel):
    """Successful ingestion."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    recipe_id: int = Field(serialization_alias="recipeId")


class ErrorResponse(BaseModel):
    """Failure payload returned for any error."""

    success: bool = False
    error: str


class NutritionSummaryResponse(BaseModel):
    """Per-serving nutrition of a recipe."""

    model_config = ConfigDict(from_attributes=True)

    recipe_id: int
    calories: int
    protein: float
    fat: float
    carbohydrates: float


class IngredientIndexEntry(BaseModel):
    """One indexed ingredient of a recipe (nutrition is per 100g)."""

    model_config = ConfigDict(from_attributes=True)

    ingredient: str
    normalized_name: str
    quantity: str | None
    unit: str | None
    converted_grams: int
    calories: float
    protein: float
    fat: float
    carbohydrates: float


class RecipeResponse(BaseModel):
    """Stored recipe with its ingredient index and nutrition summary."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    instructions: str
    description: str | None
    cook_time: str | None
    prep_time: str | None
    servings: int
    created_at: datetime
    ingredients: list[IngredientIndexEntry] = Field(default_factory=list)
    nutrition: NutritionSummaryResponse | None = None


class IngredientRecipesResponse(BaseModel):
    """Recipes containing an ingredient, from the reverse index."""

    ingredient: str
    recipe_ids: list[int]
    total: int
