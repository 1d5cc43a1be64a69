"""SQLAlchemy database models."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recipeindex.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Recipe(Base):
    """Submitted recipe."""

    __tablename__ = "recipes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    instructions: Mapped[str] = mapped_column(Text, nullable=False, default="")
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    cook_time: Mapped[str | None] = mapped_column(String(50), nullable=True)
    prep_time: Mapped[str | None] = mapped_column(String(50), nullable=True)
    servings: Mapped[int] = mapped_column(Integer, nullable=False)
    user_id: Mapped[str | None] = mapped_column(String, nullable=True)  # None for admin-created
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    ingredients: Mapped[list["RecipeIngredient"]] = relationship(
        "RecipeIngredient", back_populates="recipe", order_by="RecipeIngredient.id"
    )
    nutrition: Mapped["NutritionInfo | None"] = relationship(
        "NutritionInfo", back_populates="recipe", uselist=False
    )


class RecipeIngredient(Base):
    """Ingredient index row: one per ingredient line of a recipe."""

    __tablename__ = "recipe_ingredients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    recipe_id: Mapped[int] = mapped_column(Integer, ForeignKey("recipes.id"), nullable=False)
    ingredient: Mapped[str] = mapped_column(String, nullable=False)  # extracted name
    normalized_name: Mapped[str] = mapped_column(String, nullable=False)
    quantity: Mapped[str | None] = mapped_column(String(50), nullable=True)  # as written
    unit: Mapped[str | None] = mapped_column(String(50), nullable=True)
    converted_grams: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # Per 100g
    calories: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    protein: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    fat: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    carbohydrates: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    recipe: Mapped["Recipe"] = relationship("Recipe", back_populates="ingredients")

    __table_args__ = (
        Index("idx_recipe_ingredients_recipe_id", "recipe_id"),
        Index("idx_recipe_ingredients_normalized_name", "normalized_name"),
    )


class NutritionInfo(Base):
    """Per-serving nutrition summary, one row per recipe."""

    __tablename__ = "nutrition_info"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    recipe_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("recipes.id"), nullable=False, unique=True
    )
    calories: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    protein: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    fat: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    carbohydrates: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    recipe: Mapped["Recipe"] = relationship("Recipe", back_populates="nutrition")
