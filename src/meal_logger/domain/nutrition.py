"""Nutrition domain models."""

from pydantic import BaseModel, ConfigDict, Field


class NutritionDetails(BaseModel):
    """Aggregate nutrition breakdown for a meal or a single item.

    Macros are in grams, sodium in milligrams. Unknown values are 0.
    """

    model_config = ConfigDict(frozen=True)

    calories: float = Field(default=0.0, ge=0.0)
    protein: float = Field(default=0.0, ge=0.0)
    fat: float = Field(default=0.0, ge=0.0)
    carbs: float = Field(default=0.0, ge=0.0)
    fiber: float = Field(default=0.0, ge=0.0)
    sugar: float = Field(default=0.0, ge=0.0)
    sodium: float = Field(default=0.0, ge=0.0)


ZERO_NUTRITION = NutritionDetails()
