"""Models for meal recognition results."""

from pydantic import BaseModel, Field


class MealGuess(BaseModel):
    """Nutrition estimate for a recognised meal or product."""

    name: str
    calories: float = Field(ge=0.0)
    protein_g: float = Field(default=0.0, ge=0.0)
    carbs_g: float = Field(default=0.0, ge=0.0)
    fat_g: float = Field(default=0.0, ge=0.0)
