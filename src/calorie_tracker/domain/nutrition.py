"""Nutrition domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MacroProfile:
    """Macronutrient profile for a meal or a day."""

    calories: float
    protein_g: float
    fat_g: float
    carbs_g: float

    def __add__(self, other: "MacroProfile") -> "MacroProfile":
        return MacroProfile(
            calories=self.calories + other.calories,
            protein_g=self.protein_g + other.protein_g,
            fat_g=self.fat_g + other.fat_g,
            carbs_g=self.carbs_g + other.carbs_g,
        )


ZERO_MACROS = MacroProfile(0.0, 0.0, 0.0, 0.0)
