"""Domain models for meal logging."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from calorie_tracker.domain.nutrition import MacroProfile

MEAL_TYPES = frozenset({"breakfast", "lunch", "dinner", "snack", "scanned"})


@dataclass(frozen=True)
class MealEntry:
    """A logged meal."""

    id: UUID
    user_id: UUID
    name: str
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    meal_type: str
    logged_at: datetime
    image_url: str | None = None

    @property
    def macros(self) -> MacroProfile:
        return MacroProfile(
            calories=self.calories,
            protein_g=self.protein_g,
            fat_g=self.fat_g,
            carbs_g=self.carbs_g,
        )


@dataclass(frozen=True)
class DailySummary:
    """Totals for a single day measured against the calorie goal."""

    day: date
    totals: MacroProfile
    goal_calories: int
    remaining_calories: float
    meals: list[MealEntry]
