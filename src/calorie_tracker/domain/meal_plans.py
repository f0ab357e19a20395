"""Domain models for meal plans."""

from dataclasses import dataclass

PLAN_SLOTS = ("Breakfast", "Lunch", "Dinner", "Snacks")


@dataclass(frozen=True)
class PlannedMeal:
    """Suggested meal for a plan slot."""

    name: str
    calories: float


@dataclass(frozen=True)
class MealPlan:
    """A day of suggested meals keyed by slot."""

    diet_type: str
    goal_calories: int
    meals: dict[str, PlannedMeal]

    @property
    def total_calories(self) -> float:
        return sum(meal.calories for meal in self.meals.values())
