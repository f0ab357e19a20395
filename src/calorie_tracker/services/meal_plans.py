"""Daily meal plan suggestions based on diet preferences."""

from dataclasses import dataclass
from uuid import UUID

from calorie_tracker.domain.meal_plans import PLAN_SLOTS, MealPlan, PlannedMeal
from calorie_tracker.domain.meals import MealEntry
from calorie_tracker.domain.nutrition import MacroProfile
from calorie_tracker.services.meals import InvalidMealError, MealLogService
from calorie_tracker.services.profile import ProfileService

_BASE_PLAN: dict[str, PlannedMeal] = {
    "Breakfast": PlannedMeal("Avocado Toast", 250),
    "Lunch": PlannedMeal("Grilled Chicken Salad", 400),
    "Dinner": PlannedMeal("Salmon with Quinoa", 500),
    "Snacks": PlannedMeal("Greek Yogurt", 150),
}

_DIET_OVERRIDES: dict[str, dict[str, PlannedMeal]] = {
    "vegetarian": {
        "Lunch": PlannedMeal("Quinoa Buddha Bowl", 400),
        "Dinner": PlannedMeal("Vegetable Stir Fry", 500),
    },
    "vegan": {
        "Breakfast": PlannedMeal("Tofu Scramble", 250),
        "Lunch": PlannedMeal("Vegan Buddha Bowl", 400),
        "Dinner": PlannedMeal("Lentil Curry", 500),
        "Snacks": PlannedMeal("Hummus with Veggies", 150),
    },
}

_SLOT_MEAL_TYPES = {
    "Breakfast": "breakfast",
    "Lunch": "lunch",
    "Dinner": "dinner",
    "Snacks": "snack",
}


@dataclass
class MealPlanService:
    """Builds meal plans and logs planned meals."""

    profile_service: ProfileService
    meal_log_service: MealLogService

    def generate_plan(self, user_id: UUID) -> MealPlan:
        """Return the plan for the user's diet type."""
        preferences = self.profile_service.get_preferences(user_id)
        meals = dict(_BASE_PLAN)
        meals.update(_DIET_OVERRIDES.get(preferences.diet_type, {}))
        return MealPlan(
            diet_type=preferences.diet_type,
            goal_calories=preferences.goal_calories,
            meals={slot: meals[slot] for slot in PLAN_SLOTS},
        )

    def log_planned_meal(self, user_id: UUID, slot: str) -> MealEntry:
        """Add the planned meal for a slot to the user's log."""
        resolved_slot = _resolve_slot(slot)
        if resolved_slot is None:
            raise InvalidMealError(f"Unknown plan slot: {slot}")
        planned = self.generate_plan(user_id).meals[resolved_slot]
        return self.meal_log_service.log_meal(
            user_id=user_id,
            name=planned.name,
            macros=MacroProfile(
                calories=planned.calories, protein_g=0.0, fat_g=0.0, carbs_g=0.0
            ),
            meal_type=_SLOT_MEAL_TYPES[resolved_slot],
        )


def _resolve_slot(slot: str) -> str | None:
    for known in PLAN_SLOTS:
        if known.lower() == slot.strip().lower():
            return known
    return None
