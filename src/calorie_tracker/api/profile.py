"""Profile, preference and meal plan endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, HTTPException, Request, status

from calorie_tracker.api.meals import meal_to_dict
from calorie_tracker.api.models import PreferencesUpdateRequest, ProfileUpdateRequest
from calorie_tracker.domain.profile import DietPreferences
from calorie_tracker.services.meals import InvalidMealError
from calorie_tracker.services.profile import InvalidPreferencesError

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer
    from calorie_tracker.domain.profile import UserProfile

router = APIRouter(prefix="/users/{user_id}", tags=["profile"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/profile")
async def get_profile(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the user's profile."""
    profile = _container(request).profile_service.get_profile(user_id)
    return _profile_to_dict(profile)


@router.put("/profile")
async def update_profile(
    user_id: UUID, payload: ProfileUpdateRequest, request: Request
) -> dict[str, object]:
    """Update the user's profile."""
    profile = _container(request).profile_service.update_profile(
        user_id,
        display_name=payload.display_name,
        age=payload.age,
        weight_kg=payload.weight_kg,
    )
    return _profile_to_dict(profile)


@router.get("/preferences")
async def get_preferences(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the user's diet preferences."""
    preferences = _container(request).profile_service.get_preferences(user_id)
    return asdict(preferences)


@router.put("/preferences")
async def update_preferences(
    user_id: UUID, payload: PreferencesUpdateRequest, request: Request
) -> dict[str, object]:
    """Update the user's diet preferences."""
    try:
        preferences = _container(request).profile_service.update_preferences(
            user_id, DietPreferences(**payload.model_dump())
        )
    except InvalidPreferencesError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return asdict(preferences)


@router.get("/meal-plan")
async def get_meal_plan(user_id: UUID, request: Request) -> dict[str, object]:
    """Return today's suggested meal plan."""
    plan = _container(request).meal_plan_service.generate_plan(user_id)
    return {
        "diet_type": plan.diet_type,
        "goal_calories": plan.goal_calories,
        "total_calories": plan.total_calories,
        "meals": {
            slot: {"name": meal.name, "calories": meal.calories}
            for slot, meal in plan.meals.items()
        },
    }


@router.post("/meal-plan/{slot}/log", status_code=status.HTTP_201_CREATED)
async def log_planned_meal(
    user_id: UUID, slot: str, request: Request
) -> dict[str, object]:
    """Add a planned meal to the user's log."""
    try:
        meal = _container(request).meal_plan_service.log_planned_meal(user_id, slot)
    except InvalidMealError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return meal_to_dict(meal)


def _profile_to_dict(profile: UserProfile) -> dict[str, object]:
    return {
        "user_id": str(profile.user_id),
        "display_name": profile.display_name,
        "age": profile.age,
        "weight_kg": profile.weight_kg,
    }
