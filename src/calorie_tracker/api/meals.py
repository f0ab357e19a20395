"""Meal logging endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, HTTPException, Request, Response, status

from calorie_tracker.api.models import BarcodeRequest, MealCreateRequest
from calorie_tracker.domain.nutrition import MacroProfile
from calorie_tracker.services.meals import InvalidMealError

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer
    from calorie_tracker.domain.meals import DailySummary, MealEntry

router = APIRouter(tags=["meals"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.post("/users/{user_id}/meals", status_code=status.HTTP_201_CREATED)
async def log_meal(
    user_id: UUID, payload: MealCreateRequest, request: Request
) -> dict[str, object]:
    """Log a manually entered meal."""
    container = _container(request)
    try:
        meal = container.meal_log_service.log_meal(
            user_id=user_id,
            name=payload.name,
            macros=MacroProfile(
                calories=payload.calories,
                protein_g=payload.protein_g,
                fat_g=payload.fat_g,
                carbs_g=payload.carbs_g,
            ),
            meal_type=payload.meal_type,
        )
    except InvalidMealError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return meal_to_dict(meal)


@router.get("/users/{user_id}/meals/today")
async def list_today(user_id: UUID, request: Request) -> dict[str, object]:
    """Return today's meals in the user's timezone."""
    container = _container(request)
    timezone = container.profile_service.get_preferences(user_id).timezone
    meals = container.meal_log_service.list_meals_for_day(user_id, timezone)
    return {"meals": [meal_to_dict(meal) for meal in meals]}


@router.delete(
    "/users/{user_id}/meals/{meal_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def delete_meal(user_id: UUID, meal_id: UUID, request: Request) -> Response:
    """Delete a logged meal."""
    container = _container(request)
    if not container.meal_log_service.delete_meal(user_id, meal_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/users/{user_id}/summary/today")
async def today_summary(user_id: UUID, request: Request) -> dict[str, object]:
    """Return today's totals against the calorie goal."""
    container = _container(request)
    preferences = container.profile_service.get_preferences(user_id)
    summary = container.meal_log_service.daily_summary(
        user_id, preferences.timezone, preferences.goal_calories
    )
    return summary_to_dict(summary)


@router.post("/users/{user_id}/meals/scan", status_code=status.HTTP_201_CREATED)
async def scan_meal(user_id: UUID, request: Request) -> dict[str, object]:
    """Recognise a meal from an uploaded photo and log it."""
    container = _container(request)
    image_bytes = await request.body()
    if not image_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Image is required"
        )
    meal = await container.meal_capture_service.log_scanned_meal(
        user_id, image_bytes
    )
    return meal_to_dict(meal)


@router.post("/users/{user_id}/meals/barcode", status_code=status.HTTP_201_CREATED)
async def barcode_meal(
    user_id: UUID, payload: BarcodeRequest, request: Request
) -> dict[str, object]:
    """Look up a scanned barcode and log the product."""
    container = _container(request)
    meal = await container.meal_capture_service.log_barcode_meal(
        user_id, payload.barcode
    )
    if meal is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return meal_to_dict(meal)


@router.post("/voice/transcribe")
async def transcribe(request: Request) -> dict[str, str]:
    """Transcribe a voice note."""
    container = _container(request)
    audio_bytes = await request.body()
    if not audio_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Recording is required"
        )
    text = await container.meal_capture_service.transcribe(audio_bytes)
    return {"text": text}


def meal_to_dict(meal: MealEntry) -> dict[str, object]:
    """Serialize a meal entry for JSON responses."""
    return {
        "id": str(meal.id),
        "user_id": str(meal.user_id),
        "name": meal.name,
        "calories": meal.calories,
        "protein_g": meal.protein_g,
        "carbs_g": meal.carbs_g,
        "fat_g": meal.fat_g,
        "meal_type": meal.meal_type,
        "logged_at": meal.logged_at.isoformat(),
        "image_url": meal.image_url,
    }


def summary_to_dict(summary: DailySummary) -> dict[str, object]:
    """Serialize a daily summary for JSON responses."""
    return {
        "day": summary.day.isoformat(),
        "goal_calories": summary.goal_calories,
        "consumed_calories": summary.totals.calories,
        "remaining_calories": summary.remaining_calories,
        "protein_g": summary.totals.protein_g,
        "carbs_g": summary.totals.carbs_g,
        "fat_g": summary.totals.fat_g,
        "meals": [meal_to_dict(meal) for meal in summary.meals],
    }
