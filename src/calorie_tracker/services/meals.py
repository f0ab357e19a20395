"""Meal logging service."""

from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from calorie_tracker.domain.meals import MEAL_TYPES, DailySummary, MealEntry
from calorie_tracker.domain.nutrition import ZERO_MACROS, MacroProfile


class InvalidMealError(ValueError):
    """Raised when a meal cannot be logged as given."""


class MealRepository(Protocol):
    """Persistence interface for meal entries."""

    def create_meal(  # noqa: PLR0913
        self,
        user_id: UUID,
        name: str,
        macros: MacroProfile,
        meal_type: str,
        logged_at: datetime,
        image_url: str | None,
    ) -> MealEntry:
        """Persist a meal and return the stored entry."""

    def get_meal(self, meal_id: UUID) -> MealEntry | None:
        """Return a meal by id."""

    def list_meals(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealEntry]:
        """Return meals logged within a time range."""

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a meal by id."""


@dataclass
class MealLogService:
    """Service that validates, stores and totals logged meals."""

    repository: MealRepository

    def log_meal(  # noqa: PLR0913
        self,
        user_id: UUID,
        name: str,
        macros: MacroProfile,
        meal_type: str,
        image_url: str | None = None,
    ) -> MealEntry:
        """Validate and persist a meal entry."""
        cleaned_name = name.strip()
        if not cleaned_name:
            raise InvalidMealError("Meal name is required")
        normalized_type = meal_type.strip().lower()
        if normalized_type not in MEAL_TYPES:
            raise InvalidMealError(f"Unknown meal type: {meal_type}")
        if min(macros.calories, macros.protein_g, macros.fat_g, macros.carbs_g) < 0:
            raise InvalidMealError("Nutrition values must not be negative")
        return self.repository.create_meal(
            user_id=user_id,
            name=cleaned_name,
            macros=macros,
            meal_type=normalized_type,
            logged_at=datetime.now(tz=UTC),
            image_url=image_url,
        )

    def list_meals_for_day(
        self, user_id: UUID, timezone_name: str, day: date | None = None
    ) -> list[MealEntry]:
        """Return the user's meals for a local day, newest first."""
        start, end = _day_bounds(timezone_name, day)
        meals = self.repository.list_meals(
            user_id, start.astimezone(UTC), end.astimezone(UTC)
        )
        return sorted(meals, key=lambda meal: meal.logged_at, reverse=True)

    def daily_summary(
        self,
        user_id: UUID,
        timezone_name: str,
        goal_calories: int,
        day: date | None = None,
    ) -> DailySummary:
        """Return the day's totals against the calorie goal."""
        start, _ = _day_bounds(timezone_name, day)
        meals = self.list_meals_for_day(user_id, timezone_name, start.date())
        totals = ZERO_MACROS
        for meal in meals:
            totals = totals + meal.macros
        return DailySummary(
            day=start.date(),
            totals=totals,
            goal_calories=goal_calories,
            remaining_calories=goal_calories - totals.calories,
            meals=meals,
        )

    def delete_meal(self, user_id: UUID, meal_id: UUID) -> bool:
        """Delete a meal owned by the user."""
        meal = self.repository.get_meal(meal_id)
        if meal is None or meal.user_id != user_id:
            return False
        self.repository.delete_meal(meal_id)
        return True


def _day_bounds(timezone_name: str, day: date | None) -> tuple[datetime, datetime]:
    tz = ZoneInfo(timezone_name)
    if day is None:
        day = datetime.now(tz=tz).date()
    start = datetime(day.year, day.month, day.day, tzinfo=tz)
    return start, start + timedelta(days=1)
