"""Supabase repository for meal entries."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from calorie_tracker.domain.meals import MealEntry
from calorie_tracker.domain.nutrition import MacroProfile
from calorie_tracker.services.meals import MealRepository

_MEAL_COLUMNS = (
    "id, user_id, name, calories, protein_g, carbs_g, fat_g, meal_type, "
    "logged_at, image_url"
)


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meal entries."""

    client: Client

    def create_meal(  # noqa: PLR0913
        self,
        user_id: UUID,
        name: str,
        macros: MacroProfile,
        meal_type: str,
        logged_at: datetime,
        image_url: str | None,
    ) -> MealEntry:
        """Insert a meal row and return it."""
        response = (
            self.client.table("meals")
            .insert(
                {
                    "user_id": str(user_id),
                    "name": name,
                    "calories": macros.calories,
                    "protein_g": macros.protein_g,
                    "carbs_g": macros.carbs_g,
                    "fat_g": macros.fat_g,
                    "meal_type": meal_type,
                    "logged_at": logged_at.isoformat(),
                    "image_url": image_url,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal")
        return _parse_meal(response.data[0])

    def get_meal(self, meal_id: UUID) -> MealEntry | None:
        """Return a meal row by id."""
        response = (
            self.client.table("meals")
            .select(_MEAL_COLUMNS)
            .eq("id", str(meal_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def list_meals(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealEntry]:
        """Return the user's meals in the time range."""
        response = (
            self.client.table("meals")
            .select(_MEAL_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("logged_at", start.isoformat())
            .lt("logged_at", end.isoformat())
            .order("logged_at", desc=True)
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a meal row."""
        self.client.table("meals").delete().eq("id", str(meal_id)).execute()


def _parse_meal(row: dict[str, object]) -> MealEntry:
    return MealEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name", "")),
        calories=float(row.get("calories") or 0.0),
        protein_g=float(row.get("protein_g") or 0.0),
        carbs_g=float(row.get("carbs_g") or 0.0),
        fat_g=float(row.get("fat_g") or 0.0),
        meal_type=str(row.get("meal_type") or "snack"),
        logged_at=datetime.fromisoformat(str(row["logged_at"])),
        image_url=row.get("image_url"),
    )
