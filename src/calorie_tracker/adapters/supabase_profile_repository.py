"""Supabase repository for user profiles and diet preferences."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from calorie_tracker.domain.profile import DietPreferences, UserProfile
from calorie_tracker.services.profile import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profiles and preferences."""

    client: Client

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the user's profile row."""
        response = (
            self.client.table("users")
            .select("id, display_name, age, weight_kg")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        age = row.get("age")
        weight = row.get("weight_kg")
        return UserProfile(
            user_id=user_id,
            display_name=str(row.get("display_name") or ""),
            age=int(age) if age is not None else None,
            weight_kg=float(weight) if weight is not None else None,
        )

    def save_profile(self, profile: UserProfile) -> None:
        """Upsert the user's profile row."""
        self.client.table("users").upsert(
            {
                "id": str(profile.user_id),
                "display_name": profile.display_name,
                "age": profile.age,
                "weight_kg": profile.weight_kg,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="id",
        ).execute()

    def get_preferences(self, user_id: UUID) -> DietPreferences | None:
        """Return the user's preference row."""
        response = (
            self.client.table("user_settings")
            .select("diet_type, cuisine_preference, goal_calories, timezone")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        defaults = DietPreferences()
        return DietPreferences(
            diet_type=str(row.get("diet_type") or defaults.diet_type),
            cuisine_preference=str(
                row.get("cuisine_preference") or defaults.cuisine_preference
            ),
            goal_calories=int(row.get("goal_calories") or defaults.goal_calories),
            timezone=str(row.get("timezone") or defaults.timezone),
        )

    def save_preferences(self, user_id: UUID, preferences: DietPreferences) -> None:
        """Upsert the user's preference row."""
        self.client.table("user_settings").upsert(
            {
                "user_id": str(user_id),
                "diet_type": preferences.diet_type,
                "cuisine_preference": preferences.cuisine_preference,
                "goal_calories": preferences.goal_calories,
                "timezone": preferences.timezone,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id",
        ).execute()
