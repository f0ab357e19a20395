"""Domain models for user profiles and diet preferences."""

from dataclasses import dataclass
from uuid import UUID

DIET_TYPES = frozenset({"none", "vegetarian", "vegan"})


@dataclass(frozen=True)
class UserProfile:
    """Editable profile fields for a user."""

    user_id: UUID
    display_name: str
    age: int | None = None
    weight_kg: float | None = None


@dataclass(frozen=True)
class DietPreferences:
    """Diet and goal settings for a user."""

    diet_type: str = "none"
    cuisine_preference: str = "any"
    goal_calories: int = 2000
    timezone: str = "UTC"
