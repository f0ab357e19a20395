"""User profile and diet preference service."""

import math
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from calorie_tracker.domain.profile import DIET_TYPES, DietPreferences, UserProfile


class InvalidPreferencesError(ValueError):
    """Raised when diet preferences fail validation."""


class ProfileRepository(Protocol):
    """Persistence interface for profiles and preferences."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the stored profile, if any."""

    def save_profile(self, profile: UserProfile) -> None:
        """Insert or update a profile."""

    def get_preferences(self, user_id: UUID) -> DietPreferences | None:
        """Return stored preferences, if any."""

    def save_preferences(self, user_id: UUID, preferences: DietPreferences) -> None:
        """Insert or update preferences."""


@dataclass
class ProfileService:
    """Service for reading and editing user profiles."""

    repository: ProfileRepository
    default_goal_calories: int = 2000

    def get_profile(self, user_id: UUID) -> UserProfile:
        """Return the profile or an empty one."""
        return self.repository.get_profile(user_id) or UserProfile(
            user_id=user_id, display_name=""
        )

    def update_profile(
        self,
        user_id: UUID,
        display_name: str,
        age: object = None,
        weight_kg: object = None,
    ) -> UserProfile:
        """Save profile fields; unusable age or weight is stored as empty."""
        parsed_age = _parse_positive(age)
        profile = UserProfile(
            user_id=user_id,
            display_name=display_name.strip(),
            age=int(parsed_age) if parsed_age is not None else None,
            weight_kg=_parse_positive(weight_kg),
        )
        self.repository.save_profile(profile)
        return profile

    def get_preferences(self, user_id: UUID) -> DietPreferences:
        """Return stored preferences or the defaults."""
        stored = self.repository.get_preferences(user_id)
        if stored is not None:
            return stored
        return DietPreferences(goal_calories=self.default_goal_calories)

    def update_preferences(
        self, user_id: UUID, preferences: DietPreferences
    ) -> DietPreferences:
        """Validate and persist diet preferences."""
        if preferences.diet_type not in DIET_TYPES:
            raise InvalidPreferencesError(
                f"Unknown diet type: {preferences.diet_type}"
            )
        if preferences.goal_calories <= 0:
            raise InvalidPreferencesError("Calorie goal must be positive")
        if not _is_valid_timezone(preferences.timezone):
            raise InvalidPreferencesError(f"Unknown timezone: {preferences.timezone}")
        self.repository.save_preferences(user_id, preferences)
        return preferences


def _parse_positive(value: object) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return number


def _is_valid_timezone(value: str) -> bool:
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True
