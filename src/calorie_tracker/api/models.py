"""Request models for the HTTP API."""

from pydantic import BaseModel, ConfigDict, Field


class RagQueryRequest(BaseModel):
    """Body of a RAG question."""

    query: str | None = None
    namespace: str | None = None


class MealCreateRequest(BaseModel):
    """Body of a manually logged meal."""

    name: str
    calories: float = Field(ge=0.0)
    protein_g: float = Field(default=0.0, ge=0.0)
    carbs_g: float = Field(default=0.0, ge=0.0)
    fat_g: float = Field(default=0.0, ge=0.0)
    meal_type: str = "snack"


class BarcodeRequest(BaseModel):
    """Body of a barcode scan."""

    model_config = ConfigDict(str_strip_whitespace=True)

    barcode: str = Field(min_length=1)


class ProfileUpdateRequest(BaseModel):
    """Body of a profile edit; age and weight accept free-form input."""

    display_name: str = ""
    age: int | float | str | None = None
    weight_kg: int | float | str | None = None


class PreferencesUpdateRequest(BaseModel):
    """Body of a diet preference edit."""

    diet_type: str = "none"
    cuisine_preference: str = "any"
    goal_calories: int = 2000
    timezone: str = "UTC"
