"""Pydantic models for API request payloads."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from calorie_tracker.domain.meals import ConsumedMealDraft, MealType
from calorie_tracker.domain.models import Gender


class RegisterRequest(BaseModel):
    """Account registration payload."""

    email: str
    password: str = Field(min_length=6)
    display_name: str


class LoginRequest(BaseModel):
    """Email and password sign-in payload."""

    email: str
    password: str


class ProfileUpdate(BaseModel):
    """Editable profile fields; omitted fields are left unchanged."""

    model_config = ConfigDict(extra="forbid")

    display_name: str | None = None
    height_cm: float | None = None
    weight_kg: float | None = None
    age: int | None = None
    gender: Gender | None = None
    target_weight_kg: float | None = None
    daily_calorie_goal: int | None = None


class ConsumedMealPayload(BaseModel):
    """Consumed meal fields for logging and full replacement."""

    meal_id: str = Field(min_length=1)
    meal_name: str
    meal_type: MealType
    calories: float = Field(ge=0)
    date: date

    def to_draft(self) -> ConsumedMealDraft:
        """Convert the payload into a domain draft."""
        return ConsumedMealDraft(
            meal_id=self.meal_id,
            meal_name=self.meal_name,
            meal_type=self.meal_type,
            calories=self.calories,
            date=self.date,
        )
