"""Domain models for consumed meals."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum


class MealType(StrEnum):
    """The three fixed daily meal slots."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


@dataclass(frozen=True)
class ConsumedMeal:
    """A user's logged record of eating a catalog meal."""

    id: str
    user_id: str
    meal_id: str
    meal_name: str
    meal_type: MealType
    calories: float
    date: date
    created_at: datetime


@dataclass(frozen=True)
class ConsumedMealDraft:
    """Fields supplied when logging or replacing a consumed meal."""

    meal_id: str
    meal_name: str
    meal_type: MealType
    calories: float
    date: date
