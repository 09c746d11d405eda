"""Domain models for the calorie tracker."""

from dataclasses import dataclass, field
from enum import StrEnum


class Gender(StrEnum):
    """Gender used by the basal metabolic rate formula."""

    MALE = "male"
    FEMALE = "female"


@dataclass(frozen=True)
class UserProfile:
    """Represents a user profile stored in the database."""

    id: str
    email: str
    display_name: str
    height_cm: float | None = None
    weight_kg: float | None = None
    age: int | None = None
    gender: Gender | None = None
    target_weight_kg: float | None = None
    daily_calorie_goal: int | None = None
    followers: list[str] = field(default_factory=list)
    following: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class AuthSession:
    """Result of a successful sign-in."""

    user_id: str
    access_token: str
