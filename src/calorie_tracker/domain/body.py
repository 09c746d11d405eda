"""Body metric domain models."""

from dataclasses import dataclass
from enum import StrEnum


class BmiCategory(StrEnum):
    """WHO body mass index bands."""

    UNDERWEIGHT = "underweight"
    NORMAL = "normal"
    OVERWEIGHT = "overweight"
    OBESE = "obese"


class WeightDirection(StrEnum):
    """Whether reaching the target weight means losing or gaining."""

    LOSE = "lose"
    GAIN = "gain"


@dataclass(frozen=True)
class WeightGoalDelta:
    """Distance from the current weight to the target weight."""

    current_kg: float
    target_kg: float
    direction: WeightDirection
    amount_kg: float


@dataclass(frozen=True)
class BodyMetrics:
    """Metrics derived from a profile's anthropometrics."""

    bmi: float | None
    bmi_category: BmiCategory | None
    recommended_calories: int | None
    weight_goal: WeightGoalDelta | None = None
