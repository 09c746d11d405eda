"""Domain models for statistics."""

from dataclasses import dataclass
from datetime import date

from calorie_tracker.domain.meals import ConsumedMeal, MealType

MealTypeDistribution = dict[MealType, float]


@dataclass(frozen=True)
class DailyBucket:
    """Calories for one calendar day split by meal type."""

    day: date
    breakfast: float
    lunch: float
    dinner: float
    total: float


@dataclass(frozen=True)
class GoalProgress:
    """Average daily intake measured against the daily goal."""

    target: int
    actual: int
    percentage: int


@dataclass(frozen=True)
class PeriodStatistics:
    """Aggregate figures over a window of consumed meals."""

    total_calories: float
    active_days: int
    average_daily: int
    goal_progress: GoalProgress | None = None


@dataclass(frozen=True)
class GoalDelta:
    """Distance between a day's total and the daily goal."""

    exceeded: bool
    amount: float


@dataclass(frozen=True)
class MealSlot:
    """Consumed meals of one meal type with their calories."""

    meal_type: MealType
    meals: list[ConsumedMeal]
    calories: float


@dataclass(frozen=True)
class TodaySummary:
    """Today's meals grouped by slot with the day total."""

    day: date
    slots: list[MealSlot]
    total_calories: float
    goal: int | None
    goal_delta: GoalDelta | None


@dataclass(frozen=True)
class PeriodReport:
    """Everything the statistics screen renders for a window."""

    start: date
    end: date
    series: list[DailyBucket]
    distribution: MealTypeDistribution
    statistics: PeriodStatistics
