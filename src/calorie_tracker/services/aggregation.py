"""Calorie aggregation over consumed meals.

Every function here is pure: inputs are fully materialised collections of
``ConsumedMeal`` records fetched by the caller, and results are plain
dataclasses ready for rendering or serialisation. Dates are calendar-day
identifiers and are compared by equality, never converted between timezones.
"""

from collections.abc import Iterable, Iterator
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal

from calorie_tracker.domain.meals import ConsumedMeal, MealType
from calorie_tracker.domain.stats import (
    DailyBucket,
    GoalDelta,
    GoalProgress,
    MealTypeDistribution,
    PeriodStatistics,
)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from zero instead of to the nearest even digit."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def daily_total(records: Iterable[ConsumedMeal], day: date) -> float:
    """Return the calories logged on a day."""
    return sum((record.calories for record in records if record.date == day), 0.0)


def meal_type_total(
    records: Iterable[ConsumedMeal], day: date, meal_type: MealType
) -> float:
    """Return the calories logged on a day for one meal type."""
    return sum(
        (
            record.calories
            for record in records
            if record.date == day and record.meal_type == meal_type
        ),
        0.0,
    )


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield each calendar day from start to end inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def build_daily_series(
    records: Iterable[ConsumedMeal], start: date, end: date
) -> list[DailyBucket]:
    """Return one bucket per day of the window, empty days included."""
    totals: dict[tuple[date, MealType], float] = {}
    for record in records:
        key = (record.date, record.meal_type)
        totals[key] = totals.get(key, 0.0) + record.calories
    series = []
    for day in iter_days(start, end):
        breakfast = totals.get((day, MealType.BREAKFAST), 0.0)
        lunch = totals.get((day, MealType.LUNCH), 0.0)
        dinner = totals.get((day, MealType.DINNER), 0.0)
        series.append(
            DailyBucket(
                day=day,
                breakfast=breakfast,
                lunch=lunch,
                dinner=dinner,
                total=breakfast + lunch + dinner,
            )
        )
    return series


def build_distribution(records: Iterable[ConsumedMeal]) -> MealTypeDistribution:
    """Sum calories per meal type, omitting types with nothing logged."""
    totals = dict.fromkeys(MealType, 0.0)
    for record in records:
        totals[record.meal_type] += record.calories
    return {meal_type: value for meal_type, value in totals.items() if value > 0}


def compute_period_statistics(
    records: Iterable[ConsumedMeal], daily_goal: int | None = None
) -> PeriodStatistics:
    """Return totals, active days, the daily average and goal progress.

    The average is taken over days with at least one record, not over every
    day of the window. Goal progress is only reported when a positive goal is
    set and something was logged.
    """
    materialized = list(records)
    total = sum((record.calories for record in materialized), 0.0)
    active_days = len({record.date for record in materialized})
    average = int(round_half_up(total / active_days)) if active_days else 0

    progress = None
    if daily_goal and daily_goal > 0 and active_days:
        progress = GoalProgress(
            target=daily_goal,
            actual=average,
            percentage=int(round_half_up(average / daily_goal * 100)),
        )
    return PeriodStatistics(
        total_calories=total,
        active_days=active_days,
        average_daily=average,
        goal_progress=progress,
    )


def compute_goal_delta(current_total: float, goal: float) -> GoalDelta:
    """Return how far the total is over or under the goal."""
    if current_total > goal:
        return GoalDelta(exceeded=True, amount=current_total - goal)
    return GoalDelta(exceeded=False, amount=goal - current_total)
