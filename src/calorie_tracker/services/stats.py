"""Statistics service for consumed meals."""

from dataclasses import dataclass
from datetime import date, timedelta

from calorie_tracker.domain.meals import MealType
from calorie_tracker.domain.models import UserProfile
from calorie_tracker.domain.stats import MealSlot, PeriodReport, TodaySummary
from calorie_tracker.errors import ValidationError
from calorie_tracker.services.aggregation import (
    build_daily_series,
    build_distribution,
    compute_goal_delta,
    compute_period_statistics,
    daily_total,
    meal_type_total,
)
from calorie_tracker.services.clock import Clock
from calorie_tracker.services.meals import ConsumedMealRepository

WEEK_LOOKBACK_DAYS = 7
MONTH_LOOKBACK_DAYS = 30
MAX_CUSTOM_WINDOW_DAYS = 366


@dataclass
class StatsService:
    """Service for computing a user's calorie statistics."""

    repository: ConsumedMealRepository
    clock: Clock

    def get_today(self, profile: UserProfile) -> TodaySummary:
        """Return today's meals by slot, the total and distance to the goal."""
        today = self.clock.today()
        meals = self.repository.list_by_date(profile.id, today)
        slots = [
            MealSlot(
                meal_type=meal_type,
                meals=[meal for meal in meals if meal.meal_type == meal_type],
                calories=meal_type_total(meals, today, meal_type),
            )
            for meal_type in MealType
        ]
        total = daily_total(meals, today)
        goal = profile.daily_calorie_goal
        return TodaySummary(
            day=today,
            slots=slots,
            total_calories=total,
            goal=goal,
            goal_delta=compute_goal_delta(total, goal) if goal else None,
        )

    def resolve_window(
        self, period: str, start: date | None = None, end: date | None = None
    ) -> tuple[date, date]:
        """Return the inclusive date window for a named period."""
        today = self.clock.today()
        if period == "week":
            return today - timedelta(days=WEEK_LOOKBACK_DAYS), today
        if period == "month":
            return today - timedelta(days=MONTH_LOOKBACK_DAYS), today
        if period == "custom":
            if start is None or end is None:
                raise ValidationError("A custom period needs start and end dates")
            if end > today:
                raise ValidationError("The period cannot end in the future")
            if (end - start).days + 1 > MAX_CUSTOM_WINDOW_DAYS:
                raise ValidationError(
                    f"A custom period can span at most {MAX_CUSTOM_WINDOW_DAYS} days"
                )
            return start, end
        raise ValidationError(f"Unknown period: {period}")

    def get_period_report(
        self,
        profile: UserProfile,
        period: str,
        start: date | None = None,
        end: date | None = None,
    ) -> PeriodReport:
        """Return the series, distribution and statistics for a window."""
        window_start, window_end = self.resolve_window(period, start, end)
        if window_start > window_end:
            meals = []
        else:
            meals = self.repository.list_by_date_range(
                profile.id, window_start, window_end
            )
        return PeriodReport(
            start=window_start,
            end=window_end,
            series=build_daily_series(meals, window_start, window_end),
            distribution=build_distribution(meals),
            statistics=compute_period_statistics(meals, profile.daily_calorie_goal),
        )
