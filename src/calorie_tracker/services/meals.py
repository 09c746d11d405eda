"""Consumed meal logging service."""

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Protocol

from calorie_tracker.domain.meals import ConsumedMeal, ConsumedMealDraft
from calorie_tracker.errors import NotFoundError, ValidationError
from calorie_tracker.services.clock import Clock

_logger = logging.getLogger(__name__)


class ConsumedMealRepository(Protocol):
    """Persistence interface for consumed meals."""

    def create_consumed_meal(
        self, user_id: str, draft: ConsumedMealDraft, created_at: str
    ) -> ConsumedMeal:
        """Store a consumed meal and return it with its id."""

    def replace_consumed_meal(
        self, consumed_meal_id: str, user_id: str, draft: ConsumedMealDraft
    ) -> ConsumedMeal:
        """Overwrite every editable field of a consumed meal."""

    def delete_consumed_meal(self, consumed_meal_id: str) -> None:
        """Delete a consumed meal."""

    def get_consumed_meal(self, consumed_meal_id: str) -> ConsumedMeal | None:
        """Return a consumed meal by id."""

    def list_by_user(self, user_id: str) -> list[ConsumedMeal]:
        """Return every consumed meal of a user, newest date first."""

    def list_by_date(self, user_id: str, day: date) -> list[ConsumedMeal]:
        """Return consumed meals logged for a calendar day."""

    def list_by_date_range(
        self, user_id: str, start: date, end: date
    ) -> list[ConsumedMeal]:
        """Return consumed meals logged between two days inclusive."""


@dataclass
class ConsumedMealService:
    """Service that validates and persists consumed meals."""

    repository: ConsumedMealRepository
    clock: Clock

    def log_meal(self, user_id: str, draft: ConsumedMealDraft) -> ConsumedMeal:
        """Validate and store a new consumed meal."""
        self._validate(draft)
        meal = self.repository.create_consumed_meal(
            user_id, draft, created_at=self.clock.now().isoformat()
        )
        _logger.info(
            "Consumed meal logged",
            extra={"user_id": user_id, "consumed_meal_id": meal.id},
        )
        return meal

    def replace_meal(
        self, user_id: str, consumed_meal_id: str, draft: ConsumedMealDraft
    ) -> ConsumedMeal:
        """Replace an existing consumed meal owned by the user."""
        self._require_owned(user_id, consumed_meal_id)
        self._validate(draft)
        return self.repository.replace_consumed_meal(consumed_meal_id, user_id, draft)

    def delete_meal(self, user_id: str, consumed_meal_id: str) -> None:
        """Delete a consumed meal owned by the user."""
        self._require_owned(user_id, consumed_meal_id)
        self.repository.delete_consumed_meal(consumed_meal_id)

    def list_for_date(self, user_id: str, day: date) -> list[ConsumedMeal]:
        """Return the meals logged on a day."""
        return self.repository.list_by_date(user_id, day)

    def list_for_range(
        self, user_id: str, start: date, end: date
    ) -> list[ConsumedMeal]:
        """Return the meals logged within a window, oldest first."""
        meals = self.repository.list_by_date_range(user_id, start, end)
        return sorted(meals, key=lambda meal: meal.date)

    def list_all(self, user_id: str) -> list[ConsumedMeal]:
        """Return every meal the user logged."""
        return self.repository.list_by_user(user_id)

    def _require_owned(self, user_id: str, consumed_meal_id: str) -> ConsumedMeal:
        meal = self.repository.get_consumed_meal(consumed_meal_id)
        if meal is None or meal.user_id != user_id:
            raise NotFoundError(f"Consumed meal {consumed_meal_id} not found")
        return meal

    def _validate(self, draft: ConsumedMealDraft) -> None:
        if not draft.meal_id:
            raise ValidationError("A catalog meal must be selected")
        if not math.isfinite(draft.calories) or draft.calories < 0:
            raise ValidationError("Calories must be a non-negative number")
        if draft.date > self.clock.today():
            raise ValidationError("Meals cannot be logged for a future date")
