"""Tests for consumed meal service."""

import math
from datetime import timedelta

import pytest

from calorie_tracker.domain.meals import ConsumedMealDraft, MealType
from calorie_tracker.errors import NotFoundError, ValidationError
from calorie_tracker.services.meals import ConsumedMealService
from tests.conftest import TODAY, FixedClock, InMemoryConsumedMealRepository, make_meal


def _draft(**overrides) -> ConsumedMealDraft:  # type: ignore[no-untyped-def]
    values = {
        "meal_id": "52772",
        "meal_name": "Teriyaki Chicken Casserole",
        "meal_type": MealType.LUNCH,
        "calories": 650,
        "date": TODAY,
    }
    values.update(overrides)
    return ConsumedMealDraft(**values)


def test_log_meal_persists_with_created_at() -> None:
    repo = InMemoryConsumedMealRepository()
    service = ConsumedMealService(repo, FixedClock())

    meal = service.log_meal("user-1", _draft())

    assert repo.meals[meal.id] == meal
    assert meal.user_id == "user-1"
    assert meal.created_at.date() == TODAY


@pytest.mark.parametrize(
    "overrides",
    [
        {"date": TODAY + timedelta(days=1)},
        {"calories": -1},
        {"calories": math.inf},
        {"meal_id": ""},
    ],
)
def test_log_meal_rejects_invalid_drafts(overrides) -> None:
    repo = InMemoryConsumedMealRepository()
    service = ConsumedMealService(repo, FixedClock())

    with pytest.raises(ValidationError):
        service.log_meal("user-1", _draft(**overrides))

    assert repo.meals == {}


def test_log_meal_accepts_past_dates_and_zero_calories() -> None:
    service = ConsumedMealService(InMemoryConsumedMealRepository(), FixedClock())

    meal = service.log_meal(
        "user-1", _draft(date=TODAY - timedelta(days=30), calories=0)
    )

    assert meal.calories == 0


def test_replace_meal_overwrites_fields() -> None:
    repo = InMemoryConsumedMealRepository()
    existing = make_meal(TODAY, MealType.BREAKFAST, 300)
    repo.add(existing)
    service = ConsumedMealService(repo, FixedClock())

    updated = service.replace_meal(
        "user-1", existing.id, _draft(meal_type=MealType.DINNER, calories=720)
    )

    assert updated.id == existing.id
    assert updated.meal_type is MealType.DINNER
    assert updated.calories == 720


def test_replace_meal_of_other_user_is_not_found() -> None:
    repo = InMemoryConsumedMealRepository()
    existing = make_meal(TODAY, MealType.BREAKFAST, 300, user_id="user-2")
    repo.add(existing)
    service = ConsumedMealService(repo, FixedClock())

    with pytest.raises(NotFoundError):
        service.replace_meal("user-1", existing.id, _draft())


def test_delete_meal_removes_owned_record() -> None:
    repo = InMemoryConsumedMealRepository()
    existing = make_meal(TODAY, MealType.BREAKFAST, 300)
    repo.add(existing)
    service = ConsumedMealService(repo, FixedClock())

    service.delete_meal("user-1", existing.id)

    assert repo.meals == {}
    with pytest.raises(NotFoundError):
        service.delete_meal("user-1", existing.id)


def test_list_for_range_is_oldest_first() -> None:
    repo = InMemoryConsumedMealRepository()
    repo.add(
        make_meal(TODAY, MealType.LUNCH, 500),
        make_meal(TODAY - timedelta(days=2), MealType.LUNCH, 400),
        make_meal(TODAY - timedelta(days=1), MealType.LUNCH, 300),
    )
    service = ConsumedMealService(repo, FixedClock())

    meals = service.list_for_range("user-1", TODAY - timedelta(days=7), TODAY)

    assert [meal.calories for meal in meals] == [400, 300, 500]
