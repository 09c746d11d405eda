"""Supabase repository for consumed meals."""

from dataclasses import dataclass
from datetime import date, datetime

from supabase import Client

from calorie_tracker.domain.meals import ConsumedMeal, ConsumedMealDraft, MealType
from calorie_tracker.services.meals import ConsumedMealRepository

_COLUMNS = "id, user_id, meal_id, meal_name, meal_type, calories, date, created_at"


@dataclass
class SupabaseConsumedMealRepository(ConsumedMealRepository):
    """Supabase implementation for consumed meal persistence."""

    client: Client

    def create_consumed_meal(
        self, user_id: str, draft: ConsumedMealDraft, created_at: str
    ) -> ConsumedMeal:
        """Insert a consumed meal row."""
        response = (
            self.client.table("consumed_meals")
            .insert(
                {
                    "user_id": user_id,
                    **_draft_payload(draft),
                    "created_at": created_at,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create consumed meal")
        return _parse_row(response.data[0])

    def replace_consumed_meal(
        self, consumed_meal_id: str, user_id: str, draft: ConsumedMealDraft
    ) -> ConsumedMeal:
        """Overwrite the editable columns of a consumed meal."""
        response = (
            self.client.table("consumed_meals")
            .update(_draft_payload(draft))
            .eq("id", consumed_meal_id)
            .eq("user_id", user_id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update consumed meal")
        return _parse_row(response.data[0])

    def delete_consumed_meal(self, consumed_meal_id: str) -> None:
        """Delete a consumed meal row."""
        self.client.table("consumed_meals").delete().eq(
            "id", consumed_meal_id
        ).execute()

    def get_consumed_meal(self, consumed_meal_id: str) -> ConsumedMeal | None:
        """Return a consumed meal by id."""
        response = (
            self.client.table("consumed_meals")
            .select(_COLUMNS)
            .eq("id", consumed_meal_id)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_row(response.data[0])
        return None

    def list_by_user(self, user_id: str) -> list[ConsumedMeal]:
        """Return all consumed meals of a user, newest date first."""
        response = (
            self.client.table("consumed_meals")
            .select(_COLUMNS)
            .eq("user_id", user_id)
            .order("date", desc=True)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def list_by_date(self, user_id: str, day: date) -> list[ConsumedMeal]:
        """Return consumed meals logged for a day."""
        response = (
            self.client.table("consumed_meals")
            .select(_COLUMNS)
            .eq("user_id", user_id)
            .eq("date", day.isoformat())
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def list_by_date_range(
        self, user_id: str, start: date, end: date
    ) -> list[ConsumedMeal]:
        """Return consumed meals between two days inclusive."""
        response = (
            self.client.table("consumed_meals")
            .select(_COLUMNS)
            .eq("user_id", user_id)
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _draft_payload(draft: ConsumedMealDraft) -> dict[str, object]:
    return {
        "meal_id": draft.meal_id,
        "meal_name": draft.meal_name,
        "meal_type": draft.meal_type.value,
        "calories": draft.calories,
        "date": draft.date.isoformat(),
    }


def _parse_row(row: dict[str, object]) -> ConsumedMeal:
    created_at_raw = row.get("created_at")
    created_at = (
        datetime.fromisoformat(created_at_raw)
        if isinstance(created_at_raw, str) and created_at_raw
        else datetime.min
    )
    return ConsumedMeal(
        id=str(row["id"]),
        user_id=str(row.get("user_id", "")),
        meal_id=str(row.get("meal_id", "")),
        meal_name=str(row.get("meal_name", "")),
        meal_type=MealType(row.get("meal_type")),
        calories=float(row.get("calories", 0.0)),
        date=date.fromisoformat(str(row.get("date"))[:10]),
        created_at=created_at,
    )
