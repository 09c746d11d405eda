"""Supabase-backed user profile repository."""

from dataclasses import dataclass
from enum import Enum

from supabase import Client

from calorie_tracker.domain.models import Gender, UserProfile
from calorie_tracker.services.users import UserRepository

_COLUMNS = (
    "id, email, display_name, height_cm, weight_kg, age, gender, "
    "target_weight_kg, daily_calorie_goal, followers, following"
)


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for profile persistence."""

    client: Client

    def get_profile(self, user_id: str) -> UserProfile | None:
        """Return the profile for a user id, if present."""
        response = (
            self.client.table("users")
            .select(_COLUMNS)
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_row(response.data[0])
        return None

    def create_profile(self, profile: UserProfile) -> UserProfile:
        """Insert a profile row and return it."""
        response = (
            self.client.table("users")
            .insert(
                {
                    "id": profile.id,
                    "email": profile.email,
                    "display_name": profile.display_name,
                    "followers": list(profile.followers),
                    "following": list(profile.following),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _parse_row(response.data[0])

    def update_profile(self, user_id: str, changes: dict[str, object]) -> UserProfile:
        """Update profile columns and return the stored row."""
        payload = {
            column: value.value if isinstance(value, Enum) else value
            for column, value in changes.items()
        }
        response = (
            self.client.table("users").update(payload).eq("id", user_id).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update user in Supabase")
        return _parse_row(response.data[0])


def _parse_row(row: dict[str, object]) -> UserProfile:
    gender = row.get("gender")
    return UserProfile(
        id=str(row["id"]),
        email=str(row.get("email") or ""),
        display_name=str(row.get("display_name") or ""),
        height_cm=_optional_float(row.get("height_cm")),
        weight_kg=_optional_float(row.get("weight_kg")),
        age=_optional_int(row.get("age")),
        gender=Gender(gender) if gender else None,
        target_weight_kg=_optional_float(row.get("target_weight_kg")),
        daily_calorie_goal=_optional_int(row.get("daily_calorie_goal")),
        followers=list(row.get("followers") or []),
        following=list(row.get("following") or []),
    )


def _optional_float(value: object) -> float | None:
    return float(value) if value is not None else None


def _optional_int(value: object) -> int | None:
    return int(value) if value is not None else None
