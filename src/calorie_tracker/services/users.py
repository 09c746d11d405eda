"""User-related business logic."""

import logging
import math
from dataclasses import dataclass
from typing import Protocol

from calorie_tracker.domain.body import BodyMetrics
from calorie_tracker.domain.models import AuthSession, Gender, UserProfile
from calorie_tracker.errors import AuthenticationError, NotFoundError, ValidationError
from calorie_tracker.services.body_metrics import compute_body_metrics

_logger = logging.getLogger(__name__)

_POSITIVE_NUMBER_FIELDS = ("height_cm", "weight_kg", "target_weight_kg")
_POSITIVE_INT_FIELDS = ("age", "daily_calorie_goal")
EDITABLE_FIELDS = frozenset(
    {"display_name", "gender", *_POSITIVE_NUMBER_FIELDS, *_POSITIVE_INT_FIELDS}
)


class UserRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: str) -> UserProfile | None:
        """Return the profile for a user id, if present."""

    def create_profile(self, profile: UserProfile) -> UserProfile:
        """Store and return a new profile."""

    def update_profile(self, user_id: str, changes: dict[str, object]) -> UserProfile:
        """Apply field changes and return the updated profile."""


class AuthGateway(Protocol):
    """Interface for the hosted authentication backend."""

    def sign_up(self, email: str, password: str) -> str:
        """Create an account and return its user id."""

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Exchange credentials for an access token."""

    def get_user_id(self, access_token: str) -> str | None:
        """Return the user id an access token belongs to."""


@dataclass
class UserService:
    """Application service for accounts and profiles."""

    repository: UserRepository
    auth: AuthGateway

    def register(self, email: str, password: str, display_name: str) -> UserProfile:
        """Create an account and its empty profile."""
        if not email or "@" not in email:
            raise ValidationError("A valid email is required")
        if not display_name.strip():
            raise ValidationError("A display name is required")
        user_id = self.auth.sign_up(email, password)
        profile = self.repository.create_profile(
            UserProfile(id=user_id, email=email, display_name=display_name.strip())
        )
        _logger.info("User registered", extra={"user_id": user_id})
        return profile

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign a user in with email and password."""
        return self.auth.sign_in(email, password)

    def authenticate(self, access_token: str | None) -> UserProfile:
        """Resolve an access token to the caller's profile."""
        if not access_token:
            raise AuthenticationError("Missing access token")
        user_id = self.auth.get_user_id(access_token)
        if user_id is None:
            raise AuthenticationError("Invalid access token")
        profile = self.repository.get_profile(user_id)
        if profile is None:
            raise AuthenticationError("No profile for this account")
        return profile

    def get_profile(self, user_id: str) -> UserProfile:
        """Return a profile or raise when it is unknown."""
        profile = self.repository.get_profile(user_id)
        if profile is None:
            raise NotFoundError(f"User {user_id} not found")
        return profile

    def update_profile(self, user_id: str, changes: dict[str, object]) -> UserProfile:
        """Validate and apply profile changes; None clears a field."""
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be edited: {sorted(unknown)}")
        cleaned = {name: _clean_field(name, value) for name, value in changes.items()}
        profile = self.get_profile(user_id)
        if not cleaned:
            return profile
        return self.repository.update_profile(user_id, cleaned)

    def get_body_metrics(self, profile: UserProfile) -> BodyMetrics:
        """Return BMI and recommended intake for a profile."""
        return compute_body_metrics(profile)


def _clean_field(name: str, value: object) -> object:
    if name == "display_name":
        if not isinstance(value, str) or not value.strip():
            raise ValidationError("Display name cannot be empty")
        return value.strip()
    if value is None:
        return None
    if name == "gender":
        try:
            return Gender(str(value))
        except ValueError as exc:
            raise ValidationError(f"Unknown gender: {value}") from exc
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ValidationError(f"{name} must be a number")
    if not math.isfinite(value) or value <= 0:
        raise ValidationError(f"{name} must be a positive number")
    if name in _POSITIVE_INT_FIELDS:
        if int(value) != value:
            raise ValidationError(f"{name} must be a whole number")
        return int(value)
    return float(value)
