"""Supabase Auth gateway."""

import logging
from dataclasses import dataclass

from supabase import Client

from calorie_tracker.domain.models import AuthSession
from calorie_tracker.errors import AuthenticationError, ValidationError
from calorie_tracker.services.users import AuthGateway

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseAuthGateway(AuthGateway):
    """Email and password accounts through Supabase Auth."""

    client: Client

    def sign_up(self, email: str, password: str) -> str:
        """Create an account and return its user id."""
        try:
            response = self.client.auth.sign_up(
                {"email": email, "password": password}
            )
        except Exception as exc:
            raise ValidationError(f"Registration failed: {exc}") from exc
        if response.user is None:
            raise RuntimeError("Supabase did not return the created user")
        return str(response.user.id)

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Exchange email and password for an access token."""
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as exc:
            raise AuthenticationError("Invalid email or password") from exc
        if response.session is None or response.user is None:
            raise AuthenticationError("Sign-in did not return a session")
        return AuthSession(
            user_id=str(response.user.id),
            access_token=response.session.access_token,
        )

    def get_user_id(self, access_token: str) -> str | None:
        """Return the user id for an access token, or None if rejected."""
        try:
            response = self.client.auth.get_user(access_token)
        except Exception:
            _logger.warning("Access token rejected by Supabase", exc_info=True)
            return None
        if response is None or response.user is None:
            return None
        return str(response.user.id)
