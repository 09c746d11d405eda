"""Exceptions raised by application services."""


class CalorieTrackerError(Exception):
    """Base class for calorie tracker errors."""


class ValidationError(CalorieTrackerError):
    """Input rejected by a service."""


class NotFoundError(CalorieTrackerError):
    """Requested record does not exist or belongs to another user."""


class AuthenticationError(CalorieTrackerError):
    """Missing, invalid or expired credentials."""
