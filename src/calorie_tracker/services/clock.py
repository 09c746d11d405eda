"""Single source of the current calendar day."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    """Provides the current date and time."""

    def today(self) -> date:
        """Return the current calendar day."""

    def now(self) -> datetime:
        """Return the current timezone-aware instant."""


@dataclass
class SystemClock(Clock):
    """Clock reading the system time in a fixed timezone."""

    timezone_name: str = "UTC"

    def today(self) -> date:
        """Return today's date in the configured timezone."""
        return datetime.now(tz=ZoneInfo(self.timezone_name)).date()

    def now(self) -> datetime:
        """Return the current UTC instant."""
        return datetime.now(tz=UTC)
