"""Tests for the system clock."""

from datetime import UTC, datetime

from calorie_tracker.services.clock import SystemClock


def test_system_clock_today_matches_utc_date() -> None:
    assert SystemClock("UTC").today() == datetime.now(tz=UTC).date()


def test_system_clock_now_is_aware() -> None:
    assert SystemClock().now().tzinfo is not None
