"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

PERIODS = ("week", "month", "custom")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    mealdb_base_url: str = "https://www.themealdb.com/api/json/v1/1"
    timezone: str = "UTC"
    catalog_debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_period(raw: str | None) -> str:
    """Normalise a statistics period name, defaulting to a week."""
    if raw is None:
        return "week"
    cleaned = raw.strip().lower()
    if cleaned in {"", "7d"}:
        return "week"
    if cleaned == "30d":
        return "month"
    if cleaned not in PERIODS:
        raise ValueError(f"Unknown period: {raw}")
    return cleaned
