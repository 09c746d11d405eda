"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from calorie_tracker.adapters.mealdb_client import HttpxMealDbClient
from calorie_tracker.adapters.supabase_auth_client import SupabaseAuthGateway
from calorie_tracker.adapters.supabase_consumed_meal_repository import (
    SupabaseConsumedMealRepository,
)
from calorie_tracker.adapters.supabase_user_repository import SupabaseUserRepository
from calorie_tracker.config import Settings
from calorie_tracker.services.cache import InMemoryCache
from calorie_tracker.services.catalog import CatalogService
from calorie_tracker.services.clock import Clock, SystemClock
from calorie_tracker.services.meals import ConsumedMealService
from calorie_tracker.services.stats import StatsService
from calorie_tracker.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    clock: Clock
    user_service: UserService
    catalog_service: CatalogService
    consumed_meal_service: ConsumedMealService
    stats_service: StatsService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    clock = SystemClock(resolved_settings.timezone)
    consumed_meal_repository = SupabaseConsumedMealRepository(supabase_client)
    user_service = UserService(
        repository=SupabaseUserRepository(supabase_client),
        auth=SupabaseAuthGateway(supabase_client),
    )
    mealdb_client = HttpxMealDbClient.create(resolved_settings.mealdb_base_url)
    catalog_service = CatalogService(
        client=mealdb_client,
        cache=InMemoryCache(),
        debug=resolved_settings.catalog_debug,
    )
    consumed_meal_service = ConsumedMealService(
        repository=consumed_meal_repository, clock=clock
    )
    stats_service = StatsService(repository=consumed_meal_repository, clock=clock)

    async def close_resources() -> None:
        await mealdb_client.close()

    return AppContainer(
        settings=resolved_settings,
        clock=clock,
        user_service=user_service,
        catalog_service=catalog_service,
        consumed_meal_service=consumed_meal_service,
        stats_service=stats_service,
        close_resources=close_resources,
    )
