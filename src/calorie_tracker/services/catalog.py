"""Recipe catalog service backed by TheMealDB."""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from calorie_tracker.adapters.mealdb_client import MealCatalogClient
from calorie_tracker.domain.catalog import (
    CatalogMeal,
    CatalogOverview,
    Ingredient,
    MealCategory,
)
from calorie_tracker.services.cache import Cache

MAX_INGREDIENT_SLOTS = 20
DEFAULT_RANDOM_COUNT = 20

_logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


@dataclass
class CatalogService:
    """Service for catalog lookups with caching."""

    client: MealCatalogClient
    cache: Cache
    search_ttl_seconds: int = 3600
    meal_ttl_seconds: int = 86400
    debug: bool = False
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search(self, query: str) -> list[CatalogMeal]:
        """Search catalog meals by name."""
        cache_key = f"mealdb:search:{query.strip().lower()}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        payload = await self._call_with_retry(
            lambda: self.client.search_meals(query.strip()), action="search"
        )
        meals = [_parse_meal(raw) for raw in _meals_of(payload)]
        self.cache.set(cache_key, meals, ttl_seconds=self.search_ttl_seconds)
        if self.debug:
            _logger.info("Catalog search: query=%s results=%s", query, len(meals))
        return meals

    async def by_category(self, category: str) -> list[CatalogMeal]:
        """Return the meals of a category."""
        cache_key = f"mealdb:category:{category}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        payload = await self._call_with_retry(
            lambda: self.client.filter_by_category(category),
            action=f"category:{category}",
        )
        meals = [
            _parse_meal({**raw, "strCategory": category})
            for raw in _meals_of(payload)
        ]
        self.cache.set(cache_key, meals, ttl_seconds=self.search_ttl_seconds)
        return meals

    async def get_meal(self, meal_id: str) -> CatalogMeal | None:
        """Return a meal with its ingredients, or None when unknown."""
        cache_key = f"mealdb:meal:{meal_id}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, CatalogMeal):
            return cached

        payload = await self._call_with_retry(
            lambda: self.client.lookup_meal(meal_id), action=f"lookup:{meal_id}"
        )
        meals = _meals_of(payload)
        if not meals:
            return None
        meal = _parse_meal(meals[0])
        self.cache.set(cache_key, meal, ttl_seconds=self.meal_ttl_seconds)
        return meal

    async def categories(self) -> list[MealCategory]:
        """Return every catalog category."""
        cache_key = "mealdb:categories"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        payload = await self._call_with_retry(
            self.client.list_categories, action="categories"
        )
        categories = [
            MealCategory(
                id=str(raw.get("idCategory", "")),
                name=str(raw.get("strCategory", "")),
                thumbnail_url=raw.get("strCategoryThumb"),
                description=raw.get("strCategoryDescription"),
            )
            for raw in payload.get("categories") or []
        ]
        self.cache.set(cache_key, categories, ttl_seconds=self.meal_ttl_seconds)
        return categories

    async def random_meals(self, count: int = DEFAULT_RANDOM_COUNT) -> list[CatalogMeal]:
        """Fetch a random sample of meals concurrently."""
        payloads = await asyncio.gather(
            *(
                self._call_with_retry(self.client.random_meal, action="random")
                for _ in range(count)
            )
        )
        meals = []
        for payload in payloads:
            raw_meals = _meals_of(payload)
            if raw_meals:
                meals.append(_parse_meal(raw_meals[0]))
        return meals

    async def browse(self, count: int = DEFAULT_RANDOM_COUNT) -> CatalogOverview:
        """Load categories and a random sample together."""
        categories, meals = await asyncio.gather(
            self.categories(), self.random_meals(count)
        )
        return CatalogOverview(categories=categories, meals=meals)

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, action: str
    ) -> dict[str, object]:
        """Call an async function with a short retry."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                if self.debug:
                    _logger.warning(
                        "Catalog %s failed (attempt %s/%s, status=%s): %s",
                        action,
                        attempt,
                        self.retry_attempts + 1,
                        _status_code_from_exception(exc),
                        exc,
                    )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def extract_ingredients(raw: dict[str, object]) -> tuple[Ingredient, ...]:
    """Collect the numbered ingredient and measure fields of a recipe."""
    ingredients = []
    for slot in range(1, MAX_INGREDIENT_SLOTS + 1):
        name = raw.get(f"strIngredient{slot}")
        if not isinstance(name, str) or not name.strip():
            continue
        measure = raw.get(f"strMeasure{slot}")
        ingredients.append(
            Ingredient(
                name=name.strip(),
                measure=measure.strip() if isinstance(measure, str) else "",
            )
        )
    return tuple(ingredients)


def filter_meals(
    meals: list[CatalogMeal], query: str | None = None, category: str | None = None
) -> list[CatalogMeal]:
    """Filter loaded meals by name substring and exact category."""
    filtered = meals
    if query:
        needle = query.lower()
        filtered = [meal for meal in filtered if needle in meal.name.lower()]
    if category:
        filtered = [meal for meal in filtered if meal.category == category]
    return filtered


def _meals_of(payload: dict[str, object]) -> list[dict[str, object]]:
    meals = payload.get("meals")
    return meals if isinstance(meals, list) else []


def _parse_meal(raw: dict[str, object]) -> CatalogMeal:
    return CatalogMeal(
        id=str(raw.get("idMeal", "")),
        name=str(raw.get("strMeal", "")),
        category=raw.get("strCategory"),
        area=raw.get("strArea"),
        instructions=raw.get("strInstructions"),
        thumbnail_url=raw.get("strMealThumb"),
        youtube_url=raw.get("strYoutube") or None,
        ingredients=extract_ingredients(raw),
    )


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"
