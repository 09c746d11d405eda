"""TheMealDB recipe catalog API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class MealCatalogClient(Protocol):
    """Interface for recipe catalog API interactions."""

    async def search_meals(self, query: str) -> dict[str, object]:
        """Search meals by name and return raw API data."""

    async def filter_by_category(self, category: str) -> dict[str, object]:
        """List meals in a category and return raw API data."""

    async def lookup_meal(self, meal_id: str) -> dict[str, object]:
        """Fetch a meal by id and return raw API data."""

    async def list_categories(self) -> dict[str, object]:
        """List catalog categories and return raw API data."""

    async def random_meal(self) -> dict[str, object]:
        """Fetch one random meal and return raw API data."""


@dataclass
class HttpxMealDbClient(MealCatalogClient):
    """HTTPX-backed TheMealDB client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 15

    @classmethod
    def create(cls, base_url: str) -> "HttpxMealDbClient":
        """Create a catalog client with a managed httpx session."""
        return cls(base_url=base_url, http_client=httpx.AsyncClient())

    async def search_meals(self, query: str) -> dict[str, object]:
        """Search meals by name."""
        return await self._get("search.php", {"s": query})

    async def filter_by_category(self, category: str) -> dict[str, object]:
        """List meals in a category."""
        return await self._get("filter.php", {"c": category})

    async def lookup_meal(self, meal_id: str) -> dict[str, object]:
        """Fetch a meal by id."""
        return await self._get("lookup.php", {"i": meal_id})

    async def list_categories(self) -> dict[str, object]:
        """List catalog categories."""
        return await self._get("categories.php")

    async def random_meal(self) -> dict[str, object]:
        """Fetch one random meal."""
        return await self._get("random.php")

    async def _get(
        self, endpoint: str, params: dict[str, str] | None = None
    ) -> dict[str, object]:
        response = await self.http_client.get(
            f"{self.base_url}/{endpoint}",
            params=params,
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
