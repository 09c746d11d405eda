"""Recipe catalog domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Ingredient:
    """A single ingredient line of a recipe."""

    name: str
    measure: str


@dataclass(frozen=True)
class CatalogMeal:
    """A recipe from the external meal catalog."""

    id: str
    name: str
    category: str | None = None
    area: str | None = None
    instructions: str | None = None
    thumbnail_url: str | None = None
    youtube_url: str | None = None
    ingredients: tuple[Ingredient, ...] = ()


@dataclass(frozen=True)
class MealCategory:
    """A catalog category."""

    id: str
    name: str
    thumbnail_url: str | None
    description: str | None


@dataclass(frozen=True)
class CatalogOverview:
    """Categories and a random meal sample loaded together."""

    categories: list[MealCategory]
    meals: list[CatalogMeal]
