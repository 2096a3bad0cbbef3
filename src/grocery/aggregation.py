"""Ingredient aggregation across recipes.

Folds the ingredient lists of several recipes into one consolidated list.
Two ingredients merge when their aggregation key matches; the key is the
lowercased name plus the category, so "Tomato"/produce and "tomato"/produce
merge while "Tomato"/produce and "tomatoes"/produce do not.

Stored data is read leniently: a missing category lands in "other" and a
missing name or amount becomes an empty string. Nothing here raises on
degenerate ingredients.
"""

from collections.abc import Iterable, Mapping
from typing import Any, List, Union

from src.grocery.amounts import combine_amounts
from src.models.models import Ingredient, IngredientCategory, Recipe
from src.utils.logger import logger


RecipeLike = Union[Recipe, Mapping[str, Any]]


def aggregation_key(ingredient: Ingredient) -> str:
    """Return ``lowercase(name) + "-" + category``."""
    return f"{ingredient.name.lower()}-{ingredient.category.value}"


def _field(source: Any, name: str) -> Any:
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def read_ingredient(raw: Any) -> Ingredient:
    """Build an Ingredient from a model or a raw mapping, coercing bad fields.

    Built with model_construct so an empty name comes through instead of raising.
    """
    name = _field(raw, "name")
    amount = _field(raw, "amount")
    return Ingredient.model_construct(
        name=str(name).strip() if name is not None else "",
        amount=str(amount).strip() if amount is not None else "",
        category=IngredientCategory.coerce(_field(raw, "category")),
    )


def aggregate_ingredients(recipes: Iterable[RecipeLike]) -> List[Ingredient]:
    """Merge the ingredients of ``recipes`` into one list.

    Order follows the first time each key is seen. Inputs are not modified;
    the first occurrence of a key is copied and later occurrences only
    contribute their amount (see ``combine_amounts``).

    Args:
        recipes: Stored recipes or raw recipe mappings with an ``ingredients`` list.

    Returns:
        Consolidated ingredient list; empty for no recipes or no ingredients.
    """
    merged: dict[str, Ingredient] = {}
    seen = 0

    for recipe in recipes:
        for raw in _field(recipe, "ingredients") or []:
            seen += 1
            ingredient = read_ingredient(raw)
            key = aggregation_key(ingredient)
            existing = merged.get(key)
            if existing is None:
                merged[key] = ingredient
            else:
                existing.amount = combine_amounts(existing.amount, ingredient.amount)

    logger.debug(f"Aggregated {seen} ingredient(s) into {len(merged)} line(s)")
    return list(merged.values())
