"""Shopping list sections.

Maps ingredient categories onto the fixed, ordered list of shopping sections
(``ShoppingCategory``) and groups items by section. The section order comes
from the enum declaration, never from the order items arrive in.
"""

from collections.abc import Iterable
from typing import Any, List, Optional, TypeVar

from src.models.models import IngredientCategory, ShoppingCategory


T = TypeVar("T")


def capitalize_category(token: Optional[str]) -> str:
    """Display form of a category token.

    "PRODUCE" -> "Produce", "canned goods" -> "Canned Goods"; empty or unknown
    tokens -> "Other".
    """
    return to_shopping_category(token).value


def to_shopping_category(category: Any) -> ShoppingCategory:
    """Resolve a declared category (enum or free text) to its shopping section.

    Unknown or empty categories collapse to ``ShoppingCategory.OTHER``.
    """
    if isinstance(category, ShoppingCategory):
        return category
    value = category.value if isinstance(category, IngredientCategory) else category
    return ShoppingCategory[IngredientCategory.coerce(value).name]


def group_by_category(items: Iterable[T], include_empty: bool = False) -> dict[str, List[T]]:
    """Group items by shopping section, in section order.

    Args:
        items: Anything with a ``category`` attribute (Ingredient, GroceryItem).
        include_empty: True returns all eleven sections even when empty, for
            consumers that fill sections themselves. The default drops empty
            sections.

    Returns:
        Mapping of section display name to items, preserving input order
        within each section.
    """
    grouped: dict[str, List[T]] = {category.value: [] for category in ShoppingCategory}
    for item in items:
        grouped[to_shopping_category(getattr(item, "category", None)).value].append(item)

    if include_empty:
        return grouped
    return {category: members for category, members in grouped.items() if members}
