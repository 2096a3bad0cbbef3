"""Unit tests for shopping section mapping and grouping."""

import pytest

from src.grocery.categories import capitalize_category, group_by_category, to_shopping_category
from src.models.models import GroceryItem, Ingredient, IngredientCategory, ShoppingCategory


class TestCapitalizeCategory:

    @pytest.mark.parametrize(
        "token,expected",
        [
            ("produce", "Produce"),
            ("DAIRY", "Dairy"),
            ("canned goods", "Canned Goods"),
            ("CANNED_GOODS", "Canned Goods"),
            ("xyz", "Other"),
            ("", "Other"),
            (None, "Other"),
        ],
    )
    def test_capitalize(self, token, expected):
        assert capitalize_category(token) == expected


class TestToShoppingCategory:

    def test_enum_maps_by_name(self):
        assert to_shopping_category(IngredientCategory.CANNED_GOODS) is ShoppingCategory.CANNED_GOODS

    def test_free_text_tokens(self):
        assert to_shopping_category("MEAT") is ShoppingCategory.MEAT
        assert to_shopping_category("canned goods") is ShoppingCategory.CANNED_GOODS

    @pytest.mark.parametrize("token", ["seafood", "", None])
    def test_unknown_becomes_other(self, token):
        assert to_shopping_category(token) is ShoppingCategory.OTHER

    def test_shopping_category_passes_through(self):
        assert to_shopping_category(ShoppingCategory.BAKERY) is ShoppingCategory.BAKERY


class TestGroupByCategory:
    """Test group_by_category ordering and idempotence."""

    def test_sections_follow_fixed_order(self):
        items = [
            Ingredient(name="Salt", category="spices"),
            Ingredient(name="Milk", category="dairy"),
            Ingredient(name="Apple", category="produce"),
            Ingredient(name="Mystery", category="unknown"),
        ]

        grouped = group_by_category(items)

        assert list(grouped) == ["Produce", "Dairy", "Spices", "Other"]
        assert grouped["Other"][0].name == "Mystery"

    def test_input_order_kept_within_section(self):
        items = [Ingredient(name="Kale", category="produce"), Ingredient(name="Apple", category="produce")]
        assert [i.name for i in group_by_category(items)["Produce"]] == ["Kale", "Apple"]

    def test_empty_input(self):
        assert group_by_category([]) == {}

    def test_include_empty_returns_all_sections(self):
        grouped = group_by_category([], include_empty=True)
        assert list(grouped) == [c.value for c in ShoppingCategory]
        assert all(members == [] for members in grouped.values())

    def test_grocery_items_group_by_shopping_category(self):
        items = [GroceryItem(name="Bread", category=ShoppingCategory.BAKERY), GroceryItem(name="Tea")]
        grouped = group_by_category(items)
        assert list(grouped) == ["Bakery", "Other"]

    def test_idempotent(self):
        items = [
            Ingredient(name="Beans", category="canned goods"),
            Ingredient(name="Ice cream", category="frozen"),
            Ingredient(name="Chips", category="snacks"),
        ]
        once = group_by_category(items)
        flattened = [item for members in once.values() for item in members]
        assert group_by_category(flattened) == once
