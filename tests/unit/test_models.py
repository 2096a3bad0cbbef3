"""Unit tests for Pydantic models validation."""

from datetime import date

import pytest
from pydantic import ValidationError

from src.models.models import (
    GeneratedRecipe,
    GenerationRequest,
    GroceryItem,
    GroceryList,
    Ingredient,
    IngredientCategory,
    MealPlan,
    Recipe,
    ShoppingCategory,
)
from src.utils.errors import GroceryItemNotFoundError


class TestIngredientCategory:
    """Test category token coercion."""

    @pytest.mark.parametrize(
        "token,expected",
        [
            ("produce", IngredientCategory.PRODUCE),
            ("DAIRY", IngredientCategory.DAIRY),
            ("  Meat ", IngredientCategory.MEAT),
            ("canned_goods", IngredientCategory.CANNED_GOODS),
            ("Canned   Goods", IngredientCategory.CANNED_GOODS),
            ("seafood", IngredientCategory.OTHER),
            ("", IngredientCategory.OTHER),
            (None, IngredientCategory.OTHER),
        ],
    )
    def test_coerce(self, token, expected):
        assert IngredientCategory.coerce(token) is expected

    def test_shopping_categories_mirror_ingredient_categories(self):
        """Every ingredient category has a shopping section of the same name."""
        assert [c.name for c in IngredientCategory] == [c.name for c in ShoppingCategory]
        assert len(ShoppingCategory) == 11


class TestIngredient:
    """Test Ingredient model validation."""

    def test_valid_ingredient(self):
        ingredient = Ingredient(name="  Tomato ", amount=" 2 cups ", category="produce")
        assert ingredient.name == "Tomato"
        assert ingredient.amount == "2 cups"
        assert ingredient.category is IngredientCategory.PRODUCE

    def test_defaults(self):
        ingredient = Ingredient(name="Salt")
        assert ingredient.amount == ""
        assert ingredient.category is IngredientCategory.OTHER

    def test_unknown_category_becomes_other(self):
        assert Ingredient(name="Squid", category="seafood").category is IngredientCategory.OTHER

    def test_numeric_and_missing_amounts_coerced(self):
        """Provider output sometimes carries numbers or nulls for amounts."""
        assert Ingredient(name="Eggs", amount=2).amount == "2"
        assert Ingredient(name="Milk", amount=1.5).amount == "1.5"
        assert Ingredient(name="Salt", amount=None).amount == ""

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Ingredient(name="   ")
        assert "name" in str(exc.value)


class TestRecipe:
    """Test stored Recipe model."""

    def test_accepts_camel_case_aliases(self):
        recipe = Recipe.model_validate(
            {
                "id": "r1",
                "ownerId": "user-1",
                "title": "Pasta",
                "cookTime": "20 minutes",
                "estimatedCalories": 450,
                "dietaryTags": ["vegetarian"],
            }
        )
        assert recipe.owner_id == "user-1"
        assert recipe.cook_time == "20 minutes"
        assert recipe.estimated_calories == 450
        assert recipe.dietary_tags == ["vegetarian"]

    def test_defaults(self):
        recipe = Recipe(id="r1", owner_id="u1", title="Soup")
        assert recipe.ingredients == []
        assert recipe.cuisine == "General"
        assert recipe.difficulty == "medium"
        assert recipe.servings == 4

    def test_title_too_long(self):
        with pytest.raises(ValidationError):
            Recipe(id="r1", owner_id="u1", title="x" * 101)

    def test_invalid_difficulty(self):
        with pytest.raises(ValidationError):
            Recipe(id="r1", owner_id="u1", title="Soup", difficulty="extreme")


class TestMealPlan:
    """Test MealPlan day operations."""

    def make_plan(self, **daily_plan):
        return MealPlan.model_validate({"id": "mp1", "ownerId": "u1", "dailyPlan": daily_plan})

    def test_recipe_ids_week_order_without_duplicates(self):
        plan = self.make_plan(sunday=["r3"], monday=["r1", "r2"], wednesday=["r1"])
        assert plan.recipe_ids() == ["r1", "r2", "r3"]

    def test_empty_plan_has_no_recipes(self):
        assert self.make_plan().recipe_ids() == []

    def test_add_recipe_to_day_skips_duplicates(self):
        plan = self.make_plan()
        plan.add_recipe_to_day("Monday", "r1")
        plan.add_recipe_to_day("monday", "r1")
        assert plan.day_recipes("monday") == ["r1"]

    def test_remove_recipe_from_day(self):
        plan = self.make_plan(tuesday=["r1", "r2"])
        plan.remove_recipe_from_day("tuesday", "r1")
        assert plan.day_recipes("tuesday") == ["r2"]

    def test_unknown_day_rejected(self):
        with pytest.raises(ValueError, match="Unknown day"):
            self.make_plan().add_recipe_to_day("funday", "r1")

    def test_week_dates_and_notes(self):
        plan = MealPlan(id="mp1", owner_id="u1", week_start="2026-10-19", notes="Batch cook on Sunday")
        assert plan.week_start == date(2026, 10, 19)

        with pytest.raises(ValidationError):
            MealPlan(id="mp1", owner_id="u1", notes="x" * 501)


class TestGroceryList:
    """Test GroceryList item edits."""

    def test_items_get_unique_ids(self):
        first, second = GroceryItem(name="Milk"), GroceryItem(name="Milk")
        assert first.id and second.id
        assert first.id != second.id

    def test_add_item_defaults_to_produce(self):
        grocery_list = GroceryList()
        item = grocery_list.add_item("  Apples ")
        assert item.name == "Apples"
        assert item.category is ShoppingCategory.PRODUCE
        assert item.quantity == 1
        assert grocery_list.items == [item]

    def test_toggle_item(self):
        grocery_list = GroceryList()
        item = grocery_list.add_item("Apples")
        assert grocery_list.toggle_item(item.id).checked is True
        assert grocery_list.toggle_item(item.id).checked is False

    def test_update_item_clamps_quantity(self):
        grocery_list = GroceryList()
        item = grocery_list.add_item("Apples")

        grocery_list.update_item(item.id, quantity=0, unit=" kg ", checked=True)

        assert item.quantity == 1
        assert item.unit == "kg"
        assert item.checked is True

    def test_remove_item(self):
        grocery_list = GroceryList()
        item = grocery_list.add_item("Apples")
        grocery_list.remove_item(item.id)
        assert grocery_list.items == []

    def test_missing_item_raises(self):
        with pytest.raises(GroceryItemNotFoundError):
            GroceryList().toggle_item("nope")

    def test_edits_touch_updated_at(self):
        grocery_list = GroceryList()
        before = grocery_list.updated_at
        grocery_list.add_item("Apples")
        assert grocery_list.updated_at >= before


class TestGenerationRequest:
    """Test GenerationRequest validation."""

    def test_valid_camel_case_request(self):
        request = GenerationRequest.model_validate(
            {
                "ingredients": ["mushroom", " onion "],
                "cuisineType": "French",
                "dietaryPreferences": ["vegetarian"],
                "maxCookTime": 30,
                "difficulty": "HARD",
                "servings": 2,
            }
        )
        assert request.ingredients == ["mushroom", "onion"]
        assert request.max_cook_time == 30
        assert request.difficulty == "hard"
        assert request.diet == "vegetarian"

    def test_optional_fields_default_to_none(self):
        request = GenerationRequest(ingredients=["egg"])
        assert request.max_cook_time is None
        assert request.difficulty is None
        assert request.servings is None
        assert request.diet is None

    def test_empty_ingredient_list_rejected(self):
        with pytest.raises(ValidationError):
            GenerationRequest(ingredients=[])

    def test_blank_ingredient_rejected(self):
        with pytest.raises(ValidationError) as exc:
            GenerationRequest(ingredients=["egg", "  "])
        assert "Ingredient cannot be empty" in str(exc.value)

    def test_overlong_ingredient_rejected(self):
        with pytest.raises(ValidationError) as exc:
            GenerationRequest(ingredients=["x" * 51])
        assert "at most 50 characters" in str(exc.value)

    def test_too_many_ingredients_rejected(self):
        with pytest.raises(ValidationError):
            GenerationRequest(ingredients=[f"item {n}" for n in range(51)])

    @pytest.mark.parametrize("field,value", [("max_cook_time", 5), ("max_cook_time", 301), ("servings", 0), ("servings", 13)])
    def test_out_of_range_numbers_rejected(self, field, value):
        with pytest.raises(ValidationError):
            GenerationRequest(ingredients=["egg"], **{field: value})

    def test_any_difficulty_accepted(self):
        assert GenerationRequest(ingredients=["egg"], difficulty="Any").difficulty == "any"

    def test_invalid_difficulty_rejected(self):
        with pytest.raises(ValidationError):
            GenerationRequest(ingredients=["egg"], difficulty="extreme")


class TestGeneratedRecipe:
    """Test GeneratedRecipe coercion of loose provider output."""

    def test_loose_fields_coerced(self):
        recipe = GeneratedRecipe.model_validate(
            {
                "title": "Omelette",
                "ingredients": [{"name": "Eggs", "amount": 3, "category": "DAIRY"}],
                "instructions": ["Whisk", "Cook"],
                "cookTime": 10,
                "estimatedCalories": 310.6,
                "difficulty": None,
            }
        )
        assert recipe.cook_time == "10 minutes"
        assert recipe.estimated_calories == 311
        assert recipe.difficulty == "medium"
        assert recipe.ingredients[0].amount == "3"
        assert recipe.ingredients[0].category is IngredientCategory.DAIRY

    def test_instructions_required(self):
        with pytest.raises(ValidationError):
            GeneratedRecipe(title="Nothing", instructions=[])

    def test_serializes_with_camel_case_aliases(self):
        recipe = GeneratedRecipe(title="Toast", instructions=["Toast bread"], cook_time="5 minutes")
        data = recipe.model_dump(by_alias=True)
        assert data["cookTime"] == "5 minutes"
        assert data["estimatedCalories"] == 0
