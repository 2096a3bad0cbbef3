"""Grocery list generation from recipes and meal plans.

Two entry points:

1. from_recipes(): explicit recipe ids -> flat list of GroceryItem lines
   - every id must resolve to a recipe owned by the caller (all-or-nothing)
   - items get a fresh uuid4, display category, quantity=1, checked=False
2. from_meal_plan(): meal plan id -> ingredients grouped by shopping section
   - source is every recipe scheduled on any of the seven days
   - empty sections are omitted

Both read through a RecipeRepository and return values; persisting the
result is the caller's job.
"""

from collections.abc import Sequence
from typing import List, Optional

from src.grocery.aggregation import aggregate_ingredients
from src.grocery.amounts import unit_of
from src.grocery.categories import group_by_category, to_shopping_category
from src.grocery.repository import RecipeRepository
from src.models.models import (
    GroceryItem,
    GroceryList,
    GroceryListResult,
    Ingredient,
    Recipe,
    RecipeSummary,
)
from src.utils.config import config
from src.utils.errors import (
    EmptyGroceryListError,
    InvalidRequestError,
    MealPlanAccessError,
    MealPlanNotFoundError,
    RecipeAccessError,
)
from src.utils.logger import logger


def to_grocery_item(ingredient: Ingredient) -> GroceryItem:
    """Turn a consolidated ingredient into a fresh, unchecked list line."""
    return GroceryItem(
        name=ingredient.name,
        amount=ingredient.amount,
        category=to_shopping_category(ingredient.category),
        quantity=1,
        unit=unit_of(ingredient.amount),
        checked=False,
    )


class GroceryListService:
    """Builds grocery lists for one repository."""

    def __init__(self, repository: RecipeRepository) -> None:
        self.repository = repository

    def _load_owned_recipes(self, recipe_ids: Sequence[str], owner_id: str) -> List[Recipe]:
        unique_ids = list(dict.fromkeys(recipe_ids))
        recipes = self.repository.find_recipes_by_ids(unique_ids, owner_id) if unique_ids else []
        if len(recipes) != len(unique_ids):
            logger.warning(
                f"Recipe lookup mismatch: requested {len(unique_ids)}, found {len(recipes)}",
                extra={"owner_id": owner_id},
            )
            raise RecipeAccessError(requested=len(unique_ids), found=len(recipes))
        return recipes

    def from_recipes(self, recipe_ids: Sequence[str], owner_id: str) -> GroceryListResult:
        """Build grocery items from the caller's recipes.

        Args:
            recipe_ids: At least one recipe id; duplicates are collapsed.
            owner_id: The caller, who must own every recipe.

        Returns:
            GroceryListResult with the items and an id/title summary of the recipes used.

        Raises:
            InvalidRequestError: No ids, or a blank id.
            RecipeAccessError: Any id missing or owned by someone else.
            EmptyGroceryListError: The recipes have no usable ingredients.
        """
        if not recipe_ids:
            raise InvalidRequestError("At least one recipe ID is required")
        if any(not str(recipe_id or "").strip() for recipe_id in recipe_ids):
            raise InvalidRequestError("Valid recipe ID is required")

        recipes = self._load_owned_recipes(recipe_ids, owner_id)

        items = []
        for ingredient in aggregate_ingredients(recipes):
            if not ingredient.name:
                logger.warning(f"Skipping ingredient without a name (amount={ingredient.amount!r})")
                continue
            items.append(to_grocery_item(ingredient))

        if not items:
            raise EmptyGroceryListError()

        logger.info(
            "Generated grocery items from recipes",
            extra={"owner_id": owner_id, "recipe_count": len(recipes), "item_count": len(items)},
        )
        return GroceryListResult(
            items=items,
            recipes=[RecipeSummary(id=recipe.id, title=recipe.title) for recipe in recipes],
        )

    def from_meal_plan(self, meal_plan_id: str, owner_id: str) -> dict[str, List[Ingredient]]:
        """Consolidate every recipe of a weekly plan, grouped by shopping section.

        Raises:
            MealPlanNotFoundError: Unknown plan id.
            MealPlanAccessError: Plan owned by someone else.
            RecipeAccessError: A scheduled recipe is missing or not owned by the caller.
        """
        meal_plan = self.repository.find_meal_plan_by_id(meal_plan_id)
        if meal_plan is None:
            raise MealPlanNotFoundError(meal_plan_id)
        if meal_plan.owner_id != owner_id:
            raise MealPlanAccessError(meal_plan_id)

        recipes = self._load_owned_recipes(meal_plan.recipe_ids(), owner_id)
        grouped = group_by_category(aggregate_ingredients(recipes))

        logger.info(
            f"Generated grocery list from meal plan {meal_plan_id}: {len(grouped)} section(s)",
            extra={"owner_id": owner_id, "recipe_count": len(recipes)},
        )
        return grouped

    def build_list(self, result: GroceryListResult, name: Optional[str] = None) -> GroceryList:
        """Wrap generated items in a GroceryList ready to be saved."""
        return GroceryList(name=name or config.GROCERY_LIST_NAME, items=result.items)
