"""Persistence contract consumed by the grocery list service.

The service only reads recipes and meal plans; storing results is left to
the caller. ``InMemoryRepository`` backs the CLI and the tests.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from typing import List, Optional

from src.models.models import MealPlan, Recipe


class RecipeRepository(ABC):
    @abstractmethod
    def find_recipes_by_ids(self, ids: Sequence[str], owner_id: str) -> List[Recipe]:
        """Return the recipes among ``ids`` owned by ``owner_id``; unknown ids are skipped."""

    @abstractmethod
    def find_meal_plan_by_id(self, meal_plan_id: str) -> Optional[MealPlan]:
        """Return the meal plan or None."""


class InMemoryRepository(RecipeRepository):
    """Dictionary-backed repository."""

    def __init__(self, recipes: Iterable[Recipe] = (), meal_plans: Iterable[MealPlan] = ()) -> None:
        self.recipes: dict[str, Recipe] = {recipe.id: recipe for recipe in recipes}
        self.meal_plans: dict[str, MealPlan] = {plan.id: plan for plan in meal_plans}

    def add_recipe(self, recipe: Recipe) -> None:
        self.recipes[recipe.id] = recipe

    def add_meal_plan(self, meal_plan: MealPlan) -> None:
        self.meal_plans[meal_plan.id] = meal_plan

    def find_recipes_by_ids(self, ids: Sequence[str], owner_id: str) -> List[Recipe]:
        found = []
        for recipe_id in dict.fromkeys(ids):
            recipe = self.recipes.get(recipe_id)
            if recipe is not None and recipe.owner_id == owner_id:
                found.append(recipe)
        return found

    def find_meal_plan_by_id(self, meal_plan_id: str) -> Optional[MealPlan]:
        return self.meal_plans.get(meal_plan_id)
