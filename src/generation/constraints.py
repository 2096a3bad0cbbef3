"""Constraint enforcement and servings scaling for generated recipes.

Both functions return new GeneratedRecipe instances; the input recipe is
left untouched.
"""

import re

from src.grocery.amounts import scale_amount
from src.models.models import GeneratedRecipe, GenerationRequest
from src.utils.config import config
from src.utils.logger import logger


COOK_TIME_MINUTES = re.compile(r"(\d+)")
# Cook time assumed when a recipe's cook time carries no number
UNPARSEABLE_COOK_TIME = 60


def cook_time_minutes(cook_time: str) -> int:
    match = COOK_TIME_MINUTES.search(cook_time or "")
    return int(match.group(1)) if match else UNPARSEABLE_COOK_TIME


def enforce_constraints(recipe: GeneratedRecipe, request: GenerationRequest) -> GeneratedRecipe:
    """Apply the request's hard constraints to a recipe.

    - cook time above the cap (request or configured default) becomes
      exactly "{cap} minutes"
    - a requested difficulty other than "any" replaces the recipe's
    - requested servings replace the recipe's
    """
    updates = {}

    cap = request.max_cook_time or config.DEFAULT_MAX_COOK_TIME
    if cook_time_minutes(recipe.cook_time) > cap:
        updates["cook_time"] = f"{cap} minutes"

    if request.difficulty and request.difficulty != "any":
        updates["difficulty"] = request.difficulty.lower()

    if request.servings:
        updates["servings"] = request.servings

    if updates:
        logger.debug(f"Constraints applied to '{recipe.title}': {sorted(updates)}")
    return recipe.model_copy(update=updates)


def scale_to_servings(recipe: GeneratedRecipe, baseline: int = 4) -> GeneratedRecipe:
    """Scale ingredient amounts from ``baseline`` servings to ``recipe.servings``.

    Only "{number} {rest}" amounts are rewritten (number * multiplier,
    rounded to one decimal); "200g" or "to taste" are kept as-is.
    """
    if recipe.servings == baseline or baseline <= 0:
        return recipe

    multiplier = recipe.servings / baseline
    ingredients = [
        ingredient.model_copy(update={"amount": scale_amount(ingredient.amount, multiplier)})
        for ingredient in recipe.ingredients
    ]
    logger.debug(f"Scaled '{recipe.title}' from {baseline} to {recipe.servings} servings (x{multiplier:g})")
    return recipe.model_copy(update={"ingredients": ingredients})
