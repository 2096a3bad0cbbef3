"""Exception hierarchy for SmartChef.

Only request validation and access errors reach callers. Provider failures
are recovered inside the generation pipeline and degenerate ingredient data
is coerced rather than rejected, so neither has a public exception here
beyond ``RecipeGenerationError`` for the case where every provider failed.
"""


class SmartChefError(Exception):
    """Base exception for SmartChef."""


class InvalidRequestError(SmartChefError, ValueError):
    """Raised when a request is malformed (empty id list, bad field values)."""


class RecipeAccessError(SmartChefError):
    """Raised when referenced recipes are missing or owned by someone else."""

    def __init__(self, requested: int, found: int):
        self.requested = requested
        self.found = found
        super().__init__(
            f"Some recipes not found or access denied. Requested: {requested}, Found: {found}"
        )


class MealPlanNotFoundError(SmartChefError):
    """Raised when a meal plan id does not resolve."""

    def __init__(self, meal_plan_id: str):
        self.meal_plan_id = meal_plan_id
        super().__init__(f"Meal plan '{meal_plan_id}' not found")


class MealPlanAccessError(SmartChefError):
    """Raised when a meal plan belongs to another owner."""

    def __init__(self, meal_plan_id: str):
        self.meal_plan_id = meal_plan_id
        super().__init__(f"Access denied to meal plan '{meal_plan_id}'")


class EmptyGroceryListError(SmartChefError):
    """Raised when the selected recipes contribute no ingredients at all."""

    def __init__(self):
        super().__init__(
            "No ingredients found in the selected recipes. "
            "Please make sure your recipes have ingredients listed."
        )


class GroceryItemNotFoundError(SmartChefError, KeyError):
    """Raised when a grocery list item id does not exist."""

    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"Item '{item_id}' not found")

    def __str__(self) -> str:
        return self.args[0]


class RecipeGenerationError(SmartChefError):
    """Raised when no provider in the chain produced a recipe."""

    def __init__(self, reasons: list[str]):
        self.reasons = reasons
        super().__init__(f"Failed to generate recipe: {'; '.join(reasons) or 'no providers configured'}")
