"""Data models and schemas for SmartChef.

Defines Pydantic models for request/response validation and domain objects.
All models use Pydantic v2; stored and provider-facing models accept camelCase
aliases (``cookTime``, ``dailyPlan``...) as well as their snake_case names.
"""

import re
import uuid
from datetime import date, datetime, timezone
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.utils.errors import GroceryItemNotFoundError


Difficulty = Literal["easy", "medium", "hard"]

WEEK_DAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

# First run of digits in loose provider values such as "450 kcal"
LEADING_INTEGER = re.compile(r"(\d+)")


class IngredientCategory(str, Enum):
    """Closed set of ingredient categories, lowercase as stored on recipes."""

    PRODUCE = "produce"
    DAIRY = "dairy"
    MEAT = "meat"
    PANTRY = "pantry"
    FROZEN = "frozen"
    BEVERAGES = "beverages"
    SNACKS = "snacks"
    BAKERY = "bakery"
    CANNED_GOODS = "canned goods"
    SPICES = "spices"
    OTHER = "other"

    @classmethod
    def coerce(cls, value) -> "IngredientCategory":
        """Map any token to a category; unknown or empty values become OTHER."""
        if isinstance(value, cls):
            return value
        token = " ".join(str(value or "").replace("_", " ").split()).lower()
        try:
            return cls(token)
        except ValueError:
            return cls.OTHER


class ShoppingCategory(str, Enum):
    """Shopping list sections. Declaration order is the display order."""

    PRODUCE = "Produce"
    DAIRY = "Dairy"
    MEAT = "Meat"
    PANTRY = "Pantry"
    FROZEN = "Frozen"
    BEVERAGES = "Beverages"
    SNACKS = "Snacks"
    BAKERY = "Bakery"
    CANNED_GOODS = "Canned Goods"
    SPICES = "Spices"
    OTHER = "Other"


class Ingredient(BaseModel):
    """A recipe ingredient. ``name`` + ``category`` form the aggregation key.

    ``amount`` is free text ("2 cups", "200g", "as needed").
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    name: Annotated[str, Field(min_length=1, max_length=200, description="Ingredient name (1-200 chars)")]
    amount: Annotated[str, Field(max_length=100, description="Free-text amount, may be empty")] = ""
    category: Annotated[IngredientCategory, Field(description="Ingredient category")] = IngredientCategory.OTHER

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, v) -> str:
        """Accept numbers and None from provider output."""
        if v is None:
            return ""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return f"{v:g}"
        return v

    @field_validator("category", mode="before")
    @classmethod
    def coerce_category(cls, v) -> IngredientCategory:
        return IngredientCategory.coerce(v)


class Recipe(BaseModel):
    """Recipe as stored by the persistence layer, owned by a single user."""

    model_config = ConfigDict(str_strip_whitespace=True, alias_generator=to_camel, populate_by_name=True)

    id: Annotated[str, Field(min_length=1, description="Recipe identifier")]
    owner_id: Annotated[str, Field(min_length=1, description="Identifier of the owning user")]
    title: Annotated[str, Field(min_length=1, max_length=100, description="Recipe title (1-100 chars)")]
    ingredients: Annotated[List[Ingredient], Field(default_factory=list)]
    instructions: Annotated[List[str], Field(default_factory=list)]
    cook_time: str = ""
    estimated_calories: Annotated[int, Field(ge=0)] = 0
    cuisine: str = "General"
    dietary_tags: Annotated[List[str], Field(default_factory=list)]
    difficulty: Difficulty = "medium"
    servings: Annotated[int, Field(ge=1)] = 4


class DailyPlan(BaseModel):
    """Recipe ids scheduled for each day of the week."""

    monday: List[str] = Field(default_factory=list)
    tuesday: List[str] = Field(default_factory=list)
    wednesday: List[str] = Field(default_factory=list)
    thursday: List[str] = Field(default_factory=list)
    friday: List[str] = Field(default_factory=list)
    saturday: List[str] = Field(default_factory=list)
    sunday: List[str] = Field(default_factory=list)


def _day_key(day: str) -> str:
    key = day.strip().lower()
    if key not in WEEK_DAYS:
        raise ValueError(f"Unknown day '{day}', expected one of: {', '.join(WEEK_DAYS)}")
    return key


class MealPlan(BaseModel):
    """Weekly meal plan referencing stored recipes by id."""

    model_config = ConfigDict(str_strip_whitespace=True, alias_generator=to_camel, populate_by_name=True)

    id: Annotated[str, Field(min_length=1)]
    owner_id: Annotated[str, Field(min_length=1)]
    week_start: Optional[date] = None
    week_end: Optional[date] = None
    daily_plan: DailyPlan = Field(default_factory=DailyPlan)
    notes: Annotated[Optional[str], Field(max_length=500)] = None

    def day_recipes(self, day: str) -> List[str]:
        return list(getattr(self.daily_plan, _day_key(day)))

    def recipe_ids(self) -> List[str]:
        """Every recipe id across the seven days, week order, duplicates dropped."""
        seen: dict[str, None] = {}
        for day in WEEK_DAYS:
            for recipe_id in getattr(self.daily_plan, day):
                seen.setdefault(recipe_id, None)
        return list(seen)

    def add_recipe_to_day(self, day: str, recipe_id: str) -> None:
        recipes = getattr(self.daily_plan, _day_key(day))
        if recipe_id not in recipes:
            recipes.append(recipe_id)

    def remove_recipe_from_day(self, day: str, recipe_id: str) -> None:
        key = _day_key(day)
        setattr(self.daily_plan, key, [rid for rid in getattr(self.daily_plan, key) if rid != recipe_id])


def new_item_id() -> str:
    return str(uuid.uuid4())


class GroceryItem(BaseModel):
    """A shopping list line produced by aggregation and edited by the user."""

    id: Annotated[str, Field(default_factory=new_item_id, description="Unique item identifier (uuid4)")]
    name: Annotated[str, Field(min_length=1)]
    amount: str = ""
    category: ShoppingCategory = ShoppingCategory.OTHER
    quantity: Annotated[int, Field(ge=1)] = 1
    unit: str = ""
    checked: bool = False


class GroceryList(BaseModel):
    """A user's grocery list with the edits the shopping screen performs."""

    name: Annotated[str, Field(min_length=1)] = "My Grocery List"
    items: List[GroceryItem] = Field(default_factory=list)
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def _find(self, item_id: str) -> GroceryItem:
        for item in self.items:
            if item.id == item_id:
                return item
        raise GroceryItemNotFoundError(item_id)

    def _touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)

    def add_item(self, name: str, category: ShoppingCategory = ShoppingCategory.PRODUCE) -> GroceryItem:
        item = GroceryItem(name=name.strip(), category=category)
        self.items.append(item)
        self._touch()
        return item

    def toggle_item(self, item_id: str) -> GroceryItem:
        item = self._find(item_id)
        item.checked = not item.checked
        self._touch()
        return item

    def update_item(
        self,
        item_id: str,
        checked: Optional[bool] = None,
        quantity: Optional[int] = None,
        unit: Optional[str] = None,
    ) -> GroceryItem:
        """Apply the given edits; quantity is clamped to at least 1."""
        item = self._find(item_id)
        if checked is not None:
            item.checked = checked
        if quantity is not None:
            item.quantity = max(1, quantity)
        if unit is not None:
            item.unit = unit.strip()
        self._touch()
        return item

    def remove_item(self, item_id: str) -> None:
        self.items.remove(self._find(item_id))
        self._touch()


class RecipeSummary(BaseModel):
    id: str
    title: str


class GroceryListResult(BaseModel):
    """Result of building a grocery list from explicit recipe ids."""

    items: List[GroceryItem]
    recipes: List[RecipeSummary] = Field(default_factory=list)


class GenerationRequest(BaseModel):
    """Request schema for recipe generation.

    Accepts both ``maxCookTime`` and ``max_cook_time`` style keys. Difficulty
    is case-insensitive and may be the sentinel ``"any"``.
    """

    model_config = ConfigDict(str_strip_whitespace=True, alias_generator=to_camel, populate_by_name=True)

    ingredients: Annotated[
        List[str], Field(min_length=1, max_length=50, description="Ingredients to cook with (1-50 items)")
    ]
    cuisine_type: Annotated[Optional[str], Field(max_length=50)] = None
    dietary_preferences: Annotated[List[str], Field(default_factory=list)]
    max_cook_time: Annotated[Optional[int], Field(ge=10, le=300, description="Cook time cap in minutes")] = None
    difficulty: Optional[Literal["easy", "medium", "hard", "any"]] = None
    servings: Annotated[Optional[int], Field(ge=1, le=12)] = None

    @field_validator("ingredients")
    @classmethod
    def validate_ingredients(cls, v: List[str]) -> List[str]:
        """Each ingredient must be 1-50 characters after stripping."""
        if any(not ingredient for ingredient in v):
            raise ValueError("Ingredient cannot be empty")
        if any(len(ingredient) > 50 for ingredient in v):
            raise ValueError("Ingredient must be at most 50 characters")
        return v

    @field_validator("difficulty", mode="before")
    @classmethod
    def normalize_difficulty(cls, v):
        if isinstance(v, str):
            return v.strip().lower() or None
        return v

    @property
    def diet(self) -> Optional[str]:
        """First dietary preference, the one the generators honour."""
        return self.dietary_preferences[0] if self.dietary_preferences else None


class GeneratedRecipe(BaseModel):
    """Recipe produced by the generation pipeline, before persistence."""

    model_config = ConfigDict(str_strip_whitespace=True, alias_generator=to_camel, populate_by_name=True)

    title: Annotated[str, Field(min_length=1, max_length=200)]
    ingredients: Annotated[List[Ingredient], Field(default_factory=list)]
    instructions: Annotated[List[str], Field(min_length=1)]
    cook_time: str = ""
    estimated_calories: Annotated[int, Field(ge=0)] = 0
    cuisine: str = "General"
    dietary_tags: Annotated[List[str], Field(default_factory=list)]
    difficulty: Difficulty = "medium"
    servings: Annotated[int, Field(ge=1)] = 4

    @field_validator("cook_time", mode="before")
    @classmethod
    def coerce_cook_time(cls, v) -> str:
        """Providers sometimes return a bare number of minutes."""
        if v is None:
            return ""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return f"{int(v)} minutes"
        return v

    @field_validator("estimated_calories", mode="before")
    @classmethod
    def coerce_calories(cls, v) -> int:
        """Accept "450 kcal" and floats; anything without a number becomes 0."""
        if isinstance(v, bool):
            return 0
        if isinstance(v, (int, float)):
            return max(0, round(v))
        match = LEADING_INTEGER.search(str(v)) if v is not None else None
        return int(match.group(1)) if match else 0

    @field_validator("cuisine", mode="before")
    @classmethod
    def default_cuisine(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return "General"
        return v

    @field_validator("dietary_tags", mode="before")
    @classmethod
    def coerce_dietary_tags(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [v] if v.strip() else []
        return v

    @field_validator("difficulty", mode="before")
    @classmethod
    def normalize_difficulty(cls, v) -> str:
        """Off-vocabulary levels ("Intermediate", null) read as medium."""
        level = v.strip().lower() if isinstance(v, str) else v
        return level if level in ("easy", "medium", "hard") else "medium"

    @field_validator("servings", mode="before")
    @classmethod
    def coerce_servings(cls, v):
        if isinstance(v, str):
            match = LEADING_INTEGER.search(v)
            v = int(match.group(1)) if match else None
        if v is None or isinstance(v, bool) or (isinstance(v, (int, float)) and v < 1):
            return 4
        return v


class NumericAmount(BaseModel):
    """An amount with a leading number, e.g. "2 cups" -> (2.0, "cups")."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["numeric"] = "numeric"
    quantity: float
    unit: str = ""


class OpaqueAmount(BaseModel):
    """An amount without a leading number, e.g. "to taste"."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["opaque"] = "opaque"
    text: str = ""


ParsedAmount = Union[NumericAmount, OpaqueAmount]


class GenerationSuccess(BaseModel):
    kind: Literal["success"] = "success"
    provider: str
    recipe: GeneratedRecipe


class GenerationFailure(BaseModel):
    kind: Literal["failure"] = "failure"
    provider: str
    reason: str


ProviderResult = Union[GenerationSuccess, GenerationFailure]
