"""Deterministic local recipe generator.

Used when the primary provider fails. Recipes come from fixed templates
written for 4 servings:

1. A keyword template is picked from the caller's ingredients (first
   ingredient containing "mushroom", "onion", "tomato", "chicken" or "beef").
2. Cuisine overrides: italian -> tomato pasta, mexican -> beef tacos.
3. A vegetarian/vegan diet replaces a meat template with the tomato pasta.
4. Without a keyword match, a generic stir-fry is built from the caller's
   ingredients, title-cased.

Every recipe then gets the pantry staples oil, salt and pepper appended.
All of this is plain data construction, so the provider cannot fail.
"""

from typing import Any, List, Optional

from src.generation.providers import GenerationProvider
from src.models.models import (
    GeneratedRecipe,
    GenerationRequest,
    GenerationSuccess,
    Ingredient,
    IngredientCategory,
    ProviderResult,
)
from src.utils.logger import logger


BASELINE_SERVINGS = 4

PANTRY_STAPLES = (
    {"name": "Oil", "amount": "2 tbsp", "category": "pantry"},
    {"name": "Salt", "amount": "1 tsp", "category": "spices"},
    {"name": "Pepper", "amount": "0.5 tsp", "category": "spices"},
)

RECIPE_TEMPLATES: dict[str, dict[str, Any]] = {
    "mushroom": {
        "title": "Garlic Herb Mushroom Skillet",
        "ingredients": [
            {"name": "Mushrooms", "amount": "16 oz", "category": "produce"},
            {"name": "Garlic", "amount": "4 cloves", "category": "produce"},
            {"name": "Butter", "amount": "2 tbsp", "category": "dairy"},
            {"name": "Fresh thyme", "amount": "1 tbsp", "category": "produce"},
            {"name": "Parsley", "amount": "2 tbsp", "category": "produce"},
            {"name": "Lemon juice", "amount": "1 tbsp", "category": "produce"},
        ],
        "instructions": [
            "Wipe mushrooms clean and slice them thickly",
            "Heat oil and butter in a large skillet over medium-high heat",
            "Add mushrooms in a single layer and cook without stirring for 3 minutes",
            "Stir and cook for another 4-5 minutes until golden brown",
            "Add minced garlic and thyme, cook for 1 minute until fragrant",
            "Season with salt and pepper, then finish with lemon juice",
            "Sprinkle with chopped parsley and serve immediately",
        ],
        "cookTime": "20 minutes",
        "estimatedCalories": 180,
        "cuisine": "French",
        "dietaryTags": ["vegetarian", "gluten-free", "low-carb"],
        "difficulty": "easy",
    },
    "onion": {
        "title": "French Onion Soup",
        "ingredients": [
            {"name": "Yellow onions", "amount": "4 large", "category": "produce"},
            {"name": "Butter", "amount": "3 tbsp", "category": "dairy"},
            {"name": "Beef broth", "amount": "6 cups", "category": "pantry"},
            {"name": "Dried thyme", "amount": "1 tsp", "category": "spices"},
            {"name": "Baguette", "amount": "8 slices", "category": "bakery"},
            {"name": "Gruyere cheese", "amount": "1.5 cups", "category": "dairy"},
        ],
        "instructions": [
            "Thinly slice the onions",
            "Melt butter with oil in a large pot over medium heat",
            "Add onions and cook, stirring often, for 35-40 minutes until deeply caramelized",
            "Add thyme, broth, salt and pepper, then simmer for 15 minutes",
            "Toast the baguette slices under the broiler",
            "Ladle soup into oven-safe bowls and top with toast and grated cheese",
            "Broil until the cheese is bubbling and golden",
        ],
        "cookTime": "60 minutes",
        "estimatedCalories": 420,
        "cuisine": "French",
        "dietaryTags": [],
        "difficulty": "medium",
    },
    "tomato": {
        "title": "Fresh Tomato Basil Pasta",
        "ingredients": [
            {"name": "Fresh tomatoes", "amount": "4 large", "category": "produce"},
            {"name": "Basil leaves", "amount": "1 cup", "category": "produce"},
            {"name": "Spaghetti", "amount": "1 pound", "category": "pantry"},
            {"name": "Olive oil", "amount": "3 tbsp", "category": "pantry"},
            {"name": "Garlic", "amount": "3 cloves", "category": "produce"},
            {"name": "Parmesan cheese", "amount": "0.5 cup", "category": "dairy"},
        ],
        "instructions": [
            "Bring a large pot of salted water to boil and cook spaghetti according to package directions",
            "Meanwhile, dice tomatoes and mince garlic",
            "Heat olive oil in a large skillet over medium heat",
            "Add minced garlic and cook until fragrant, about 1 minute",
            "Add diced tomatoes and cook for 5-7 minutes until they start to break down",
            "Tear basil leaves and add to the skillet",
            "Drain pasta and add to the skillet with tomato mixture",
            "Toss to combine and add grated parmesan cheese",
            "Season with salt and pepper to taste",
            "Serve immediately with extra basil and parmesan on top",
        ],
        "cookTime": "20 minutes",
        "estimatedCalories": 450,
        "cuisine": "Italian",
        "dietaryTags": ["vegetarian"],
        "difficulty": "easy",
    },
    "chicken": {
        "title": "Spicy Garlic Chicken Stir-Fry",
        "ingredients": [
            {"name": "Chicken breast", "amount": "2 pieces", "category": "meat"},
            {"name": "Garlic", "amount": "4 cloves", "category": "produce"},
            {"name": "Ginger", "amount": "1 inch", "category": "produce"},
            {"name": "Soy sauce", "amount": "3 tbsp", "category": "pantry"},
            {"name": "Bell peppers", "amount": "2 medium", "category": "produce"},
            {"name": "Onion", "amount": "1 medium", "category": "produce"},
        ],
        "instructions": [
            "Cut chicken into bite-sized pieces and season with salt and pepper",
            "Heat oil in a large wok or skillet over high heat",
            "Add minced garlic and ginger, stir-fry for 30 seconds until fragrant",
            "Add chicken pieces and cook until golden brown, about 5-7 minutes",
            "Add sliced bell peppers and onion, stir-fry for 3-4 minutes",
            "Pour in soy sauce and stir to combine",
            "Cook for another 2 minutes until vegetables are tender-crisp",
            "Serve hot with steamed rice",
        ],
        "cookTime": "25 minutes",
        "estimatedCalories": 350,
        "cuisine": "Asian",
        "dietaryTags": ["high-protein"],
        "difficulty": "easy",
    },
    "beef": {
        "title": "Classic Beef Tacos",
        "ingredients": [
            {"name": "Ground beef", "amount": "1 pound", "category": "meat"},
            {"name": "Taco seasoning", "amount": "1 packet", "category": "spices"},
            {"name": "Tortillas", "amount": "8 medium", "category": "pantry"},
            {"name": "Lettuce", "amount": "1 head", "category": "produce"},
            {"name": "Tomatoes", "amount": "2 medium", "category": "produce"},
            {"name": "Cheese", "amount": "1 cup shredded", "category": "dairy"},
            {"name": "Sour cream", "amount": "0.5 cup", "category": "dairy"},
        ],
        "instructions": [
            "Heat a large skillet over medium-high heat",
            "Add ground beef and cook until browned, breaking it up with a spoon",
            "Drain excess fat and add taco seasoning with half a cup of water",
            "Simmer for 5 minutes until sauce thickens",
            "Warm tortillas in a dry skillet or microwave",
            "Chop lettuce and tomatoes",
            "Assemble tacos with beef, vegetables, cheese, and sour cream",
            "Serve immediately with your favorite hot sauce",
        ],
        "cookTime": "15 minutes",
        "estimatedCalories": 380,
        "cuisine": "Mexican",
        "dietaryTags": ["high-protein"],
        "difficulty": "easy",
    },
}

CUISINE_TEMPLATES = {"italian": "tomato", "mexican": "beef"}
MEAT_FREE_DIETS = ("vegetarian", "vegan")

# Rough category for caller ingredients in the generic recipe
CATEGORY_HINTS = {
    IngredientCategory.MEAT: ("chicken", "beef", "pork", "lamb", "turkey", "bacon", "sausage", "fish", "salmon", "shrimp", "tuna"),
    IngredientCategory.DAIRY: ("milk", "cheese", "butter", "cream", "yogurt", "egg"),
    IngredientCategory.PANTRY: ("rice", "pasta", "noodle", "flour", "bean", "lentil", "tofu", "sauce", "broth", "oil"),
    IngredientCategory.SPICES: ("cumin", "paprika", "chili", "curry", "cinnamon", "oregano", "turmeric"),
}


def _hint_category(name: str) -> IngredientCategory:
    lowered = name.lower()
    for category, keywords in CATEGORY_HINTS.items():
        if any(keyword in lowered for keyword in keywords):
            return category
    return IngredientCategory.PRODUCE


def match_template(ingredients: List[str]) -> Optional[str]:
    """First template keyword contained in any ingredient, scanning ingredients in order."""
    for ingredient in ingredients:
        lowered = ingredient.lower()
        for keyword in RECIPE_TEMPLATES:
            if keyword in lowered:
                return keyword
    return None


def select_template(request: GenerationRequest) -> Optional[str]:
    """Template key for a request, or None for the generic stir-fry."""
    key = match_template(request.ingredients)

    cuisine = (request.cuisine_type or "").strip().lower()
    if cuisine in CUISINE_TEMPLATES:
        key = CUISINE_TEMPLATES[cuisine]

    diet = (request.diet or "").strip().lower()
    if key and diet in MEAT_FREE_DIETS:
        tags = RECIPE_TEMPLATES[key]["dietaryTags"]
        if not any(tag in MEAT_FREE_DIETS for tag in tags):
            key = "tomato"

    return key


def _headline(names: List[str]) -> str:
    """Title fragment naming up to three ingredients; longer lists end with "and More"."""
    if len(names) <= 2:
        return " and ".join(names)
    if len(names) == 3:
        return f"{names[0]}, {names[1]} and {names[2]}"
    return f"{', '.join(names[:3])} and More"


def build_generic_recipe(request: GenerationRequest) -> dict[str, Any]:
    """Stir-fry built around whatever the caller has."""
    names = [ingredient.strip().title() for ingredient in request.ingredients]
    headline = _headline(names)
    joined = ", ".join(name.lower() for name in names)
    diet = (request.diet or "").strip().lower()

    return {
        "title": f"Simple {headline} Stir-Fry",
        "ingredients": [
            {"name": name, "amount": "1 cup", "category": _hint_category(name)} for name in names
        ],
        "instructions": [
            f"Wash and chop the {joined} into bite-sized pieces",
            "Heat oil in a large wok or skillet over medium-high heat",
            "Add the ingredients that take longest to cook first and stir-fry for 3-4 minutes",
            "Add the remaining ingredients and stir-fry for another 3-4 minutes",
            "Season with salt and pepper to taste",
            "Serve hot",
        ],
        "cookTime": "20 minutes",
        "estimatedCalories": 400,
        "cuisine": (request.cuisine_type or "").strip().title() or "Fusion",
        "dietaryTags": [diet] if diet else [],
        "difficulty": "easy",
    }


def with_pantry_staples(ingredients: List[Ingredient]) -> List[Ingredient]:
    present = {ingredient.name.lower() for ingredient in ingredients}
    staples = [Ingredient(**staple) for staple in PANTRY_STAPLES if staple["name"].lower() not in present]
    return [*ingredients, *staples]


class LocalRecipeProvider(GenerationProvider):
    """Template-based provider that always succeeds."""

    name = "local"

    def build(self, request: GenerationRequest) -> GeneratedRecipe:
        key = select_template(request)
        data = RECIPE_TEMPLATES[key] if key else build_generic_recipe(request)
        recipe = GeneratedRecipe.model_validate({**data, "servings": BASELINE_SERVINGS})
        return recipe.model_copy(update={"ingredients": with_pantry_staples(recipe.ingredients)})

    async def generate(self, request: GenerationRequest) -> ProviderResult:
        recipe = self.build(request)
        logger.debug(f"Local template produced '{recipe.title}'", extra={"provider": self.name})
        return GenerationSuccess(provider=self.name, recipe=recipe)
