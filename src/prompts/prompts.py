"""Prompt construction for recipe generation.

Builds the single natural-language prompt sent to the primary provider.
The prompt asks for one JSON object matching GeneratedRecipe; the response
parser still tolerates text around the JSON.
"""

from src.models.models import GenerationRequest
from src.utils.config import config


RECIPE_JSON_SHAPE = """{
  "title": "Recipe Title",
  "ingredients": [
    {
      "name": "Ingredient Name",
      "amount": "Amount needed",
      "category": "produce|dairy|meat|pantry|spices|other"
    }
  ],
  "instructions": [
    "Step 1 description",
    "Step 2 description"
  ],
  "cookTime": "XX minutes",
  "estimatedCalories": 500,
  "cuisine": "Cuisine type",
  "dietaryTags": ["vegan", "vegetarian", "gluten-free"],
  "difficulty": "easy|medium|hard",
  "servings": 4
}"""


def _effective_difficulty(request: GenerationRequest) -> str:
    if request.difficulty in (None, "any"):
        return config.DEFAULT_DIFFICULTY
    return request.difficulty


def build_recipe_prompt(request: GenerationRequest) -> str:
    """Generate the recipe prompt for a request.

    Unset constraints fall back to the configured defaults (60 minutes,
    medium, 4 servings unless overridden through the environment).

    Args:
        request: Validated generation request.

    Returns:
        str: Prompt text embedding ingredients, cuisine, diet, time cap,
        difficulty and servings.
    """
    max_cook_time = request.max_cook_time or config.DEFAULT_MAX_COOK_TIME
    difficulty = _effective_difficulty(request)
    servings = request.servings or config.DEFAULT_SERVINGS

    return f"""You are SmartChef, a helpful AI chef. Given the ingredients: {', '.join(request.ingredients)}, dietary preferences: {request.diet or 'none'}, cuisine: {request.cuisine_type or 'any'}, max cook time: {max_cook_time} minutes, difficulty level: {difficulty}, servings: {servings}, generate a recipe in JSON format:

{RECIPE_JSON_SHAPE}

Important guidelines:
- Use only the provided ingredients plus common pantry staples (salt, pepper, oil, etc.)
- Ensure the recipe is realistic and achievable
- Provide clear, step-by-step instructions
- Estimate calories accurately
- Categorize ingredients properly
- Make sure cook time is within the specified limit ({max_cook_time} minutes maximum)
- Set difficulty level to "{difficulty}" (easy/medium/hard)
- Set servings to exactly {servings}
- Write every amount as "<number> <unit>" where a number makes sense (e.g. "2 cups")
- Add appropriate dietary tags
- Return ONLY valid JSON, no additional text"""
