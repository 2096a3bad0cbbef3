"""Unit tests for recipe prompt construction."""

from src.models.models import GenerationRequest
from src.prompts.prompts import build_recipe_prompt
from src.utils.config import config


class TestBuildRecipePrompt:
    """Test that request constraints are embedded in the prompt."""

    def test_embeds_every_constraint(self):
        prompt = build_recipe_prompt(
            GenerationRequest(
                ingredients=["mushroom", "onion"],
                cuisine_type="French",
                dietary_preferences=["vegetarian"],
                max_cook_time=25,
                difficulty="hard",
                servings=6,
            )
        )

        assert "mushroom, onion" in prompt
        assert "dietary preferences: vegetarian" in prompt
        assert "cuisine: French" in prompt
        assert "max cook time: 25 minutes" in prompt
        assert "difficulty level: hard" in prompt
        assert "servings: 6" in prompt
        assert "(25 minutes maximum)" in prompt

    def test_unset_constraints_use_defaults(self):
        prompt = build_recipe_prompt(GenerationRequest(ingredients=["egg"], difficulty="any"))

        assert "dietary preferences: none" in prompt
        assert "cuisine: any" in prompt
        assert f"max cook time: {config.DEFAULT_MAX_COOK_TIME} minutes" in prompt
        assert f"difficulty level: {config.DEFAULT_DIFFICULTY}" in prompt
        assert f"servings: {config.DEFAULT_SERVINGS}" in prompt

    def test_asks_for_json_only(self):
        prompt = build_recipe_prompt(GenerationRequest(ingredients=["egg"]))

        assert '"cookTime"' in prompt
        assert "Return ONLY valid JSON" in prompt
