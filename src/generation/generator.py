"""Recipe generation pipeline.

PRIMARY_ATTEMPT -> DONE, or PRIMARY_ATTEMPT -> FALLBACK_ATTEMPT -> DONE:

1. Validate the request (pydantic, raises ValidationError before any call)
2. Run the provider chain: Gemini once, then the local templates
3. Enforce cook time / difficulty / servings constraints
4. Scale "{number} {unit}" amounts from the producing provider's servings
   to the effective servings

Callers get a GeneratedRecipe and never learn which provider produced it.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Optional, Union

from src.generation.constraints import enforce_constraints, scale_to_servings
from src.generation.fallback import LocalRecipeProvider
from src.generation.providers import GeminiRecipeProvider, GenerationProvider, ProviderChain
from src.models.models import GeneratedRecipe, GenerationRequest
from src.utils.logger import logger


def default_providers() -> list[GenerationProvider]:
    return [GeminiRecipeProvider(), LocalRecipeProvider()]


class RecipeGenerator:
    """Stateless orchestrator over a fixed provider chain."""

    def __init__(self, providers: Optional[Sequence[GenerationProvider]] = None) -> None:
        self.chain = ProviderChain(providers if providers is not None else default_providers())

    async def generate(self, request: Union[GenerationRequest, Mapping[str, Any]]) -> GeneratedRecipe:
        """Generate a recipe honouring the request's constraints.

        Args:
            request: GenerationRequest or a mapping accepted by it (camelCase
                or snake_case keys).

        Returns:
            GeneratedRecipe with constraints enforced and amounts scaled.

        Raises:
            pydantic.ValidationError: Malformed request (e.g. empty ingredient list).
            RecipeGenerationError: Every provider failed (not possible with the
                default chain, whose last provider cannot fail).
        """
        if not isinstance(request, GenerationRequest):
            request = GenerationRequest.model_validate(request)

        logger.info(f"Generating recipe for {len(request.ingredients)} ingredient(s)")
        result = await self.chain.run(request)

        # The producing provider's servings is the scaling baseline
        baseline = result.recipe.servings
        recipe = enforce_constraints(result.recipe, request)
        recipe = scale_to_servings(recipe, baseline=baseline)

        logger.info(f"Generated recipe '{recipe.title}' ({recipe.servings} servings, {recipe.cook_time})")
        return recipe


async def generate_recipe(request: Union[GenerationRequest, Mapping[str, Any]]) -> GeneratedRecipe:
    """Generate a recipe with the default provider chain."""
    return await RecipeGenerator().generate(request)
