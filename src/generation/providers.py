"""Recipe generation providers and the chain that runs them.

A provider turns a GenerationRequest into a ProviderResult: either
GenerationSuccess carrying a validated recipe or GenerationFailure carrying a
reason. The chain tries them in order and returns the first success; a
provider that raises anyway is recorded as a failure.

Core pieces:
- extract_json_object(): first balanced {...} span of a raw LLM reply
- parse_recipe_response(): JSON span -> validated GeneratedRecipe (raises ValueError)
- GeminiRecipeProvider: single Gemini call, no retries
- ProviderChain: fixed-order chain ending with a provider that cannot fail
"""

import asyncio
import json
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, Optional

from google import genai
from google.genai import types

from src.models.models import (
    GeneratedRecipe,
    GenerationFailure,
    GenerationRequest,
    GenerationSuccess,
    ProviderResult,
)
from src.prompts.prompts import build_recipe_prompt
from src.utils.config import config
from src.utils.errors import RecipeGenerationError
from src.utils.logger import logger


REQUIRED_RECIPE_FIELDS = ("title", "ingredients", "instructions")


class GenerationProvider(ABC):
    """Something that can propose a recipe for a request."""

    name: str = "provider"

    @abstractmethod
    async def generate(self, request: GenerationRequest) -> ProviderResult:
        """Return GenerationSuccess or GenerationFailure; never raise."""


def extract_json_object(text: Optional[str]) -> Optional[str]:
    """Return the first balanced ``{...}`` span in ``text``.

    Braces inside JSON strings (including escaped quotes) are ignored, so
    "Here you go: {"title": "A {fancy} dish"} Enjoy!" yields the object only.

    Returns:
        The JSON object text, or None if no opening brace is ever closed.
    """
    if not text:
        return None

    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for index in range(start, len(text)):
            char = text[index]
            if in_string:
                if escaped:
                    escaped = False
                elif char == "\\":
                    escaped = True
                elif char == '"':
                    in_string = False
            elif char == '"':
                in_string = True
            elif char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return text[start : index + 1]
        # Unbalanced from this brace, try the next one
        start = text.find("{", start + 1)
    return None


def parse_recipe_response(response_text: Optional[str]) -> GeneratedRecipe:
    """Parse a raw provider reply into a GeneratedRecipe.

    Args:
        response_text: Raw model output, possibly with prose or code fences
            around the JSON.

    Returns:
        Validated GeneratedRecipe.

    Raises:
        ValueError: No JSON object, malformed JSON, a required field
            (title/ingredients/instructions) missing or empty, or schema
            validation failure (pydantic.ValidationError is a ValueError).
    """
    json_text = extract_json_object(response_text)
    if json_text is None:
        raise ValueError("Invalid response format from AI: no JSON object found")

    data: Any = json.loads(json_text)
    if not isinstance(data, dict):
        raise ValueError("Invalid response format from AI: expected a JSON object")

    missing = [field for field in REQUIRED_RECIPE_FIELDS if not data.get(field)]
    if missing:
        raise ValueError(f"Missing required recipe fields: {', '.join(missing)}")

    return GeneratedRecipe.model_validate(data)


class GeminiRecipeProvider(GenerationProvider):
    """Primary provider: one Gemini call per request.

    Any failure (missing API key, network error, quota, malformed reply) is
    reported as GenerationFailure. There is no retry; the chain falls back.
    """

    name = "gemini"

    def __init__(self, client: Optional[genai.Client] = None, model: Optional[str] = None) -> None:
        self._client = client
        self.model = model or config.GEMINI_MODEL

    def _get_client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=config.GEMINI_API_KEY)
        return self._client

    async def _call_gemini_api(self, prompt: str) -> str:
        response = await asyncio.to_thread(
            self._get_client().models.generate_content,
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                temperature=config.TEMPERATURE,
                max_output_tokens=config.MAX_OUTPUT_TOKENS,
            ),
        )
        text = response.text
        if not text:
            raise ValueError("Empty response from Gemini")
        return text

    async def generate(self, request: GenerationRequest) -> ProviderResult:
        if self._client is None and not config.gemini_enabled:
            reason = "Gemini disabled or GEMINI_API_KEY not set"
            logger.debug(f"Skipping Gemini: {reason}", extra={"provider": self.name})
            return GenerationFailure(provider=self.name, reason=reason)

        try:
            response_text = await self._call_gemini_api(build_recipe_prompt(request))
            recipe = parse_recipe_response(response_text)
        except Exception as e:
            logger.warning(f"Gemini recipe generation failed: {e}", extra={"provider": self.name})
            return GenerationFailure(provider=self.name, reason=str(e) or type(e).__name__)

        logger.debug(f"Gemini generated '{recipe.title}'", extra={"provider": self.name})
        return GenerationSuccess(provider=self.name, recipe=recipe)


class ProviderChain:
    """Run providers in order until one succeeds."""

    def __init__(self, providers: Sequence[GenerationProvider]) -> None:
        if not providers:
            raise ValueError("ProviderChain needs at least one provider")
        self.providers = list(providers)

    async def run(self, request: GenerationRequest) -> GenerationSuccess:
        """Return the first successful result.

        An exception from a provider counts as that provider's failure.

        Raises:
            RecipeGenerationError: Every provider failed.
        """
        reasons: list[str] = []
        for provider in self.providers:
            try:
                result = await provider.generate(request)
            except Exception as e:
                logger.warning(f"Recipe provider raised: {e}", extra={"provider": provider.name})
                result = GenerationFailure(provider=provider.name, reason=str(e) or type(e).__name__)
            if isinstance(result, GenerationSuccess):
                if reasons:
                    logger.info(
                        f"Recipe generated by fallback provider after: {'; '.join(reasons)}",
                        extra={"provider": result.provider},
                    )
                return result
            reasons.append(f"{result.provider}: {result.reason}")

        logger.error(f"All recipe providers failed: {'; '.join(reasons)}")
        raise RecipeGenerationError(reasons)
