"""Configuration management for SmartChef.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults
"""

import os

from dotenv import load_dotenv


# Load .env file (if exists, silently continues if missing)
load_dotenv()


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        # Gemini API Key: optional, recipe generation falls back to local templates without it
        self.GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
        # Gemini Configuration: Enable/disable the primary generative provider
        self.USE_GEMINI: bool = os.getenv("USE_GEMINI", "true").lower() in ("true", "1", "yes")
        # Default: gemini-2.5-flash (fast, cost-effective for single recipe generation)
        self.GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
        # LLM Model Parameters
        # Temperature: Controls randomness (0.0 = deterministic, 1.0 = max randomness)
        self.TEMPERATURE: float = float(os.getenv("TEMPERATURE", "0.7"))
        # Max Output Tokens: 2048 is sufficient for a full recipe with instructions
        self.MAX_OUTPUT_TOKENS: int = int(os.getenv("MAX_OUTPUT_TOKENS", "2048"))

        # Generation defaults applied when a request leaves a constraint unset
        self.DEFAULT_MAX_COOK_TIME: int = int(os.getenv("DEFAULT_MAX_COOK_TIME", "60"))
        self.DEFAULT_DIFFICULTY: str = os.getenv("DEFAULT_DIFFICULTY", "medium").lower()
        self.DEFAULT_SERVINGS: int = int(os.getenv("DEFAULT_SERVINGS", "4"))

        # Grocery list name used when a list is created without one
        self.GROCERY_LIST_NAME: str = os.getenv("GROCERY_LIST_NAME", "My Grocery List")

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If any configured value is out of range.
        """
        if not (0.0 <= self.TEMPERATURE <= 1.0):
            raise ValueError(
                f"TEMPERATURE must be between 0.0 and 1.0, got: {self.TEMPERATURE}"
            )
        if self.MAX_OUTPUT_TOKENS < 512:
            raise ValueError(
                f"MAX_OUTPUT_TOKENS must be at least 512, got: {self.MAX_OUTPUT_TOKENS}"
            )
        if not (10 <= self.DEFAULT_MAX_COOK_TIME <= 300):
            raise ValueError(
                f"DEFAULT_MAX_COOK_TIME must be between 10 and 300, got: {self.DEFAULT_MAX_COOK_TIME}"
            )
        if self.DEFAULT_DIFFICULTY not in ("easy", "medium", "hard"):
            raise ValueError(
                f"DEFAULT_DIFFICULTY must be 'easy', 'medium', or 'hard', got: {self.DEFAULT_DIFFICULTY}"
            )
        if not (1 <= self.DEFAULT_SERVINGS <= 12):
            raise ValueError(
                f"DEFAULT_SERVINGS must be between 1 and 12, got: {self.DEFAULT_SERVINGS}"
            )
        if not self.GROCERY_LIST_NAME.strip():
            raise ValueError("GROCERY_LIST_NAME must not be empty")

    @property
    def gemini_enabled(self) -> bool:
        """True when the primary provider can be called at all."""
        return self.USE_GEMINI and bool(self.GEMINI_API_KEY)


# Create module-level config instance and validate immediately
config = Config()
config.validate()
