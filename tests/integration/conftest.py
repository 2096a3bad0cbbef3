"""Pytest configuration and fixtures for integration tests.

Loads the project .env and skips the whole suite when GEMINI_API_KEY is not
configured, since these tests call the live Gemini API.
"""

import os
import pytest
from dotenv import load_dotenv
from pathlib import Path


def pytest_configure(config):
    """Load .env before test collection so src.utils.config sees the key."""
    env_path = Path(__file__).parent.parent.parent / ".env"
    load_dotenv(env_path)

    # Integration tests exercise the primary provider
    os.environ["USE_GEMINI"] = "true"

    print("\n" + "=" * 70)
    print("Note: These tests require a valid GEMINI_API_KEY")
    print(f"Environment loaded from: {env_path}")
    print("=" * 70 + "\n")


@pytest.fixture(scope="session", autouse=True)
def check_api_keys():
    """Skip integration tests if GEMINI_API_KEY is not configured in .env."""
    if not os.getenv("GEMINI_API_KEY"):
        pytest.skip(
            "Integration tests skipped. Missing API key: GEMINI_API_KEY. Please set it in your .env file.",
            allow_module_level=True,
        )
