import pytest

from storymap.config import Settings


@pytest.fixture
def settings() -> Settings:
    """Settings with dummy keys; no test talks to a real provider."""
    return Settings(
        groq_api_key="test-groq",
        tavily_api_key="test-tavily",
        openweather_api_key="",
        groq_models=["llama-3.3-70b-versatile", "llama-3.1-8b-instant"],
    )
