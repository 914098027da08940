"""Process-wide settings, built once at startup and handed to each client.

Only Settings.from_env() reads the environment. Everything downstream takes
the Settings instance (or the individual values) as constructor arguments.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_GROQ_MODELS = [
    "llama-3.3-70b-versatile",
    "llama-3.1-8b-instant",
    "mixtral-8x7b-32768",
    "gemma2-9b-it",
]


class Settings(BaseModel):
    """API keys, base URLs and timeouts for every external provider."""

    groq_api_key: str = ""
    groq_base_url: str = "https://api.groq.com/openai/v1"
    groq_models: list[str] = Field(default_factory=lambda: list(DEFAULT_GROQ_MODELS))

    tavily_api_key: str = ""
    tavily_base_url: str = "https://api.tavily.com"

    nominatim_base_url: str = "https://nominatim.openstreetmap.org"
    musicbrainz_base_url: str = "https://musicbrainz.org/ws/2"

    openweather_api_key: str = ""
    openweather_base_url: str = "https://api.openweathermap.org/data/2.5"

    user_agent: str = "StoryMap.ai/1.0 (contact@storymap.ai)"
    http_timeout: float = 10.0
    llm_timeout: float = 60.0

    client_url: str = "http://localhost:3000"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: Path | None = None) -> Settings:
        """Load .env (if present) and build settings from the environment."""
        if env_file is not None:
            load_dotenv(env_file)
        else:
            load_dotenv()

        values: dict = {}
        for field, var in _ENV_VARS.items():
            raw = os.getenv(var)
            if raw is None or raw == "":
                continue
            values[field] = raw
        if "groq_models" in values:
            values["groq_models"] = [
                m.strip() for m in values["groq_models"].split(",") if m.strip()
            ]
        return cls(**values)


_ENV_VARS: dict[str, str] = {
    "groq_api_key": "GROQ_API_KEY",
    "groq_base_url": "GROQ_BASE_URL",
    "groq_models": "GROQ_MODELS",
    "tavily_api_key": "TAVILY_API_KEY",
    "tavily_base_url": "TAVILY_BASE_URL",
    "nominatim_base_url": "NOMINATIM_BASE_URL",
    "musicbrainz_base_url": "MUSICBRAINZ_BASE_URL",
    "openweather_api_key": "OPENWEATHER_API_KEY",
    "openweather_base_url": "OPENWEATHER_BASE_URL",
    "user_agent": "USER_AGENT",
    "http_timeout": "HTTP_TIMEOUT",
    "llm_timeout": "LLM_TIMEOUT",
    "client_url": "CLIENT_URL",
    "log_level": "LOG_LEVEL",
}
