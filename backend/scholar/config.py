"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache): single instance per process
    - A missing API key is not a settings error; it surfaces as
      ConfigurationError when the backend client is built at startup
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Anthropic
    anthropic_api_key: str | None = None
    anthropic_timeout_seconds: int = 60

    # Backend
    backend_model: str = "claude-haiku-4-5-20251001"
    backend_max_tokens: int = 2048

    # Input limits
    max_letters: int = 15
    max_word_length: int = 15
    max_image_bytes: int = 10 * 1024 * 1024
    allowed_image_types: list[str] = [
        "image/jpeg", "image/png", "image/gif", "image/webp",
    ]
    default_dictionary: str = "NWL"

    # Preferences
    preferences_path: str = ".scholar/preferences.json"
    system_theme: str | None = None

    @field_validator("system_theme", mode="before")
    @classmethod
    def normalize_system_theme(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
            return v or None
        return v

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
