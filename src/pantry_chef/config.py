"""
Pantry Chef - Configuration and settings.

Everything is read from the environment (or a local .env file).
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings.

    Supabase credentials are required to talk to the data store. The Gemini
    key is optional at load time: a missing key only fails the assistant
    calls that need it.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Supabase
    supabase_url: str
    supabase_anon_key: str

    # Gemini
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-1.5-flash"
    gemini_api_url: str = "https://generativelanguage.googleapis.com/v1beta/models"
    gemini_temperature: float = 0.9
    gemini_top_k: int = 1
    gemini_top_p: float = 1.0
    gemini_max_output_tokens: int = 8192
    gemini_timeout_seconds: float = 60.0

    # Application
    pantry_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # PANTRY_LOG_PROMPTS=1 - write prompts and replies to prompt_logs/
    pantry_log_prompts: bool = False

    @property
    def generate_content_url(self) -> str:
        return f"{self.gemini_api_url.rstrip('/')}/{self.gemini_model}:generateContent"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


class _SettingsProxy:
    """Lazy proxy for settings to avoid loading .env at import time."""

    _instance: Settings | None = None

    def __getattr__(self, name: str):
        if self._instance is None:
            self._instance = get_settings()
        return getattr(self._instance, name)


settings = _SettingsProxy()
