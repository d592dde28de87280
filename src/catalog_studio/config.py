"""Application configuration."""

import os

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY"),
    )
    gemini_model: str = "gemini-3-pro-image-preview"
    shots_per_target: int = Field(default=4, ge=1)
    aspect_ratio: str = "3:4"
    image_size: str = "1K"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
        populate_by_name=True,
    )


def resolve_credential(settings: Settings) -> str | None:
    """Return the configured API key, or None when it is missing or blank."""
    raw = settings.gemini_api_key
    if raw is None:
        return None
    cleaned = raw.strip()
    return cleaned or None
