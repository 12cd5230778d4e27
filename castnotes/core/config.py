"""Application settings loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from castnotes.core.constants import SUMMARY_MODEL, TRANSCRIPTION_MODEL


class Settings(BaseSettings):
    """
    Configuration loaded from environment variables.

    The provider credential is optional here on purpose: a missing key is
    reported by the provider call that needs it, not at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ---------------------------------------------------------------------------
    # Provider
    # ---------------------------------------------------------------------------
    openai_api_key: str | None = Field(default=None, validation_alias="OPENAI_API_KEY")
    openai_base_url: str | None = Field(default=None, validation_alias="OPENAI_BASE_URL")
    transcription_model: str = Field(default=TRANSCRIPTION_MODEL, validation_alias="TRANSCRIPTION_MODEL")
    summary_model: str = Field(default=SUMMARY_MODEL, validation_alias="SUMMARY_MODEL")

    # ---------------------------------------------------------------------------
    # Deployment config (optional)
    # ---------------------------------------------------------------------------
    audio_fetch_timeout_seconds: float = Field(default=60.0, validation_alias="AUDIO_FETCH_TIMEOUT_SECONDS")
    cors_allow_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        validation_alias="CORS_ALLOW_ORIGINS",
    )

    @field_validator("openai_api_key", "openai_base_url", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip() or None
        return value

    @field_validator("transcription_model", "summary_model", mode="before")
    @classmethod
    def _strip_strings(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("cors_allow_origins", mode="before")
    @classmethod
    def _parse_list(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, str):
            items = [item.strip() for item in value.split(",")]
            return [item for item in items if item]
        return value

    @field_validator("audio_fetch_timeout_seconds", mode="before")
    @classmethod
    def _clamp_timeout(cls, value: object) -> object:
        if isinstance(value, str) and value.strip():
            value = float(value)
        if isinstance(value, (int, float)):
            return max(1.0, float(value))
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
