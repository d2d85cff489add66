"""Configuration settings for the Drafting module.

Provides settings for the LLM provider and the drafting pipeline.
Falls back to the OPENAI_* environment variables when DRAFTING_* settings
are not set.
"""

from __future__ import annotations

import os
from typing import Annotated

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cvdraft.config.settings import ConfigurationError

_DEFAULT_MODEL = "gpt-4o-mini"
_DEFAULT_TEMPERATURE = 0.3


class DraftingConfig(BaseSettings):
    """Configuration for the drafting pipeline.

    Settings can be overridden via environment variables prefixed with DRAFTING_.
    Falls back to OPENAI_API_KEY, OPENAI_MODEL and OPENAI_TEMPERATURE.

    Example: DRAFTING_LLM_MODEL=gpt-4o
    Or: OPENAI_MODEL=gpt-4o
    """

    model_config = SettingsConfigDict(
        env_prefix="DRAFTING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # LLM settings (with fallback to OPENAI_* settings)
    llm_provider: str = Field(
        default="openai",
        description="LLM provider (openai, anthropic, azure, etc.)",
    )
    llm_model: str = Field(
        default=_DEFAULT_MODEL,
        description="LLM model name",
    )
    llm_api_key: str | None = Field(
        default=None,
        description="API key for LLM provider",
    )
    llm_base_url: str | None = Field(
        default=None,
        description="Base URL for OpenAI-compatible endpoints",
    )
    llm_temperature: Annotated[float, Field(ge=0.0, le=2.0)] = Field(
        default=_DEFAULT_TEMPERATURE,
        description="Sampling temperature for every LLM call",
    )
    llm_timeout: Annotated[float, Field(gt=0)] = Field(
        default=180.0,
        description="Timeout in seconds for LLM calls",
    )
    llm_web_search: bool = Field(
        default=False,
        description="Let the model search the web when researching the job",
    )
    web_search_country: str = Field(
        default="GB",
        description="Approximate user country sent with web search requests",
    )
    debug: bool = Field(
        default=False,
        description="Log full LLM requests and responses at DEBUG level",
    )

    # Pipeline settings
    top_items: Annotated[int, Field(gt=0)] = Field(
        default=10,
        description="Number of skills/achievements kept after ranking",
    )
    role_relevance_threshold: int = Field(
        default=80,
        description="Past roles scoring below this lose their description",
    )
    cv_locale: str = Field(
        default="UK",
        description="Application market the CV is formatted for",
    )
    letter_language: str = Field(
        default="British English",
        description="Language variant for the covering letter",
    )
    cover_letter_min_words: Annotated[int, Field(gt=0)] = Field(
        default=400,
        description="Minimum word count for covering letters",
    )
    cover_letter_max_words: Annotated[int, Field(gt=0)] = Field(
        default=650,
        description="Maximum word count for covering letters",
    )

    @model_validator(mode="after")
    def apply_openai_fallbacks(self) -> DraftingConfig:
        """Fall back to OPENAI_* settings if DRAFTING_* not set.

        Only applies a fallback when no DRAFTING_* env var is set for the
        field and the value is still the default.
        """
        if not os.getenv("DRAFTING_LLM_API_KEY") and self.llm_api_key is None:
            openai_key = os.getenv("OPENAI_API_KEY")
            if openai_key:
                self.llm_api_key = openai_key

        if not os.getenv("DRAFTING_LLM_MODEL") and self.llm_model == _DEFAULT_MODEL:
            openai_model = os.getenv("OPENAI_MODEL")
            if openai_model:
                self.llm_model = openai_model

        if (
            not os.getenv("DRAFTING_LLM_TEMPERATURE")
            and self.llm_temperature == _DEFAULT_TEMPERATURE
        ):
            openai_temperature = os.getenv("OPENAI_TEMPERATURE")
            if openai_temperature:
                try:
                    self.llm_temperature = float(openai_temperature)
                except ValueError as e:
                    raise ValueError(
                        f"OPENAI_TEMPERATURE must be a number, got {openai_temperature!r}"
                    ) from e

        return self

    @model_validator(mode="after")
    def check_word_range(self) -> DraftingConfig:
        if self.cover_letter_max_words < self.cover_letter_min_words:
            raise ValueError(
                "cover_letter_max_words must be >= cover_letter_min_words"
            )
        return self

    def require_api_key(self) -> str:
        """Return the API key or fail before any model call is made.

        Raises:
            ConfigurationError: If no API key is configured.
        """
        if not self.llm_api_key:
            raise ConfigurationError(
                "No LLM API key configured. Set OPENAI_API_KEY or "
                "DRAFTING_LLM_API_KEY (e.g. in a .env file)."
            )
        return self.llm_api_key


_drafting_config: DraftingConfig | None = None


def get_drafting_config() -> DraftingConfig:
    """Get the drafting configuration singleton."""
    global _drafting_config
    if _drafting_config is None:
        _drafting_config = DraftingConfig()
    return _drafting_config


def reset_drafting_config() -> None:
    """Reset the configuration singleton (useful for testing)."""
    global _drafting_config
    _drafting_config = None
