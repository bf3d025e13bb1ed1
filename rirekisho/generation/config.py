"""Configuration settings for the profile generation module.

Provides settings for the LLM provider and for choosing between translating
and refining the applicant's input.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GenerationConfig(BaseSettings):
    """Configuration for profile generation.

    Settings can be overridden via environment variables prefixed with GENERATION_.

    Example: GENERATION_LLM_PROVIDER=anthropic
    """

    model_config = SettingsConfigDict(
        env_prefix="GENERATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # LLM settings
    llm_provider: str = Field(
        default="openai",
        description="LLM provider (openai, anthropic, azure, etc.)",
    )
    llm_model: str = Field(
        default="gpt-4o",
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
    llm_max_retries: Annotated[int, Field(ge=0)] = Field(
        default=1,
        description="Maximum retry attempts for LLM calls",
    )
    llm_timeout: Annotated[float, Field(gt=0)] = Field(
        default=180.0,
        description="Timeout in seconds for LLM calls",
    )
    llm_reasoning_effort: str | None = Field(
        default=None,
        description="Reasoning effort for supported models (low, medium, high)",
    )

    # Generation behaviour
    use_mock: bool = Field(
        default=False,
        description="Return a fixed sample record instead of calling the LLM",
    )
    japanese_ratio_threshold: Annotated[float, Field(gt=0.0, le=1.0)] = Field(
        default=0.3,
        description=(
            "Share of Japanese-script letters at or above which input is refined "
            "instead of translated"
        ),
    )


# Singleton instance
_generation_config: GenerationConfig | None = None


def get_generation_config() -> GenerationConfig:
    """Get the generation configuration singleton."""
    global _generation_config
    if _generation_config is None:
        _generation_config = GenerationConfig()
    return _generation_config


def reset_generation_config() -> None:
    """Reset the configuration singleton (useful for testing)."""
    global _generation_config
    _generation_config = None
