"""Configuration settings for the text extractor."""

from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ExtractorConfig(BaseSettings):
    """Extractor configuration settings.

    All settings have sensible defaults and can be overridden via
    environment variables with EXTRACTOR_ prefix or a .env file.

    Attributes:
        max_upload_bytes: Largest payload accepted for extraction.
        max_pages: Pages of a PDF to read before stopping.
    """

    model_config = SettingsConfigDict(
        env_prefix="EXTRACTOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    max_upload_bytes: Annotated[int, Field(gt=0)] = Field(
        default=10 * 1024 * 1024,
        description="Largest payload accepted for extraction, in bytes",
    )
    max_pages: Annotated[int, Field(gt=0)] = Field(
        default=50,
        description="Maximum number of PDF pages to read",
    )


# Singleton instance
_extractor_config: ExtractorConfig | None = None


def get_extractor_config() -> ExtractorConfig:
    """Get the extractor configuration singleton."""
    global _extractor_config
    if _extractor_config is None:
        _extractor_config = ExtractorConfig()
    return _extractor_config


def reset_extractor_config() -> None:
    """Reset the configuration singleton (useful for testing)."""
    global _extractor_config
    _extractor_config = None
