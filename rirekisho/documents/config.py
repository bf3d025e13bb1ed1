"""Configuration settings for the document generation core.

Provides typography defaults and the boilerplate used on the generated forms.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PERSONAL_REQUESTS = "貴社の規定に従います。"


class DocumentConfig(BaseSettings):
    """Configuration for document generation.

    Settings can be overridden via environment variables prefixed with DOCUMENTS_.

    Example: DOCUMENTS_FONT_NAME="Yu Mincho"
    """

    model_config = SettingsConfigDict(
        env_prefix="DOCUMENTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Typography
    font_name: str = Field(
        default="MS Mincho",
        description="East Asian font applied to every run",
    )
    font_size: Annotated[float, Field(gt=0)] = Field(
        default=10.5,
        description="Body font size in points",
    )
    title_font_size: Annotated[float, Field(gt=0)] = Field(
        default=20.0,
        description="Document title font size in points",
    )
    heading_font_size: Annotated[float, Field(gt=0)] = Field(
        default=12.0,
        description="Section heading font size in points",
    )

    # Boilerplate
    personal_requests_default: str = Field(
        default=DEFAULT_PERSONAL_REQUESTS,
        description="Sentence used in the personal requests block when none is given",
    )


# Singleton instance
_document_config: DocumentConfig | None = None


def get_document_config() -> DocumentConfig:
    """Get the document configuration singleton."""
    global _document_config
    if _document_config is None:
        _document_config = DocumentConfig()
    return _document_config


def reset_document_config() -> None:
    """Reset the configuration singleton (useful for testing)."""
    global _document_config
    _document_config = None
