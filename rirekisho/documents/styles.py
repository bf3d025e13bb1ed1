"""Immutable style configuration shared by both layout engines."""

from __future__ import annotations

from dataclasses import dataclass

from rirekisho.documents.config import (
    DEFAULT_PERSONAL_REQUESTS,
    DocumentConfig,
    get_document_config,
)
from rirekisho.documents.imaging import PHOTO_BOX, FitSize
from rirekisho.documents.rows import CERTIFICATION_MIN_ROWS, HISTORY_MIN_ROWS


@dataclass(frozen=True)
class DocumentStyle:
    """Typography, borders and form dimensions.

    Constructed once per generation call and passed explicitly to the layout
    engines and the renderer.
    """

    font_name: str = "MS Mincho"
    font_size: float = 10.5
    title_font_size: float = 20.0
    heading_font_size: float = 12.0

    # Table borders: OOXML size is in eighths of a point
    border_style: str = "single"
    border_size: int = 4
    border_color: str = "000000"

    # Column widths in centimetres
    year_column_cm: float = 1.8
    month_column_cm: float = 1.2
    entry_column_cm: float = 14.0
    label_column_cm: float = 2.6
    value_column_cm: float = 10.8
    photo_column_cm: float = 3.6

    # Form dimensions
    history_min_rows: int = HISTORY_MIN_ROWS
    certification_min_rows: int = CERTIFICATION_MIN_ROWS
    photo_box: FitSize = PHOTO_BOX
    free_text_min_lines: int = 6

    personal_requests_default: str = DEFAULT_PERSONAL_REQUESTS

    @classmethod
    def from_config(cls, config: DocumentConfig | None = None) -> DocumentStyle:
        """Build a style from the document configuration."""
        config = config or get_document_config()
        return cls(
            font_name=config.font_name,
            font_size=config.font_size,
            title_font_size=config.title_font_size,
            heading_font_size=config.heading_font_size,
            personal_requests_default=config.personal_requests_default,
        )


DEFAULT_STYLE = DocumentStyle()
