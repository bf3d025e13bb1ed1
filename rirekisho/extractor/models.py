"""Data models for the text extractor."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class SourceFormat(str, Enum):
    """Document formats the extractor can read."""

    PDF = "pdf"
    DOCX = "docx"
    TEXT = "text"


@dataclass
class ExtractionResult:
    """Result of a text extraction.

    ``text`` is opaque narrative input for the generation step; the extractor
    does not interpret it.
    """

    success: bool
    text: str | None = None
    error: str | None = None
    source_format: SourceFormat | None = None
    page_count: int | None = None
    extracted_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        """Serialize to the collaborator wire shape."""
        payload: dict = {"success": self.success}
        if self.text is not None:
            payload["text"] = self.text
        if self.error is not None:
            payload["error"] = self.error
        return payload
