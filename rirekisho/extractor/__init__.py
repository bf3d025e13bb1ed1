"""Text extraction from uploaded resumes (PDF, DOCX, plain text)."""

from rirekisho.extractor.config import ExtractorConfig, get_extractor_config
from rirekisho.extractor.models import ExtractionResult, SourceFormat
from rirekisho.extractor.service import TextExtractionService

__all__ = [
    "TextExtractionService",
    "ExtractionResult",
    "SourceFormat",
    "ExtractorConfig",
    "get_extractor_config",
]
