"""Application document generation module.

This module provides functionality for:
- Validating that a personal record carries the fields recruiters expect
- Laying out the Rirekisho (fixed two-page form with padded tables)
- Laying out the Shokumu Keirekisho (free-form work history)
- Rendering both layouts to DOCX
- Bundling both documents into one ZIP archive

Main Entry Point:
    DocumentService - Orchestrates the complete generation pipeline

Example:
    from rirekisho.documents import DocumentService

    service = DocumentService()
    result = await service.generate(record)

    if result.success:
        Path(result.archive_name).write_bytes(result.archive_bytes)
        if result.validation.has_missing:
            print(f"Missing: {result.validation.missing_fields()}")
"""

from rirekisho.documents.archive import ArchivePackager
from rirekisho.documents.config import DocumentConfig, get_document_config
from rirekisho.documents.dates import YearMonth, tokenize_period
from rirekisho.documents.exceptions import (
    DocumentError,
    DocumentRenderError,
    GenerationError,
    PackagingError,
    PhotoDecodeError,
)
from rirekisho.documents.imaging import PHOTO_BOX, FitSize, contain_fit
from rirekisho.documents.loader import load_record
from rirekisho.documents.models import (
    EducationEntry,
    GeneratedDocument,
    GenerationResult,
    Identity,
    LanguageSkill,
    PersonalRecord,
    ValidationReport,
    WorkEntry,
)
from rirekisho.documents.renderer import DocxRenderer
from rirekisho.documents.rirekisho import RirekishoLayout, build_rirekisho_layout
from rirekisho.documents.service import DocumentService
from rirekisho.documents.shokumu import ShokumuLayout, build_shokumu_layout
from rirekisho.documents.styles import DocumentStyle
from rirekisho.documents.validation import validate_record

__all__ = [
    # Main service
    "DocumentService",
    # Configuration
    "DocumentConfig",
    "DocumentStyle",
    "get_document_config",
    # Components
    "ArchivePackager",
    "DocxRenderer",
    "build_rirekisho_layout",
    "build_shokumu_layout",
    "contain_fit",
    "tokenize_period",
    "validate_record",
    "load_record",
    # Models
    "PersonalRecord",
    "Identity",
    "EducationEntry",
    "WorkEntry",
    "LanguageSkill",
    "ValidationReport",
    "GeneratedDocument",
    "GenerationResult",
    "RirekishoLayout",
    "ShokumuLayout",
    "YearMonth",
    "FitSize",
    "PHOTO_BOX",
    # Errors
    "DocumentError",
    "DocumentRenderError",
    "GenerationError",
    "PackagingError",
    "PhotoDecodeError",
]
