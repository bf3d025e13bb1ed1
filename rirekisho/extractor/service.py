"""Text extraction service for uploaded resumes.

Reads PDFs with pypdf and Word documents with python-docx. The extracted text
is handed to the generation step verbatim.
"""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path

from docx import Document
from pypdf import PdfReader

from rirekisho.extractor.config import ExtractorConfig, get_extractor_config
from rirekisho.extractor.models import ExtractionResult, SourceFormat

logger = logging.getLogger(__name__)

CONTENT_TYPES = {
    "application/pdf": SourceFormat.PDF,
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": SourceFormat.DOCX,
    "text/plain": SourceFormat.TEXT,
}

SUFFIXES = {
    ".pdf": SourceFormat.PDF,
    ".docx": SourceFormat.DOCX,
    ".txt": SourceFormat.TEXT,
}


class TextExtractionService:
    """Service for turning an uploaded document into plain text.

    Failures are reported in the result, never raised.

    Attributes:
        config: Extractor configuration settings.
    """

    def __init__(self, config: ExtractorConfig | None = None) -> None:
        """Initialize the extraction service.

        Args:
            config: Extractor configuration. If not provided, uses default.
        """
        self.config = config or get_extractor_config()

    def extract(
        self,
        data: bytes,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> ExtractionResult:
        """Extract text from a document payload.

        Args:
            data: Raw uploaded bytes.
            filename: Original filename, used to detect the format.
            content_type: MIME type sent with the upload, if any.

        Returns:
            ExtractionResult with the text, or an error message.
        """
        if not data:
            return ExtractionResult(success=False, error="No file uploaded")

        if len(data) > self.config.max_upload_bytes:
            return ExtractionResult(
                success=False,
                error=(
                    f"File is {len(data)} bytes, larger than the "
                    f"{self.config.max_upload_bytes} byte limit"
                ),
            )

        source_format = self.detect_format(data, filename, content_type)
        if source_format is None:
            return ExtractionResult(
                success=False,
                error=f"Unsupported file type: {content_type or filename or 'unknown'}",
            )

        try:
            logger.info(f"Extracting text from {source_format.value} upload")
            if source_format is SourceFormat.PDF:
                text, pages = self._extract_pdf(data)
            elif source_format is SourceFormat.DOCX:
                text, pages = self._extract_docx(data), None
            else:
                text, pages = data.decode("utf-8", errors="replace"), None

        except Exception as e:
            logger.error(f"Error extracting text from {source_format.value}: {e}")
            return ExtractionResult(
                success=False,
                error="Failed to extract text",
                source_format=source_format,
            )

        return ExtractionResult(
            success=True,
            text=text,
            source_format=source_format,
            page_count=pages,
        )

    def detect_format(
        self,
        data: bytes,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> SourceFormat | None:
        """Detect the document format from MIME type, suffix or magic bytes."""
        if content_type:
            mime = content_type.split(";", 1)[0].strip().lower()
            if mime in CONTENT_TYPES:
                return CONTENT_TYPES[mime]

        if filename:
            suffix = Path(filename).suffix.lower()
            if suffix in SUFFIXES:
                return SUFFIXES[suffix]

        if data.startswith(b"%PDF"):
            return SourceFormat.PDF
        if data.startswith(b"PK\x03\x04"):
            return SourceFormat.DOCX
        return None

    def _extract_pdf(self, data: bytes) -> tuple[str, int]:
        reader = PdfReader(BytesIO(data))
        parts: list[str] = []
        for index, page in enumerate(reader.pages):
            if index >= self.config.max_pages:
                logger.warning(
                    f"PDF has more than {self.config.max_pages} pages, truncating"
                )
                break
            page_text = page.extract_text() or ""
            if page_text.strip():
                parts.append(page_text.strip())
        return "\n\n".join(parts), len(reader.pages)

    def _extract_docx(self, data: bytes) -> str:
        doc = Document(BytesIO(data))
        parts: list[str] = []

        for paragraph in doc.paragraphs:
            if paragraph.text.strip():
                parts.append(paragraph.text)

        for table in doc.tables:
            for row in table.rows:
                for cell in row.cells:
                    for paragraph in cell.paragraphs:
                        if paragraph.text.strip():
                            parts.append(paragraph.text)

        return "\n".join(parts)
