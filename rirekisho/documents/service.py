"""Main document generation service.

Orchestrates one generation call from a personal record to the archive of
both application documents plus the field-presence report.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date

from rirekisho.documents.archive import ArchivePackager
from rirekisho.documents.config import DocumentConfig, get_document_config
from rirekisho.documents.exceptions import DocumentError, GenerationError
from rirekisho.documents.imaging import PhotoFit, prepare_photo
from rirekisho.documents.models import GenerationResult, PersonalRecord
from rirekisho.documents.renderer import DocxRenderer
from rirekisho.documents.rirekisho import build_rirekisho_layout
from rirekisho.documents.shokumu import build_shokumu_layout
from rirekisho.documents.styles import DocumentStyle
from rirekisho.documents.validation import validate_record

logger = logging.getLogger(__name__)


class DocumentService:
    """Main service for application document generation.

    Orchestrates the pipeline:
    1. Validate field presence (advisory only)
    2. Decode and fit the ID photo
    3. Build both layouts
    4. Render both documents concurrently
    5. Package them into one archive
    """

    def __init__(
        self,
        config: DocumentConfig | None = None,
        style: DocumentStyle | None = None,
    ):
        """Initialize the document service.

        Args:
            config: Optional DocumentConfig. Uses global config if not provided.
            style: Optional style. Built from the config if not provided.
        """
        self.config = config or get_document_config()
        self.style = style or DocumentStyle.from_config(self.config)

        self.renderer = DocxRenderer(style=self.style)
        self.packager = ArchivePackager()

    async def generate(
        self,
        record: PersonalRecord,
        today: date | None = None,
    ) -> GenerationResult:
        """Generate both documents and bundle them.

        Args:
            record: The personal record to render.
            today: Date printed on the documents. Defaults to the current date.

        Returns:
            GenerationResult with the archive and validation report, or an
            error and no partial output.
        """
        name = record.identity.full_name or "<unnamed>"
        logger.info(f"Starting document generation for {name}")

        try:
            validation = validate_record(record)
            if validation.has_missing:
                logger.info(f"Missing fields: {', '.join(validation.missing_fields())}")

            archive_bytes = await self._build_archive(record, today or date.today())

        except GenerationError as e:
            logger.error(f"Document generation failed: {e}")
            return GenerationResult(success=False, error=str(e))

        logger.info("Document generation completed successfully")
        return GenerationResult(
            success=True,
            archive_bytes=archive_bytes,
            archive_name=self.packager.archive_name(record),
            validation=validation,
        )

    async def _build_archive(self, record: PersonalRecord, today: date) -> bytes:
        """Render and package both documents.

        Raises:
            GenerationError: If either document or the archive fails.
        """
        try:
            logger.info("Step 1: Preparing photo...")
            photo = await self._prepare_photo(record)

            logger.info("Step 2: Building layouts...")
            rirekisho_layout = build_rirekisho_layout(
                record, photo=photo, style=self.style, today=today
            )
            shokumu_layout = build_shokumu_layout(record, today=today)

            logger.info("Step 3: Rendering documents...")
            rirekisho_bytes, shokumu_bytes = await asyncio.gather(
                asyncio.to_thread(self.renderer.render_rirekisho, rirekisho_layout),
                asyncio.to_thread(self.renderer.render_shokumu, shokumu_layout),
            )

            logger.info("Step 4: Packaging archive...")
            return self.packager.package(
                self.packager.rirekisho(rirekisho_bytes),
                self.packager.shokumu(shokumu_bytes),
            )

        except DocumentError as e:
            raise GenerationError(str(e), e) from e
        except Exception as e:
            logger.error(f"Unexpected error while building documents: {e}")
            raise GenerationError(f"Unexpected error while building documents: {e}", e) from e

    async def _prepare_photo(self, record: PersonalRecord) -> PhotoFit | None:
        if not record.identity.photo:
            return None
        return await asyncio.to_thread(
            prepare_photo, record.identity.photo, self.style.photo_box
        )
