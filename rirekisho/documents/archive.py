"""ZIP packaging of the generated documents."""

from __future__ import annotations

import logging
import re
import zipfile
from io import BytesIO

from rirekisho.documents.exceptions import PackagingError
from rirekisho.documents.models import GeneratedDocument, PersonalRecord

logger = logging.getLogger(__name__)

RIREKISHO_FILENAME = "履歴書.docx"
SHOKUMU_FILENAME = "職務経歴書.docx"
ARCHIVE_SUFFIX = "応募書類.zip"


class ArchivePackager:
    """Bundles the Rirekisho and Shokumu Keirekisho into one ZIP archive.

    Documents are stored byte-for-byte; the packager does not inspect them.
    """

    def rirekisho(self, content: bytes) -> GeneratedDocument:
        """Wrap serialized Rirekisho bytes with their archive filename."""
        return GeneratedDocument(filename=RIREKISHO_FILENAME, content=content)

    def shokumu(self, content: bytes) -> GeneratedDocument:
        """Wrap serialized Shokumu Keirekisho bytes with their archive filename."""
        return GeneratedDocument(filename=SHOKUMU_FILENAME, content=content)

    def package(self, rirekisho: GeneratedDocument, shokumu: GeneratedDocument) -> bytes:
        """Create the archive containing exactly the two documents.

        Raises:
            PackagingError: If the filenames collide or the archive cannot be
                written.
        """
        documents = [rirekisho, shokumu]
        if rirekisho.filename == shokumu.filename:
            raise PackagingError(f"Duplicate archive entry: {rirekisho.filename}")

        buffer = BytesIO()
        try:
            with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
                for document in documents:
                    archive.writestr(document.filename, document.content)
        except (zipfile.BadZipFile, OSError, ValueError) as e:
            logger.error(f"Failed to package documents: {e}")
            raise PackagingError(f"Failed to package documents: {e}", e) from e

        data = buffer.getvalue()
        logger.info(
            f"Packaged {len(documents)} documents into archive ({len(data)} bytes)"
        )
        return data

    def archive_name(self, record: PersonalRecord) -> str:
        """Deterministic archive filename derived from the applicant's name."""

        def sanitize(s: str) -> str:
            # Keep word characters (including CJK), drop path separators etc.
            s = re.sub(r"[^\w-]", "", s)
            return s[:40]

        identity = record.identity
        name = sanitize(f"{identity.family_name}{identity.given_name}")
        if not name:
            return ARCHIVE_SUFFIX
        return f"{name}_{ARCHIVE_SUFFIX}"
