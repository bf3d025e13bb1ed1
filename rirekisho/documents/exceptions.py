"""Exceptions raised by the document generation core."""

from __future__ import annotations


class DocumentError(Exception):
    """Base class for document generation failures."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.original_error = original_error


class PhotoDecodeError(DocumentError):
    """The photo payload could not be decoded into an embeddable image.

    Recovered locally: the photo cell falls back to the placeholder glyph.
    """


class DocumentRenderError(DocumentError):
    """A layout could not be serialized into a word-processor document."""


class PackagingError(DocumentError):
    """The serialized documents could not be bundled into an archive."""


class GenerationError(DocumentError):
    """Generation failed as a whole; no partial output is available."""
