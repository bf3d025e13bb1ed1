"""ID photo decoding and contain-fit sizing.

The Rirekisho photo cell is 30mm x 40mm. At the 96 DPI reference resolution
used for document pixel sizes that is 113 x 151 pixels.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from io import BytesIO
from typing import NamedTuple

from PIL import Image, UnidentifiedImageError

from rirekisho.documents.exceptions import PhotoDecodeError

logger = logging.getLogger(__name__)

# Word-processor image formats the renderer can embed
SUPPORTED_MIME_TYPES = frozenset(
    {"image/jpeg", "image/jpg", "image/png", "image/gif", "image/bmp", "image/tiff"}
)

# Upload limit enforced by the intake form
MAX_PHOTO_BYTES = 5 * 1024 * 1024

DATA_URL_PATTERN = re.compile(
    r"^data:(?P<mime>[\w/+.-]+)?(?P<params>(?:;[\w-]+=[^;,]*)*)(?P<b64>;base64)?,(?P<data>.*)$",
    re.DOTALL,
)

# EMU per pixel at 96 DPI
EMU_PER_PIXEL = 9525


class FitSize(NamedTuple):
    """Width and height in pixels."""

    width: int
    height: int

    def to_emu(self) -> tuple[int, int]:
        """Convert to English Metric Units for the document engine."""
        return self.width * EMU_PER_PIXEL, self.height * EMU_PER_PIXEL


PHOTO_BOX = FitSize(113, 151)


@dataclass(frozen=True)
class DecodedPhoto:
    """Raw image bytes with their declared MIME type."""

    data: bytes
    mime_type: str


@dataclass(frozen=True)
class PhotoFit:
    """A decoded photo and the size it should be embedded at."""

    data: bytes
    mime_type: str
    size: FitSize
    aspect_preserved: bool


def contain_fit(
    natural_width: int | None,
    natural_height: int | None,
    box: FitSize = PHOTO_BOX,
) -> FitSize:
    """Scale natural dimensions to the largest size that fits inside ``box``.

    The aspect ratio is preserved. When natural dimensions are unknown or not
    positive the box itself is returned.
    """
    if not natural_width or not natural_height or natural_width <= 0 or natural_height <= 0:
        return box

    scale = min(box.width / natural_width, box.height / natural_height)
    width = min(box.width, max(1, round(natural_width * scale)))
    height = min(box.height, max(1, round(natural_height * scale)))
    return FitSize(width, height)


def decode_photo(payload: str, max_bytes: int = MAX_PHOTO_BYTES) -> DecodedPhoto:
    """Decode a data URL (or bare base64 string) into image bytes.

    Raises:
        PhotoDecodeError: If the payload is not base64 image data of a
            supported type within the size limit.
    """
    text = payload.strip()
    if not text:
        raise PhotoDecodeError("Photo payload is empty")

    mime_type = "image/jpeg"
    encoded = text
    match = DATA_URL_PATTERN.match(text)
    if match:
        if not match.group("b64"):
            raise PhotoDecodeError("Photo data URL is not base64 encoded")
        mime_type = (match.group("mime") or "").lower()
        encoded = match.group("data")

    if mime_type not in SUPPORTED_MIME_TYPES:
        raise PhotoDecodeError(f"Unsupported photo type: {mime_type or 'unknown'}")

    try:
        data = base64.b64decode("".join(encoded.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise PhotoDecodeError(f"Photo payload is not valid base64: {e}", e) from e

    if not data:
        raise PhotoDecodeError("Photo payload decoded to zero bytes")
    if len(data) > max_bytes:
        raise PhotoDecodeError(
            f"Photo is {len(data)} bytes, larger than the {max_bytes} byte limit"
        )

    return DecodedPhoto(data=data, mime_type=mime_type)


def probe_dimensions(data: bytes) -> tuple[int, int] | None:
    """Read natural pixel dimensions from image bytes.

    Returns ``None`` when the image cannot be identified.
    """
    try:
        with Image.open(BytesIO(data)) as img:
            return img.size
    except (UnidentifiedImageError, OSError, ValueError) as e:
        logger.warning(f"Could not read photo dimensions, using fixed box: {e}")
        return None


def prepare_photo(payload: str | None, box: FitSize = PHOTO_BOX) -> PhotoFit | None:
    """Decode, probe and fit a photo payload.

    Returns ``None`` when there is no usable photo; the caller renders the
    placeholder glyph instead.
    """
    if not payload or not payload.strip():
        return None

    try:
        decoded = decode_photo(payload)
    except PhotoDecodeError as e:
        logger.warning(f"Ignoring photo: {e}")
        return None

    dimensions = probe_dimensions(decoded.data)
    if dimensions is None:
        return PhotoFit(
            data=decoded.data,
            mime_type=decoded.mime_type,
            size=box,
            aspect_preserved=False,
        )

    return PhotoFit(
        data=decoded.data,
        mime_type=decoded.mime_type,
        size=contain_fit(*dimensions, box=box),
        aspect_preserved=True,
    )
