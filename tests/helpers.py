"""Helpers shared by the test modules."""

import base64
from io import BytesIO

from PIL import Image


def make_png(width: int, height: int) -> bytes:
    """Create a small solid-colour PNG."""
    buffer = BytesIO()
    Image.new("RGB", (width, height), color=(200, 200, 200)).save(buffer, format="PNG")
    return buffer.getvalue()


def to_data_url(data: bytes, mime_type: str = "image/png") -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"
