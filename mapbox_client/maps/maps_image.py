"""
Image codec helpers built on Pillow.

Decodes tile bodies by declared content type and reads/writes PNG and JPEG
files. Raw Terrain-RGB PNGs (pngraw) are not handled by the encode path.
"""

import io
from pathlib import Path
from typing import Union

from PIL import Image

from ..base.base_errors import DecodeError
from .maps_types import MapFormat


# Content type -> Pillow format name
CONTENT_TYPES = {
    "image/png": "PNG",
    "image/jpg": "JPEG",
    "image/jpeg": "JPEG",
}


def decode_image(data: bytes, content_type: str) -> Image.Image:
    """
    Decode image bytes according to their HTTP content type.

    Raises:
        DecodeError: For an unrecognised content type or undecodable bytes
    """
    media_type = content_type.split(";")[0].strip().lower()
    expected = CONTENT_TYPES.get(media_type)
    if expected is None:
        raise DecodeError(f"Unrecognised Content-Type ({content_type})")

    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (OSError, ValueError) as e:
        raise DecodeError(f"Failed to decode {media_type} image: {e}") from e

    if image.format != expected:
        raise DecodeError(f"Content-Type {media_type} does not match {image.format} image data")

    return image


def encode_image(image: Image.Image, fmt: MapFormat) -> bytes:
    """
    Encode an image in the container used by a tile format.

    Raises:
        ValueError: For pngraw, which cannot be re-encoded
    """
    fmt = MapFormat(fmt)
    if fmt == MapFormat.PNG_RAW:
        raise ValueError("pngraw tiles cannot be encoded")

    buffer = io.BytesIO()
    if fmt.is_jpeg:
        image.convert("RGB").save(buffer, format="JPEG", quality=fmt.jpeg_quality)
    else:
        image.save(buffer, format="PNG")
    return buffer.getvalue()


def load_image(path: Union[str, Path]) -> Image.Image:
    """Load an image file fully into memory."""
    with Image.open(path) as image:
        image.load()
        return image.copy()


def save_image_png(image: Image.Image, path: Union[str, Path]) -> None:
    image.save(path, format="PNG")


def save_image_jpg(image: Image.Image, path: Union[str, Path], quality: int = 90) -> None:
    # JPEG has no alpha channel
    image.convert("RGB").save(path, format="JPEG", quality=quality)


def save_image(image: Image.Image, path: Union[str, Path]) -> None:
    """Save as JPEG for .jpg/.jpeg paths, PNG otherwise."""
    if Path(path).suffix.lower() in (".jpg", ".jpeg"):
        save_image_jpg(image, path)
    else:
        save_image_png(image, path)
