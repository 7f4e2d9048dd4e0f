"""JPEG encoding and decoding for images crossing the object store boundary."""

from io import BytesIO

from aws_lambda_powertools import Logger
from PIL import Image, UnidentifiedImageError

from linkpreview.core.models.errors import ImageDecodingError, ImageEncodingError
from linkpreview.core.utils.constants import (
    IMAGE_FORMAT,
    JPEG_QUALITY,
    JPEG_WRITABLE_MODES,
)

logger = Logger(UTC=True)


def encode_jpeg(image: Image.Image) -> bytes:
    """Encode an image as JPEG with the fixed default quality.

    Images in modes JPEG cannot hold (alpha, palette) are flattened to RGB
    first; the alpha channel is dropped.

    Raises:
        ImageEncodingError: If Pillow cannot encode the image
    """
    try:
        if image.mode not in JPEG_WRITABLE_MODES:
            image = image.convert("RGB")

        buffer = BytesIO()
        image.save(buffer, format=IMAGE_FORMAT, quality=JPEG_QUALITY)
        return buffer.getvalue()

    except (OSError, ValueError) as exc:
        logger.error(
            "JPEG encoding failed",
            extra={"mode": getattr(image, "mode", None), "error": str(exc)},
        )
        raise ImageEncodingError(
            message="Unable to encode image",
            details={"mode": getattr(image, "mode", None)},
        ) from exc


def decode_jpeg(data: bytes) -> Image.Image:
    """Decode JPEG bytes into a fully loaded image.

    Raises:
        ImageDecodingError: If the bytes are empty, corrupt, oversized, or not a JPEG
    """
    if not data:
        raise ImageDecodingError(message="Image data is empty")

    try:
        image = Image.open(BytesIO(data))
        image.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
        raise ImageDecodingError(
            message="Unable to decode image",
            details={"size": len(data)},
        ) from exc

    if image.format != IMAGE_FORMAT:
        raise ImageDecodingError(
            message="Stored image is not a JPEG",
            details={"format": image.format},
        )

    return image


def decode_any(data: bytes) -> Image.Image:
    """Decode bytes in any format Pillow understands (uploads)."""
    try:
        image = Image.open(BytesIO(data))
        image.load()
        return image
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
        raise ImageDecodingError(
            message="Unsupported or corrupt image file",
            details={"size": len(data)},
        ) from exc
