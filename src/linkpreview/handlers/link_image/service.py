"""Business logic for link image operations.

This module decodes uploaded files, hands images to the configured image
store, and re-encodes stored images for delivery.
"""

import base64

from aws_lambda_powertools import Logger
from PIL import Image

from linkpreview.core.models.errors import ImageDecodingError, NotFoundError, ValidationError
from linkpreview.core.repositories.image_store import ImageStore
from linkpreview.core.utils.codec import decode_any, encode_jpeg

logger = Logger(UTC=True)


class LinkImageService:
    """Application service for attaching images to links and serving them."""

    def __init__(self, store: ImageStore) -> None:
        self.store = store

    @staticmethod
    def decode_file(encoded: str) -> Image.Image:
        """Decode a base64 upload into an image.

        Raises:
            ValidationError: If the payload is not base64 or not an image
        """
        try:
            return decode_any(base64.b64decode(encoded, validate=True))
        except ValueError as exc:
            raise ValidationError(
                message="Invalid image data",
                details={"encoding": "base64"},
            ) from exc
        except ImageDecodingError as exc:
            raise ValidationError(message="File is not a supported image", details=exc.details) from exc

    def upload(self, *, slug: str, image: Image.Image) -> str:
        """Store the image for a link and return its public URL.

        Raises:
            StorageError: If the store rejects the write
        """
        logger.debug("Storing link image", extra={"slug": slug, "size": image.size})
        url = self.store.put(slug, image)
        logger.info("Link image stored", extra={"slug": slug, "url": url})
        return url

    def fetch_jpeg(self, slug: str) -> bytes:
        """Return the link's image as JPEG bytes.

        Raises:
            NotFoundError: If the store has no image for the slug
            ImageEncodingError: If the stored image cannot be re-encoded
        """
        image = self.store.get(slug)
        if image is None:
            raise NotFoundError(message="Link image not found", details={"slug": slug})

        return encode_jpeg(image)
