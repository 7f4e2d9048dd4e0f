"""In-memory implementation of ImageStore, used by tests and local runs."""

from aws_lambda_powertools import Logger
from PIL import Image

from linkpreview.core.repositories.image_store import ImageStore
from linkpreview.core.utils.constants import IN_MEMORY_URL_BASE

logger = Logger(UTC=True)


class InMemoryImageStore(ImageStore):
    """Image store holding decoded images in a dict.

    Nothing is served at the returned URLs. Not safe for concurrent use.
    """

    def __init__(self) -> None:
        self._images: dict[str, Image.Image] = {}

    def put(self, key: str, image: Image.Image) -> str:
        self._images[key] = image
        logger.debug("Stored link image in memory", extra={"key": key})
        return f"{IN_MEMORY_URL_BASE}/{key}"

    def get(self, key: str) -> Image.Image | None:
        return self._images.get(key)

    def clear(self) -> None:
        self._images = {}
