"""Abstract contract for link preview image storage."""

from abc import ABC, abstractmethod

from PIL import Image


class ImageStore(ABC):
    """Contract for storing and retrieving link preview images by key.

    Implementations are an in-memory mapping (tests) and S3-compatible
    object storage (production). Handlers depend on this interface and
    receive a configured instance; they never inspect which one.
    """

    @abstractmethod
    def put(self, key: str, image: Image.Image) -> str:
        """Store an image under ``key``, replacing any previous image.

        Args:
            key: Caller-chosen identifier (last write wins)
            image: Decoded image to store

        Returns:
            Public URL where browsers can load the image

        Raises:
            StorageError: If the image cannot be encoded or written
        """

    @abstractmethod
    def get(self, key: str) -> Image.Image | None:
        """Retrieve the image stored under ``key``.

        A missing key and a failed retrieval both return ``None``; callers
        cannot tell them apart.

        Args:
            key: Identifier used in ``put``

        Returns:
            The decoded image, or None
        """

    @abstractmethod
    def clear(self) -> None:
        """Remove every stored image.

        Test and maintenance use only. Afterwards the store behaves like a
        freshly constructed, empty one.

        Raises:
            StoreMaintenanceError: If the backend cannot be purged
        """
