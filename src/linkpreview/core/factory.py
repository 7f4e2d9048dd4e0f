"""
Image store factory.

Creates the image store selected by configuration. The caller constructs
it once at startup and passes it to the handlers that need it.
"""

from aws_lambda_powertools import Logger

from linkpreview.core.infrastructure.adapters.s3_adapter import S3Adapter
from linkpreview.core.infrastructure.aws.s3_image_store import S3ImageStore
from linkpreview.core.infrastructure.memory.in_memory_image_store import InMemoryImageStore
from linkpreview.core.models.settings import StoreSettings
from linkpreview.core.repositories.image_store import ImageStore

logger = Logger(UTC=True)


def create_image_store(settings: StoreSettings | None = None) -> ImageStore:
    """
    Create the configured image store.

    Args:
        settings: Store settings. Read from the environment if None.

    Returns:
        A ready-to-use ImageStore. The S3 store has already provisioned
        its bucket.

    Raises:
        ConfigurationError: If settings read from the environment are invalid.
        BucketProvisioningError: If the S3 bucket cannot be verified or created.
    """
    if settings is None:
        settings = StoreSettings.from_env()

    logger.info("Creating image store", extra={"backend": settings.backend})

    if settings.backend == "memory":
        return InMemoryImageStore()

    return S3ImageStore(
        S3Adapter.from_settings(settings),
        public_url=settings.public_url_base,
    )
