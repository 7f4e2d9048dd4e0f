"""S3-backed implementation of ImageStore."""

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError
from PIL import Image

from linkpreview.core.infrastructure.adapters.s3_adapter import S3AdapterProtocol
from linkpreview.core.models.errors import (
    BucketProvisioningError,
    ImageDecodingError,
    ImageDownloadFailedError,
    ImageUploadFailedError,
    NotFoundError,
    StorageError,
    StoreMaintenanceError,
)
from linkpreview.core.repositories.image_store import ImageStore
from linkpreview.core.utils.codec import decode_jpeg, encode_jpeg
from linkpreview.core.utils.constants import (
    IMAGE_CONTENT_TYPE,
    S3_BUCKET_OWNED_CODE,
    S3_MISSING_KEY_CODES,
)

logger = Logger(UTC=True)


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))


class S3ImageStore(ImageStore):
    """Image store backed by an S3-compatible object store (MinIO, AWS S3).

    Images are JPEG-encoded on write and decoded on read. The bucket is
    provisioned when the store is constructed. URLs returned by ``put`` are
    built from ``public_url`` rather than the endpoint, so a proxy or CDN
    can sit in front of the raw store.
    """

    def __init__(self, adapter: S3AdapterProtocol, *, public_url: str) -> None:
        """Create the store and make sure its bucket exists.

        Raises:
            BucketProvisioningError: If the bucket cannot be verified or created
        """
        self._s3 = adapter
        self._url_base = f"{public_url.rstrip('/')}/{adapter.bucket}"

        self._ensure_bucket()

    def url_for(self, key: str) -> str:
        return f"{self._url_base}/{key}"

    def put(self, key: str, image: Image.Image) -> str:
        """Encode the image as JPEG, upload it, and return its public URL."""
        body = encode_jpeg(image)

        logger.debug(
            "Uploading link image",
            extra={"key": key, "size": len(body), "bucket": self._s3.bucket},
        )

        try:
            self._s3.put_object(key=key, body=body, content_type=IMAGE_CONTENT_TYPE)
        except (ClientError, BotoCoreError) as exc:
            logger.error("S3 upload failed", extra={"key": key, "error": str(exc)})
            raise ImageUploadFailedError(
                message="Unable to upload image at this time",
                details={"key": key},
            ) from exc

        url = self.url_for(key)
        logger.info("Link image uploaded", extra={"key": key, "url": url})
        return url

    def get(self, key: str) -> Image.Image | None:
        """Return the decoded image, or None when it is missing or unreadable.

        Not-found, backend and decode failures are logged and collapsed into
        None. Use ``fetch`` to tell them apart.
        """
        try:
            return self.fetch(key)
        except NotFoundError:
            logger.warning("Link image not found", extra={"key": key})
        except StorageError as exc:
            logger.error(
                "Unable to retrieve link image",
                extra={"key": key, "error_code": exc.error_code, "error": exc.message},
            )
        return None

    def fetch(self, key: str) -> Image.Image:
        """Download and decode an image, raising on every failure.

        Raises:
            NotFoundError: If no object exists under ``key``
            ImageDownloadFailedError: If the backend request fails
            ImageDecodingError: If the object is not a decodable JPEG
        """
        logger.debug("Downloading link image", extra={"key": key})

        try:
            response = self._s3.get_object(key=key)
            data = response["Body"].read()

        except ClientError as exc:
            if _error_code(exc) in S3_MISSING_KEY_CODES:
                raise NotFoundError(message="Image not found", details={"key": key}) from exc

            raise ImageDownloadFailedError(
                message="Unable to download image at this time",
                details={"key": key, "code": _error_code(exc)},
            ) from exc

        except BotoCoreError as exc:
            raise ImageDownloadFailedError(
                message="Unable to download image at this time",
                details={"key": key},
            ) from exc

        try:
            return decode_jpeg(data)
        except ImageDecodingError as exc:
            exc.details.setdefault("key", key)
            raise

    def clear(self) -> None:
        """Delete every object in the bucket.

        Each listing page becomes one bulk delete containing exactly the
        listed keys; an empty bucket sends no delete request at all.
        """
        deleted = 0

        try:
            for keys in self._s3.iter_key_pages():
                errors = self._s3.delete_objects(keys=keys)
                if errors:
                    raise StoreMaintenanceError(
                        message="Some images could not be deleted",
                        details={"bucket": self._s3.bucket, "errors": errors},
                    )
                deleted += len(keys)

        except (ClientError, BotoCoreError) as exc:
            logger.critical(
                "Unable to clear link image bucket",
                extra={"bucket": self._s3.bucket, "error": str(exc)},
            )
            raise StoreMaintenanceError(
                message="Unable to clear image store",
                details={"bucket": self._s3.bucket, "deleted": deleted},
            ) from exc

        except StoreMaintenanceError as exc:
            logger.critical(
                "Bulk delete reported failures",
                extra={"bucket": self._s3.bucket, "errors": exc.details.get("errors")},
            )
            raise

        logger.info("Link image bucket cleared", extra={"bucket": self._s3.bucket, "deleted": deleted})

    def _ensure_bucket(self) -> None:
        bucket = self._s3.bucket

        try:
            self._s3.head_bucket()
            logger.debug("Image bucket exists", extra={"bucket": bucket})
            return
        except ClientError as exc:
            logger.info(
                "Image bucket not found, creating it",
                extra={"bucket": bucket, "code": _error_code(exc)},
            )
        except BotoCoreError as exc:
            logger.critical("Object storage unreachable", extra={"bucket": bucket, "error": str(exc)})
            raise BucketProvisioningError(
                message="Unable to reach object storage",
                details={"bucket": bucket},
            ) from exc

        try:
            self._s3.create_bucket()
        except ClientError as exc:
            if _error_code(exc) == S3_BUCKET_OWNED_CODE:
                return

            logger.critical("Image bucket creation failed", extra={"bucket": bucket, "error": str(exc)})
            raise BucketProvisioningError(
                message="Unable to create image bucket",
                details={"bucket": bucket, "code": _error_code(exc)},
            ) from exc
        except BotoCoreError as exc:
            logger.critical("Image bucket creation failed", extra={"bucket": bucket, "error": str(exc)})
            raise BucketProvisioningError(
                message="Unable to create image bucket",
                details={"bucket": bucket},
            ) from exc

        logger.info("Image bucket created", extra={"bucket": bucket})
