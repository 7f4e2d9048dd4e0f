"""Custom exception classes for the link preview image store."""

from typing import Any

from linkpreview.core.utils.constants import (
    ERROR_CODE_BUCKET_PROVISIONING_FAILED,
    ERROR_CODE_CONFIGURATION_INVALID,
    ERROR_CODE_IMAGE_DECODING_FAILED,
    ERROR_CODE_IMAGE_DOWNLOAD_FAILED,
    ERROR_CODE_IMAGE_ENCODING_FAILED,
    ERROR_CODE_IMAGE_UPLOAD_FAILED,
    ERROR_CODE_LINK_PREVIEW,
    ERROR_CODE_RESOURCE_NOT_FOUND,
    ERROR_CODE_STORAGE,
    ERROR_CODE_STORE_MAINTENANCE_FAILED,
    ERROR_CODE_VALIDATION_FAILED,
)


class LinkPreviewError(Exception):
    """
    Base exception for all link preview errors.

    Subclasses declare a ``default_error_code``; callers may override it.
    Optional contextual information can be supplied via `details`.
    """

    default_error_code: str = ERROR_CODE_LINK_PREVIEW

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}

        super().__init__(self.message)


class ValidationError(LinkPreviewError):
    """Raised when request validation fails."""

    default_error_code = ERROR_CODE_VALIDATION_FAILED


class ConfigurationError(LinkPreviewError):
    """Raised when store settings are missing or invalid."""

    default_error_code = ERROR_CODE_CONFIGURATION_INVALID


class NotFoundError(LinkPreviewError):
    """Raised when a requested image does not exist."""

    default_error_code = ERROR_CODE_RESOURCE_NOT_FOUND


class StorageError(LinkPreviewError):
    """Raised when an image store operation fails."""

    default_error_code = ERROR_CODE_STORAGE


class ImageEncodingError(StorageError):
    """Raised when an image cannot be encoded for upload."""

    default_error_code = ERROR_CODE_IMAGE_ENCODING_FAILED


class ImageDecodingError(StorageError):
    """Raised when stored bytes cannot be decoded back into an image."""

    default_error_code = ERROR_CODE_IMAGE_DECODING_FAILED


class ImageUploadFailedError(StorageError):
    default_error_code = ERROR_CODE_IMAGE_UPLOAD_FAILED


class ImageDownloadFailedError(StorageError):
    default_error_code = ERROR_CODE_IMAGE_DOWNLOAD_FAILED


class BucketProvisioningError(StorageError):
    """Raised when the image bucket cannot be verified or created.

    The store is unusable without its bucket; this is a startup failure
    and is never retried.
    """

    default_error_code = ERROR_CODE_BUCKET_PROVISIONING_FAILED


class StoreMaintenanceError(StorageError):
    """Raised when purging the store fails.

    Only maintenance and test code calls ``clear``; nothing handles this
    error in request paths.
    """

    default_error_code = ERROR_CODE_STORE_MAINTENANCE_FAILED
