"""Global constants used throughout the application.

This module centralizes error codes, storage constants, and environment
variable names shared by the image stores, the settings model and the
link image handlers.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================


# Generic
ERROR_CODE_LINK_PREVIEW = "LINK_PREVIEW_ERROR"

# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_CONFIGURATION_INVALID = "CONFIGURATION_INVALID"

# Not Found Errors
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"

# Storage Errors
ERROR_CODE_STORAGE = "STORAGE_ERROR"
ERROR_CODE_IMAGE_ENCODING_FAILED = "IMAGE_ENCODING_FAILED"
ERROR_CODE_IMAGE_DECODING_FAILED = "IMAGE_DECODING_FAILED"
ERROR_CODE_IMAGE_UPLOAD_FAILED = "IMAGE_UPLOAD_FAILED"
ERROR_CODE_IMAGE_DOWNLOAD_FAILED = "IMAGE_DOWNLOAD_FAILED"
ERROR_CODE_BUCKET_PROVISIONING_FAILED = "BUCKET_PROVISIONING_FAILED"
ERROR_CODE_STORE_MAINTENANCE_FAILED = "STORE_MAINTENANCE_FAILED"


# ============================================================================
# Image Store
# ============================================================================

IMAGE_BUCKET_NAME: Final[str] = "link-images"

IN_MEMORY_URL_BASE: Final[str] = "http://127.0.0.1"

IMAGE_FORMAT: Final[str] = "JPEG"
IMAGE_CONTENT_TYPE: Final[str] = "image/jpeg"

# Pillow's default JPEG quality; not configurable.
JPEG_QUALITY: Final[int] = 75

# Modes Pillow can write as JPEG without conversion.
JPEG_WRITABLE_MODES: Final[frozenset[str]] = frozenset({"RGB", "L", "CMYK"})

# S3 DeleteObjects accepts at most this many keys per request; listing
# pages are capped to match so each page maps onto one delete.
MAX_DELETE_BATCH_SIZE: Final[int] = 1000

S3_MISSING_KEY_CODES: Final[frozenset[str]] = frozenset({"404", "NoSuchKey", "NotFound"})
S3_BUCKET_OWNED_CODE: Final[str] = "BucketAlreadyOwnedByYou"

DEFAULT_REGION: Final[str] = "us-east-1"
DEFAULT_CONNECT_TIMEOUT = 5
DEFAULT_READ_TIMEOUT = 30
DEFAULT_MAX_ATTEMPTS = 3


# ============================================================================
# Link Image Upload Constraints
# ============================================================================

MAX_FILE_SIZE = 4 * 1024 * 1024  # 4MB in bytes

SLUG_PATTERN = r"^[A-Za-z0-9_-]{1,128}$"


# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "GET,POST,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization,X-Api-Key"
EXPOSE_HEADERS = "Content-Type,Content-Length"
DEFAULT_CONTENT_TYPE = "application/json"


# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_IMAGE_STORE_BACKEND = "IMAGE_STORE_BACKEND"

# Connection settings are read as MINIO_<FIELD>, e.g. MINIO_HOST, MINIO_READ_TIMEOUT.
ENV_MINIO_PREFIX = "MINIO_"
ENV_MINIO_HOST = f"{ENV_MINIO_PREFIX}HOST"
ENV_MINIO_PORT = f"{ENV_MINIO_PREFIX}PORT"


# ============================================================================
# Helper Functions
# ============================================================================


def get_max_file_size_mb() -> int:
    """Get maximum file size in megabytes."""
    return MAX_FILE_SIZE // (1024 * 1024)
