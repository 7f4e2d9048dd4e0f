"""Pydantic models for link image upload and retrieval."""

import base64

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

from linkpreview.core.utils.constants import MAX_FILE_SIZE, SLUG_PATTERN, get_max_file_size_mb

logger = Logger(UTC=True)


class LinkImageRequest(BaseModel):
    """Validation model for the link slug path parameter."""

    model_config = ConfigDict(str_strip_whitespace=True)

    slug: StrictStr = Field(
        ...,
        pattern=SLUG_PATTERN,
        description="Link slug (alphanumeric, underscore, hyphen)",
    )


class LinkImageUploadRequest(LinkImageRequest):
    """Validation model for a link image upload."""

    file: StrictStr = Field(..., description="Base64 encoded image file")

    @field_validator("file")
    @classmethod
    def validate_file(cls, value: str) -> str:
        """
        Validate base64 file:
        - must not be empty
        - must decode correctly
        - must not exceed MAX_FILE_SIZE
        """
        if not value:
            raise ValueError("file must not be empty")

        try:
            file_data = base64.b64decode(value, validate=True)
        except ValueError as exc:
            logger.warning("File validation error: invalid base64")
            raise ValueError("Invalid base64 encoded file") from exc

        if not file_data:
            raise ValueError("Decoded file is empty")

        if len(file_data) > MAX_FILE_SIZE:
            logger.warning("File validation error: size exceeds limit", extra={"size": len(file_data)})
            raise ValueError(f"File size exceeds {get_max_file_size_mb()}MB limit")

        return value


class LinkImageUploadResponse(BaseModel):
    """Response model for a stored link image."""

    slug: str = Field(..., description="Link slug")
    url: str = Field(..., description="Public image URL")
    width: int = Field(..., description="Image width in pixels")
    height: int = Field(..., description="Image height in pixels")
    message: str = Field(..., description="Success message")
