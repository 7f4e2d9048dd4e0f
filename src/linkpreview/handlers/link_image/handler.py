"""
Lambda handlers for attaching an image to a link and serving it back.

Handlers are built around an explicitly provided ImageStore;
`linkpreview.handlers.link_image.entrypoint` constructs the store once
per cold start and exposes the deployed handler functions.
"""

import json
from typing import Any, Callable

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError as PydanticValidationError

from linkpreview.core.models.errors import NotFoundError, StorageError, ValidationError
from linkpreview.core.repositories.image_store import ImageStore
from linkpreview.core.utils.constants import IMAGE_CONTENT_TYPE
from linkpreview.core.utils.decorators import api_gateway_handler
from linkpreview.core.utils.response import JsonDict, ResponseBuilder
from linkpreview.core.utils.validators import sanitize_validation_errors, validate_request

from .models import LinkImageRequest, LinkImageUploadRequest, LinkImageUploadResponse
from .service import LinkImageService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace="LinkPreview")

LambdaHandler = Callable[[dict[str, Any], LambdaContext], JsonDict]


def _request_log_extra(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    return {
        "http_method": event.get("httpMethod"),
        "path": event.get("path"),
        "request_id": getattr(context, "aws_request_id", None),
    }


def build_upload_handler(store: ImageStore) -> LambdaHandler:
    """Build the ``POST /links/{slug}/image`` handler bound to ``store``."""
    service = LinkImageService(store)

    @api_gateway_handler
    @tracer.capture_lambda_handler
    @metrics.log_metrics()
    def upload_handler(event: dict[str, Any], context: LambdaContext) -> JsonDict:
        """
        Handle link image uploads.

        Expected API Gateway event structure:
        {
            "pathParameters": {"slug": "abc"},
            "body": "{\\"file\\": \\"<base64>\\"}"
        }
        """
        logger.info("Received link image upload", extra=_request_log_extra(event, context))

        try:
            body = json.loads(event.get("body") or "{}")
        except json.JSONDecodeError:
            logger.warning("Invalid JSON body received")
            return ResponseBuilder.bad_request("Invalid JSON body")

        if not isinstance(body, dict):
            return ResponseBuilder.bad_request("Request body must be a JSON object")

        path_params = event.get("pathParameters") or {}

        try:
            request = validate_request(
                LinkImageUploadRequest,
                {"slug": path_params.get("slug"), "file": body.get("file")},
            )
        except PydanticValidationError as exc:
            logger.warning("Request validation failed", extra={"errors": sanitize_validation_errors(exc.errors())})
            return ResponseBuilder.validation_error(
                message="Invalid request payload",
                details={"errors": sanitize_validation_errors(exc.errors())},
            )

        try:
            image = LinkImageService.decode_file(request.file)
            url = service.upload(slug=request.slug, image=image)

        except ValidationError as exc:
            logger.warning("Uploaded file rejected", extra={"slug": request.slug})
            return ResponseBuilder.validation_error(message=exc.message)

        except StorageError as exc:
            logger.exception(
                "Storage error during link image upload",
                extra={"slug": request.slug, "error_code": exc.error_code},
            )
            return ResponseBuilder.internal_error(exc.message, error=exc.error_code)

        metrics.add_metric(name="LinkImageUploaded", unit=MetricUnit.Count, value=1)

        response = LinkImageUploadResponse(
            slug=request.slug,
            url=url,
            width=image.width,
            height=image.height,
            message="Link image stored successfully",
        )
        return ResponseBuilder.created(response.model_dump())

    return upload_handler


def build_get_handler(store: ImageStore) -> LambdaHandler:
    """Build the ``GET /links/{slug}/image`` handler bound to ``store``."""
    service = LinkImageService(store)

    @api_gateway_handler
    @tracer.capture_lambda_handler
    @metrics.log_metrics()
    def get_handler(event: dict[str, Any], context: LambdaContext) -> JsonDict:
        """Return the link's image as a base64-encoded JPEG response."""
        logger.info("Received link image request", extra=_request_log_extra(event, context))

        path_params = event.get("pathParameters") or {}

        try:
            request = validate_request(LinkImageRequest, {"slug": path_params.get("slug")})
        except PydanticValidationError as exc:
            return ResponseBuilder.bad_request(
                "Invalid request params",
                details={"errors": sanitize_validation_errors(exc.errors())},
            )

        try:
            content = service.fetch_jpeg(request.slug)

        except NotFoundError:
            logger.info("Link image not found", extra={"slug": request.slug})
            return ResponseBuilder.not_found(f"Image not found for link: {request.slug}")

        except StorageError as exc:
            logger.exception("Link image could not be encoded", extra={"slug": request.slug})
            return ResponseBuilder.internal_error(exc.message, error=exc.error_code)

        return ResponseBuilder.binary_response(content, content_type=IMAGE_CONTENT_TYPE)

    return get_handler
