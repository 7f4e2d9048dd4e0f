#!/usr/bin/env python3
"""
Maintenance script that removes every stored link image.

Reads the store configuration from the environment (IMAGE_STORE_BACKEND,
MINIO_HOST, MINIO_PORT, MINIO_ACCESS_KEY, MINIO_SECRET_KEY,
MINIO_PUBLIC_URL) unless overridden on the command line.

Run:
    poetry run python seed/clear_link_images.py --yes
"""

import argparse
import sys

from aws_lambda_powertools import Logger

from linkpreview.core.factory import create_image_store
from linkpreview.core.models.errors import LinkPreviewError
from linkpreview.core.models.settings import StoreSettings
from linkpreview.core.utils.constants import ENV_MINIO_HOST, ENV_MINIO_PORT

logger = Logger(service="clear-link-images")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Delete all link preview images")

    parser.add_argument(
        "--host",
        default=None,
        help=f"Object storage host (defaults to ${ENV_MINIO_HOST})",
    )
    parser.add_argument(
        "--port",
        default=None,
        help=f"Object storage port (defaults to ${ENV_MINIO_PORT})",
    )
    parser.add_argument(
        "--yes",
        action="store_true",
        help="Confirm deletion of every stored image",
    )

    return parser.parse_args(argv)


def clear_link_images(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    if not args.yes:
        logger.error("Refusing to clear the image store without --yes")
        return 2

    overrides = {"host": args.host, "port": args.port}

    try:
        settings = StoreSettings.from_env(**{k: v for k, v in overrides.items() if v})
        store = create_image_store(settings)
        store.clear()
    except LinkPreviewError as exc:
        logger.exception(
            "Clearing link images failed",
            extra={"error_code": exc.error_code, "details": exc.details},
        )
        return 1

    logger.info("Link image store cleared", extra={"backend": settings.backend})
    return 0


if __name__ == "__main__":
    sys.exit(clear_link_images())
