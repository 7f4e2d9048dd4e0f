"""
Pytest configuration and fixtures for link preview image store tests.
Provides AWS mocking, the image bucket, and sample images.
"""

from collections.abc import Callable
from io import BytesIO
import os
from typing import Any

import boto3
from botocore.exceptions import ClientError
from moto import mock_aws
from PIL import Image
import pytest

from linkpreview.core.infrastructure.adapters.s3_adapter import S3Adapter
from linkpreview.core.utils.constants import IMAGE_BUCKET_NAME

os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("AWS_SECURITY_TOKEN", "testing")
os.environ.setdefault("AWS_SESSION_TOKEN", "testing")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "true")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "link-preview-images")


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name="us-east-1")


@pytest.fixture(scope="function")
def s3_bucket(s3_client):
    """
    Create the image bucket for tests that need it to exist beforehand.

    moto discards the bucket when the mock context exits.
    """
    try:
        s3_client.head_bucket(Bucket=IMAGE_BUCKET_NAME)
    except ClientError:
        s3_client.create_bucket(Bucket=IMAGE_BUCKET_NAME)

    yield s3_client


@pytest.fixture
def s3_adapter(s3_client) -> S3Adapter:
    """Adapter bound to the mocked client (bucket not created)."""
    return S3Adapter(s3_client)


@pytest.fixture
def s3_put_object(s3_client) -> Callable[[str, bytes], dict[str, Any]]:
    """
    Helper to upload raw bytes to the image bucket.

    Usage:
        s3_put_object("abc", jpeg_bytes)
    """

    def _put(key: str, body: bytes) -> dict[str, Any]:
        response: dict[str, Any] = s3_client.put_object(Bucket=IMAGE_BUCKET_NAME, Key=key, Body=body)
        return response

    return _put


@pytest.fixture
def s3_get_object(s3_client) -> Callable[[str], dict[str, Any]]:
    """Helper returning the raw get_object response for a key."""

    def _get(key: str) -> dict[str, Any]:
        response: dict[str, Any] = s3_client.get_object(Bucket=IMAGE_BUCKET_NAME, Key=key)
        return response

    return _get


@pytest.fixture
def s3_list_keys(s3_client) -> Callable[[], list[str]]:
    """Helper listing every key in the image bucket."""

    def _list() -> list[str]:
        response = s3_client.list_objects_v2(Bucket=IMAGE_BUCKET_NAME)
        return [obj["Key"] for obj in response.get("Contents", [])]

    return _list


@pytest.fixture
def red_square() -> Image.Image:
    """Solid red 32x32 RGB image."""
    return Image.new("RGB", (32, 32), (255, 0, 0))


@pytest.fixture
def photo_image() -> Image.Image:
    """64x48 RGB gradient standing in for a photograph."""
    image = Image.new("RGB", (64, 48))
    image.putdata(
        [(x * 4, y * 5, (x + y) * 2) for y in range(48) for x in range(64)]
    )
    return image


@pytest.fixture
def sample_jpeg_binary(photo_image) -> bytes:
    buffer = BytesIO()
    photo_image.save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def sample_png_binary(red_square) -> bytes:
    buffer = BytesIO()
    red_square.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture(scope="session")
def oversized_png_binary() -> bytes:
    """Small PNG whose pixel count exceeds Pillow's decompression bomb limit."""
    buffer = BytesIO()
    Image.new("1", (14000, 14000)).save(buffer, format="PNG")
    return buffer.getvalue()
