"""Thin adapter for interacting with S3-compatible object storage."""

from collections.abc import Iterator, Mapping, Sequence
from typing import Any, Protocol

import boto3
from botocore.config import Config

from linkpreview.core.models.settings import StoreSettings
from linkpreview.core.utils.constants import DEFAULT_REGION, IMAGE_BUCKET_NAME, MAX_DELETE_BATCH_SIZE


class _Boto3S3Client(Protocol):
    """Internal typing for boto3 S3 client (AWS-facing only)."""

    def head_bucket(self, *, Bucket: str) -> Any: ...

    def create_bucket(self, *, Bucket: str, **kwargs: Any) -> Any: ...

    def put_object(
        self,
        *,
        Bucket: str,
        Key: str,
        Body: bytes,
        ContentType: str,
    ) -> Any: ...

    def get_object(self, *, Bucket: str, Key: str) -> Mapping[str, Any]: ...

    def delete_objects(self, *, Bucket: str, Delete: Mapping[str, Any]) -> Mapping[str, Any]: ...

    def get_paginator(self, operation_name: str) -> Any: ...


class S3AdapterProtocol(Protocol):
    """Minimal S3 adapter protocol (store-facing)."""

    bucket: str

    def head_bucket(self) -> None: ...

    def create_bucket(self) -> None: ...

    def put_object(self, *, key: str, body: bytes, content_type: str) -> None: ...

    def get_object(self, *, key: str) -> Mapping[str, Any]: ...

    def iter_key_pages(self) -> Iterator[list[str]]: ...

    def delete_objects(self, *, keys: Sequence[str]) -> list[Mapping[str, Any]]: ...


def build_s3_client(settings: StoreSettings) -> _Boto3S3Client:
    """Create a boto3 S3 client for the configured endpoint.

    Path-style addressing is required by MinIO; every call is bounded by
    the configured connect and read timeouts.
    """
    config = Config(
        signature_version="s3v4",
        s3={"addressing_style": "path"},
        connect_timeout=settings.connect_timeout,
        read_timeout=settings.read_timeout,
        retries={"mode": "standard", "total_max_attempts": settings.max_attempts},
    )
    client: _Boto3S3Client = boto3.client(
        "s3",
        endpoint_url=settings.endpoint_url,
        aws_access_key_id=settings.access_key,
        aws_secret_access_key=settings.secret_key,
        region_name=settings.region,
        config=config,
    )
    return client


class S3Adapter:
    """Low-level S3 operations on the image bucket (no error handling).

    This adapter:
    - Wraps a boto3 S3 client bound to a single bucket
    - Does NOT handle errors (lets them bubble up)
    - The store implementation catches and translates errors
    """

    def __init__(
        self,
        client: _Boto3S3Client,
        *,
        bucket: str = IMAGE_BUCKET_NAME,
        region: str = DEFAULT_REGION,
    ) -> None:
        self.bucket = bucket
        self._region = region
        self._client = client

    @classmethod
    def from_settings(cls, settings: StoreSettings) -> "S3Adapter":
        return cls(build_s3_client(settings), region=settings.region)

    def head_bucket(self) -> None:
        """Check the bucket exists.
        Raises boto3 exceptions - caught by the store implementation.
        """
        self._client.head_bucket(Bucket=self.bucket)

    def create_bucket(self) -> None:
        """Create the bucket, pinning its location outside us-east-1."""
        kwargs: dict[str, Any] = {}
        if self._region != DEFAULT_REGION:
            kwargs["CreateBucketConfiguration"] = {"LocationConstraint": self._region}

        self._client.create_bucket(Bucket=self.bucket, **kwargs)

    def put_object(self, *, key: str, body: bytes, content_type: str) -> None:
        self._client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=body,
            ContentType=content_type,
        )

    def get_object(self, *, key: str) -> Mapping[str, Any]:
        """Fetch object from S3.
        Raises boto3 exceptions - caught by the store implementation.
        """
        return self._client.get_object(Bucket=self.bucket, Key=key)

    def iter_key_pages(self) -> Iterator[list[str]]:
        """Yield the bucket's object keys, one list per listing page.

        Pages hold at most 1000 keys, which matches the bulk delete limit.
        Empty pages are skipped.
        """
        paginator = self._client.get_paginator("list_objects_v2")
        pages = paginator.paginate(Bucket=self.bucket, PaginationConfig={"PageSize": MAX_DELETE_BATCH_SIZE})
        for page in pages:
            keys = [obj["Key"] for obj in page.get("Contents", [])]
            if keys:
                yield keys

    def delete_objects(self, *, keys: Sequence[str]) -> list[Mapping[str, Any]]:
        """Bulk delete ``keys`` and return the per-key errors S3 reported."""
        response = self._client.delete_objects(
            Bucket=self.bucket,
            Delete={"Objects": [{"Key": key} for key in keys], "Quiet": True},
        )
        return list(response.get("Errors", []))
